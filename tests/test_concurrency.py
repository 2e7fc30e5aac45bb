"""并发请求下 request_id 的隔离

用 httpx.AsyncClient + ASGITransport 直接驱动 ASGI app，
多个请求在同一个事件循环里交错执行。
"""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient


@pytest.mark.asyncio
async def test_slow_and_fast_requests_keep_their_own_ids(app, logs):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        slow, fast = await asyncio.gather(
            client.get("/v1/test-request-id", params={"delay": 0.3}),
            client.get("/v1/test-request-id", params={"delay": 0}),
        )

    assert slow.status_code == 200 and fast.status_code == 200
    slow_id = slow.headers["X-Request-Id"]
    fast_id = fast.headers["X-Request-Id"]
    assert slow_id != fast_id
    assert slow.json()["requestId"] == slow_id
    assert fast.json()["requestId"] == fast_id

    records = logs.records(logger="users_api.api.diagnostics")
    for rid in (slow_id, fast_id):
        messages = [r["message"] for r in records if r.get("requestId") == rid]
        assert messages == ["Request received on test endpoint", "Async operation completed"]
    assert all(r.get("requestId") in (slow_id, fast_id) for r in records)

    # 快请求先结束，日志确实交错
    completed = [r["requestId"] for r in records if r["message"] == "Async operation completed"]
    assert completed == [fast_id, slow_id]


@pytest.mark.asyncio
async def test_many_concurrent_requests_are_isolated(app, logs):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        responses = await asyncio.gather(
            *[client.get("/v1/test-request-id", params={"delay": (i % 4) * 0.02}) for i in range(12)]
        )

    ids = [r.headers["X-Request-Id"] for r in responses]
    assert len(set(ids)) == len(ids)

    records = logs.records(logger="users_api.api.diagnostics")
    assert len(records) == 2 * len(ids)
    for rid in ids:
        assert len([r for r in records if r.get("requestId") == rid]) == 2

    access = logs.records(logger="users_api.access")
    assert sorted(r["requestId"] for r in access) == sorted(ids)


@pytest.mark.asyncio
async def test_request_id_stable_within_request(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/v1/test-request-id/all-levels")

    assert resp.json()["requestId"] == resp.headers["X-Request-Id"]
