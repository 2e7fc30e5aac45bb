# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""请求 ID 诊断接口

用于验证 request_id 能穿过多层 await 传到日志里，以及各级别日志都带 request_id。
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from users_api.common.request_context import get_request_id
from users_api.infra.logger import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/v1/test-request-id", tags=["diagnostics"])


async def simulate_async_operation(delay: float = 0.1) -> None:
    await asyncio.sleep(delay)
    log.info("Async operation completed", {"operation": "simulate"})


async def simulate_database_operation(should_fail: bool) -> str:
    await asyncio.sleep(0.05)
    if should_fail:
        log.error("Database operation failed", {"operation": "database"})
        raise ConnectionError("Database connection error")
    log.debug("Database operation successful", {"operation": "database"})
    return "Database result"


@router.get("")
async def request_id_echo(delay: float = Query(0.1, ge=0, le=1)) -> dict:
    log.info("Request received on test endpoint")
    request_id = get_request_id()
    await simulate_async_operation(delay)
    return {
        "message": "Request ID logging test",
        "requestId": request_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/all-levels")
def all_levels() -> dict:
    log.debug("Debug message from test endpoint", {"level": "debug"})
    log.info("Info message from test endpoint", {"level": "info"})
    log.warn("Warning message from test endpoint", {"level": "warn"})
    log.error("Error message from test endpoint", {"level": "error"})
    return {"message": "All log levels tested", "requestId": get_request_id()}


@router.get("/error")
async def handled_error():
    log.info("Starting potentially failing operation")
    try:
        await simulate_database_operation(True)
        return {"success": True}
    except ConnectionError as e:
        log.error("Error caught in route handler", {"error": str(e)})
        return JSONResponse(
            status_code=500,
            content={"message": "Operation failed", "requestId": get_request_id()},
        )
