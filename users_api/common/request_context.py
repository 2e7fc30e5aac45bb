# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""请求上下文

基于 ContextVar：每个 asyncio task 拥有自己的 context 副本，
await / create_task / call_later / to_thread 都会沿用当前 context，
因此同一请求链路上的任何位置都能拿到 request_id，并发请求之间互不可见。
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterator, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class RequestContextStore:
    request_id: str


_store_ctx: ContextVar[Optional[RequestContextStore]] = ContextVar("request_context", default=None)


def new_request_id() -> str:
    return str(uuid.uuid4())


class RequestContext:
    """进程内唯一的请求上下文存储"""

    @contextmanager
    def scope(self, request_id: str) -> Iterator[RequestContextStore]:
        store = RequestContextStore(request_id=request_id)
        token = _store_ctx.set(store)
        try:
            yield store
        finally:
            _store_ctx.reset(token)

    def run(self, request_id: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """在 request_id 作用域内执行同步函数，返回值 / 异常原样透传"""
        with self.scope(request_id):
            return fn(*args, **kwargs)

    async def run_async(
        self,
        request_id: str,
        fn: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """在 request_id 作用域内执行协程函数，作用域覆盖其中所有挂起点"""
        with self.scope(request_id):
            return await fn(*args, **kwargs)

    def get_store(self) -> Optional[RequestContextStore]:
        return _store_ctx.get()

    def get_request_id(self) -> Optional[str]:
        store = _store_ctx.get()
        return store.request_id if store is not None else None


request_context = RequestContext()


def get_request_id() -> Optional[str]:
    return request_context.get_request_id()
