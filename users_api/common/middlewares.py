# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import re
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from users_api.common.exception_handlers import render_generic_error, translate_error
from users_api.common.request_context import new_request_id, request_context
from users_api.infra.config import settings
from users_api.infra.logger import get_logger

access_log = get_logger("users_api.access")
error_log = get_logger("users_api.errors")

_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._:-]{1,128}")


def access_level(status_code: int) -> str:
    if status_code >= 500:
        return "error"
    if status_code >= 400:
        return "warn"
    return "info"


class RequestCorrelationMiddleware(BaseHTTPMiddleware):
    """为每个请求建立 request_id 作用域，并输出一条访问日志"""

    def __init__(
        self,
        app: ASGIApp,
        header_name: Optional[str] = None,
        trust_header: Optional[bool] = None,
    ) -> None:
        super().__init__(app)
        self.header_name = header_name or settings.REQUEST_ID_HEADER
        self.trust_header = settings.TRUST_REQUEST_ID_HEADER if trust_header is None else trust_header

    def resolve_request_id(self, request: Request) -> str:
        if self.trust_header:
            inbound = request.headers.get(self.header_name)
            if inbound and _REQUEST_ID_RE.fullmatch(inbound):
                return inbound
        return new_request_id()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = self.resolve_request_id(request)
        request.state.request_id = request_id
        return await request_context.run_async(request_id, self._handle, request, call_next)

    async def _handle(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception:
            self._log_access(request, 500, started)
            raise

        response.headers[self.header_name] = request.state.request_id
        self._log_access(request, response.status_code, started)
        return response

    def _log_access(self, request: Request, status_code: int, started: float) -> None:
        log = getattr(access_log, access_level(status_code))
        log(
            "request completed",
            {
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )


class ErrorTranslationMiddleware:
    """捕获路由链路抛出的异常并转为标准响应

    必须装在 RequestCorrelationMiddleware 内侧，日志才能带上 request_id。
    每个响应只写一次：响应已开始后再出错，只记 warn，不再写第二次。
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def _send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, _send)
        except Exception as exc:  # noqa: BLE001
            try:
                response = translate_error(exc)
            except Exception as render_exc:  # noqa: BLE001
                error_log.error(
                    "error response rendering failed",
                    {"error": str(render_exc), "original": repr(exc)},
                )
                response = render_generic_error()
            if response_started:
                error_log.warn(
                    "response already started, error response suppressed",
                    {"status_code": response.status_code, "path": scope.get("path")},
                )
                return
            await response(scope, receive, send)
