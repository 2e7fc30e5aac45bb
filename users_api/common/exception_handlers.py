# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""异常 -> 标准响应

响应体统一为 {"errors": [{"message": ..., "context"?: {...}}]}，
内部细节（堆栈 / 原始异常信息）只进日志，不进响应。
"""

from __future__ import annotations

import traceback
from typing import Any, Dict, List

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from users_api.common.errors import AppError, BadRequestError
from users_api.infra.logger import get_logger

log = get_logger("users_api.errors")

GENERIC_ERROR_MESSAGE = "Something went wrong"


def _err_payload(errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"errors": errors}


def _stack(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def render_app_error(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(_err_payload(exc.errors)))


def render_generic_error() -> JSONResponse:
    return JSONResponse(status_code=500, content=_err_payload([{"message": GENERIC_ERROR_MESSAGE}]))


def translate_error(exc: Exception) -> JSONResponse:
    """把任意异常翻译成响应，并按 AppError.logging 决定是否记录"""
    if isinstance(exc, AppError):
        if exc.logging:
            log.error(
                "request failed",
                {"code": exc.status_code, "errors": exc.errors, "stack": _stack(exc)},
            )
        return render_app_error(exc)

    log.error("unhandled error", {"error": str(exc), "stack": _stack(exc)})
    return render_generic_error()


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: ARG001
    fields = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]
    err = BadRequestError("Invalid request", context={"fields": fields}, logging=False)
    return render_app_error(err)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # noqa: ARG001
    return JSONResponse(
        status_code=exc.status_code,
        content=_err_payload([{"message": str(exc.detail)}]),
        headers=getattr(exc, "headers", None),
    )
