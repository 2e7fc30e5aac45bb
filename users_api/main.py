# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from users_api import __version__
from users_api.api import diagnostics as diagnostics_api, health as health_api, users as user_api
from users_api.common.exception_handlers import http_error_handler, validation_error_handler
from users_api.common.logging import setup_logging
from users_api.common.middlewares import ErrorTranslationMiddleware, RequestCorrelationMiddleware
from users_api.infra.config import settings


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="users-api",
        version=__version__,
    )

    # ---------- middlewares / handlers ----------
    # 后加的在外层：RequestCorrelation -> ErrorTranslation -> 路由
    app.add_middleware(ErrorTranslationMiddleware)
    app.add_middleware(RequestCorrelationMiddleware)

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # 健康检查
    app.include_router(health_api.router)

    # 用户
    app.include_router(user_api.router)

    # 请求 ID 诊断
    if settings.ENABLE_DIAGNOSTIC_ROUTES:
        app.include_router(diagnostics_api.router)

    return app


app = create_app()
