# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""统一日志出口

日志初始化由 users_api.common.logging.setup_logging() 负责。
这里只包一层：每次调用时读取当前 request_id，与 meta 一起挂到 LogRecord 上，
由 JsonFormatter 输出。
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from users_api.common.request_context import get_request_id


class StructuredLogger:
    def __init__(self, name: str = "users_api") -> None:
        self._logger = logging.getLogger(name)

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, message: str, meta: Optional[Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        try:
            self._logger.log(
                level,
                message,
                extra={"meta": meta, "request_id": get_request_id()},
                stacklevel=3,
            )
        except Exception:  # noqa: BLE001
            # 日志永远不能影响业务
            logging.getLogger(__name__).debug("log call failed", exc_info=True)

    def debug(self, message: str, meta: Optional[Any] = None) -> None:
        self._log(logging.DEBUG, message, meta)

    def info(self, message: str, meta: Optional[Any] = None) -> None:
        self._log(logging.INFO, message, meta)

    def warn(self, message: str, meta: Optional[Any] = None) -> None:
        self._log(logging.WARNING, message, meta)

    warning = warn

    def error(self, message: str, meta: Optional[Any] = None) -> None:
        self._log(logging.ERROR, message, meta)


def get_logger(name: str) -> StructuredLogger:
    return StructuredLogger(name)
