# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging
import socket
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from pythonjsonlogger import jsonlogger

from users_api.common.request_context import get_request_id
from users_api.infra.config import settings

REDACTED = "[Redacted]"
_REDACT_USER_KEYS = frozenset({"name", "email", "password"})

_LEVEL_NAMES = {
    "WARNING": "WARN",
    "CRITICAL": "ERROR",
}

TEXT_FORMAT = "[%(asctime)s - %(levelname)s - request=%(trace)s - %(name)s - %(message)s]"

_HOSTNAME = socket.gethostname()


def redact(value: Any, *, under_user: bool = False) -> Any:
    """user 节点下的 name / email / password 脱敏"""
    if isinstance(value, Mapping):
        out: Dict[Any, Any] = {}
        for k, v in value.items():
            if under_user and k in _REDACT_USER_KEYS:
                out[k] = REDACTED
            else:
                out[k] = redact(v, under_user=(k == "user"))
        return out
    if isinstance(value, (list, tuple)):
        return [redact(v) for v in value]
    return value


class RequestIdFilter(logging.Filter):
    """给每条日志补上当前请求 ID（第三方 logger 同样生效）"""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        if getattr(record, "request_id", None) is None:
            record.request_id = get_request_id()
        record.trace = record.request_id or "-"
        return True


class JsonFormatter(jsonlogger.JsonFormatter):
    """单行 JSON 输出：level / timestamp / hostname / process_id / logger / message / requestId / meta"""

    def __init__(self) -> None:
        super().__init__("%(message)s", json_ensure_ascii=False)

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        # extra 里的内部字段不原样输出
        request_id = log_record.pop("request_id", None)
        log_record.pop("trace", None)
        meta = log_record.pop("meta", None)

        log_record["level"] = _LEVEL_NAMES.get(record.levelname, record.levelname)
        log_record["timestamp"] = (
            datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )
        log_record["hostname"] = _HOSTNAME
        log_record["process_id"] = record.process
        log_record["logger"] = record.name

        if request_id:
            log_record["requestId"] = request_id

        if meta is not None:
            try:
                log_record["meta"] = redact(meta)
            except RecursionError:
                log_record["meta"] = repr(meta)


def build_formatter(fmt: str) -> logging.Formatter:
    if fmt.lower() == "text":
        return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    return JsonFormatter()


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """初始化全局日志"""
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(build_formatter(fmt or settings.LOG_FORMAT))
        root.addHandler(handler)

    # 给现有 handler 全部加 filter
    for h in root.handlers:
        has_filter = any(isinstance(f, RequestIdFilter) for f in getattr(h, "filters", []))
        if not has_filter:
            h.addFilter(RequestIdFilter())
