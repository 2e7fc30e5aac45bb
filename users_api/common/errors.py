# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Any, ClassVar, Dict, List, Optional


class AppError(Exception):
    """异常统一

    只承载数据：message / status_code / logging / errors，
    由 ErrorTranslationMiddleware 消费一次并转为响应。
    """

    default_message: ClassVar[str] = "Application Error"
    default_status_code: ClassVar[int] = 500
    default_logging: ClassVar[bool] = True

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
        logging: Optional[bool] = None,
    ) -> None:
        if type(self) is AppError:
            raise TypeError("AppError is abstract, raise one of its subclasses")

        status_code = self.default_status_code if code is None else code
        if isinstance(status_code, bool) or not isinstance(status_code, int) or not 100 <= status_code <= 599:
            raise ValueError(f"invalid http status code: {status_code!r}")

        self._message = self.default_message if message is None else message
        self._status_code = status_code
        self._context: Dict[str, Any] = {} if context is None else context
        self._logging = self.default_logging if logging is None else logging
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def logging(self) -> bool:
        return self._logging

    @property
    def context(self) -> Dict[str, Any]:
        return self._context

    @property
    def errors(self) -> List[Dict[str, Any]]:
        item: Dict[str, Any] = {"message": self._message}
        # 空 context 不下发，保证响应体只有 message
        if self._context:
            item["context"] = self._context
        return [item]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self._message!r}, code={self._status_code})"


class BadRequestError(AppError):
    default_message = "Bad Request"
    default_status_code = 400


class NotFoundError(AppError):
    default_message = "Not Found"
    default_status_code = 404
    default_logging = False


class ConflictError(AppError):
    default_message = "Conflict"
    default_status_code = 409
    default_logging = False


class DatabaseError(AppError):
    default_message = "Database Error"
    default_status_code = 500
