# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from users_api.domain import models


class UserRepository(ABC):
    """用户持久化端口

    实现方负责把底层驱动异常翻译成 AppError（唯一约束冲突 -> ConflictError，
    其它数据库异常 -> DatabaseError），不允许原始驱动异常向上泄漏。
    """

    @abstractmethod
    def create(self, *, name: str, email: str) -> models.User:
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> List[models.User]:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[models.User]:
        raise NotImplementedError

    @abstractmethod
    def update(self, user_id: str, *, name: Optional[str] = None, email: Optional[str] = None) -> Optional[models.User]:
        raise NotImplementedError

    @abstractmethod
    def delete(self, user_id: str) -> bool:
        raise NotImplementedError
