# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from users_api.common.errors import ConflictError, DatabaseError
from users_api.domain import models
from users_api.domain.repositories import UserRepository
from users_api.infra.logger import get_logger

log = get_logger(__name__)

USER_EXISTS_MESSAGE = "User already exists in database"

_MYSQL_DUP_ENTRY = 1062
_PG_UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """MySQL 1062 / Postgres 23505 / SQLite UNIQUE constraint failed"""
    orig = exc.orig
    if getattr(orig, "pgcode", None) == _PG_UNIQUE_VIOLATION or getattr(orig, "sqlstate", None) == _PG_UNIQUE_VIOLATION:
        return True
    args = getattr(orig, "args", ()) or ()
    if args and args[0] == _MYSQL_DUP_ENTRY:
        return True
    return "UNIQUE constraint failed" in str(orig)


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, db: Session) -> None:
        self.db = db

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if is_unique_violation(e):
                raise ConflictError(USER_EXISTS_MESSAGE) from e
            raise DatabaseError(context={"action": action}) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError(context={"action": action}) from e

    def create(self, *, name: str, email: str) -> models.User:
        user = models.User(name=name, email=email)
        self.db.add(user)
        self._commit("create")
        self.db.refresh(user)
        log.debug("user created", {"user_id": user.id})
        return user

    def find_all(self) -> List[models.User]:
        try:
            stmt = select(models.User).order_by(models.User.created_at.asc(), models.User.id.asc())
            return list(self.db.scalars(stmt).all())
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError(context={"action": "find_all"}) from e

    def find_by_id(self, user_id: str) -> Optional[models.User]:
        try:
            return self.db.get(models.User, user_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError(context={"action": "find_by_id"}) from e

    def update(self, user_id: str, *, name: Optional[str] = None, email: Optional[str] = None) -> Optional[models.User]:
        user = self.find_by_id(user_id)
        if user is None:
            return None

        if name is not None:
            user.name = name
        if email is not None:
            user.email = email

        self._commit("update")
        self.db.refresh(user)
        return user

    def delete(self, user_id: str) -> bool:
        user = self.find_by_id(user_id)
        if user is None:
            return False
        self.db.delete(user)
        self._commit("delete")
        return True
