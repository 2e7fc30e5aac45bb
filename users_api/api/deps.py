# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from users_api.application.users.usecase import UserUsecase
from users_api.domain.repositories import UserRepository
from users_api.infra.db import get_db
from users_api.infra.user_repository import SqlAlchemyUserRepository

_user_uc_singleton = UserUsecase()


def get_user_usecase() -> UserUsecase:
    return _user_uc_singleton


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return SqlAlchemyUserRepository(db)
