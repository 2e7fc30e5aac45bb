# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import List, Optional

from users_api.domain import models, schemas
from users_api.domain.repositories import UserRepository
from users_api.infra.logger import get_logger

log = get_logger(__name__)


class UserUsecase:
    """用户域：只编排，不碰 HTTP / SQL"""

    def create_user(self, repo: UserRepository, *, req: schemas.UserCreateRequest) -> models.User:
        user = repo.create(name=req.name, email=req.email)
        log.info("user registered", {"user_id": user.id})
        return user

    def list_users(self, repo: UserRepository) -> List[models.User]:
        return repo.find_all()

    def get_user(self, repo: UserRepository, *, user_id: str) -> Optional[models.User]:
        return repo.find_by_id(user_id)

    def update_user(
        self,
        repo: UserRepository,
        *,
        user_id: str,
        req: schemas.UserUpdateRequest,
    ) -> Optional[models.User]:
        user = repo.update(user_id, name=req.name, email=req.email)
        if user is not None:
            log.info("user updated", {"user_id": user_id, "fields": sorted(req.model_dump(exclude_none=True))})
        return user

    def delete_user(self, repo: UserRepository, *, user_id: str) -> bool:
        deleted = repo.delete(user_id)
        if deleted:
            log.info("user deleted", {"user_id": user_id})
        return deleted
