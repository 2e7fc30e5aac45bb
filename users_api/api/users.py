# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from users_api.api.deps import get_user_repository, get_user_usecase
from users_api.application.users.usecase import UserUsecase
from users_api.domain import schemas
from users_api.domain.repositories import UserRepository


router = APIRouter(prefix="/v1/users", tags=["users"])

USER_NOT_FOUND = "User not found"


def _not_found() -> JSONResponse:
    # 404 直接在接口层返回，不走异常
    return JSONResponse(status_code=404, content={"errors": [{"message": USER_NOT_FOUND}]})


@router.get("", response_model=List[schemas.UserOut])
def list_users(
    repo: UserRepository = Depends(get_user_repository),
    uc: UserUsecase = Depends(get_user_usecase),
):
    return uc.list_users(repo)


@router.get("/{user_id}", response_model=schemas.UserOut, responses={404: {"description": USER_NOT_FOUND}})
def get_user(
    user_id: str,
    repo: UserRepository = Depends(get_user_repository),
    uc: UserUsecase = Depends(get_user_usecase),
):
    user = uc.get_user(repo, user_id=user_id)
    if user is None:
        return _not_found()
    return user


@router.post("", response_model=schemas.UserOut, status_code=201)
def create_user(
    req: schemas.UserCreateRequest,
    repo: UserRepository = Depends(get_user_repository),
    uc: UserUsecase = Depends(get_user_usecase),
):
    return uc.create_user(repo, req=req)


@router.put("/{user_id}", response_model=schemas.UserOut, responses={404: {"description": USER_NOT_FOUND}})
def update_user(
    user_id: str,
    req: schemas.UserUpdateRequest,
    repo: UserRepository = Depends(get_user_repository),
    uc: UserUsecase = Depends(get_user_usecase),
):
    user = uc.update_user(repo, user_id=user_id, req=req)
    if user is None:
        return _not_found()
    return user


@router.delete("/{user_id}", status_code=204, response_class=Response, responses={404: {"description": USER_NOT_FOUND}})
def delete_user(
    user_id: str,
    repo: UserRepository = Depends(get_user_repository),
    uc: UserUsecase = Depends(get_user_usecase),
):
    if not uc.delete_user(repo, user_id=user_id):
        return _not_found()
    return Response(status_code=204)
