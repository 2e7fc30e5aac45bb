# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from fastapi import APIRouter


router = APIRouter(prefix="/v1/healthcheck", tags=["health"])


@router.get("")
def health_check() -> dict:
    return {"status": "ok"}
