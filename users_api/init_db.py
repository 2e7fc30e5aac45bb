# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""建表脚本（开发 / 测试用，生产走 `alembic upgrade head`）

用法：python -m users_api.init_db [--drop]
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from users_api.domain import models  # noqa: F401
from users_api.infra.db import Base, engine


def init_db(bind: Engine = engine, *, drop: bool = False) -> List[str]:
    """按 ORM 元数据建表，返回建表后库里的表名"""
    if drop:
        Base.metadata.drop_all(bind=bind)
    Base.metadata.create_all(bind=bind)
    return sorted(inspect(bind).get_table_names())


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="create users-api tables")
    parser.add_argument("--drop", action="store_true", help="先删表再建")
    args = parser.parse_args(argv)

    print("Creating tables...")
    tables = init_db(drop=args.drop)
    print(f"Done: {', '.join(tables)}")


if __name__ == "__main__":
    main()
