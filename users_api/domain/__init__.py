# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""
领域层：

- models: ORM 实体（User）
- schemas: Pydantic 请求/响应模型
- repositories: 持久化端口（UserRepository）
"""
from . import models, repositories, schemas  # noqa: F401

__all__ = ["models", "repositories", "schemas"]
