# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""users-api：用户资源 CRUD 服务"""

__version__ = "1.0.0"
