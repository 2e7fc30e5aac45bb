import os

# 必须在导入 users_api 之前设置：engine 在模块导入时创建
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENABLE_DIAGNOSTIC_ROUTES"] = "true"
os.environ["TRUST_REQUEST_ID_HEADER"] = "false"

import json
import logging
from io import StringIO
from typing import Any, Dict, List, Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from users_api.common.logging import JsonFormatter, RequestIdFilter
from users_api.domain import models  # noqa: F401
from users_api.infra.db import Base, engine
from users_api.main import create_app


class LogCapture:
    """把 root logger 的输出按 JSON 行收集起来"""

    def __init__(self) -> None:
        self.stream = StringIO()
        self.handler = logging.StreamHandler(self.stream)
        self.handler.setFormatter(JsonFormatter())
        self.handler.addFilter(RequestIdFilter())

    def records(self, logger: Optional[str] = None, level: Optional[str] = None) -> List[Dict[str, Any]]:
        out = []
        for line in self.stream.getvalue().splitlines():
            if not line.strip():
                continue
            rec = json.loads(line)
            if logger is not None and rec.get("logger") != logger:
                continue
            if level is not None and rec.get("level") != level:
                continue
            out.append(rec)
        return out


@pytest.fixture(autouse=True)
def db_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def logs():
    root = logging.getLogger()
    capture = LogCapture()
    saved_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(capture.handler)
    try:
        yield capture
    finally:
        root.removeHandler(capture.handler)
        root.setLevel(saved_level)
        capture.stream.close()


@pytest.fixture
def app() -> FastAPI:
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
