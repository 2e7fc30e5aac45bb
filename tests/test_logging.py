import logging
from datetime import datetime
from io import StringIO

from pythonjsonlogger import jsonlogger

from users_api.common.logging import REDACTED, JsonFormatter, RequestIdFilter, build_formatter, redact
from users_api.common.request_context import request_context
from users_api.infra.logger import StructuredLogger, get_logger


def test_one_record_per_call_with_levels(logs):
    log = get_logger("users_api.test")
    log.debug("d", {"n": 1})
    log.info("i")
    log.warn("w")
    log.error("e", {"n": 4})

    records = logs.records(logger="users_api.test")
    assert [r["level"] for r in records] == ["DEBUG", "INFO", "WARN", "ERROR"]
    assert [r["message"] for r in records] == ["d", "i", "w", "e"]
    assert records[0]["meta"] == {"n": 1}
    assert "meta" not in records[1]


def test_request_id_is_stamped_inside_scope_only(logs):
    log = get_logger("users_api.test")
    request_context.run("req-42", log.info, "inside")
    log.info("outside")

    inside, outside = logs.records(logger="users_api.test")
    assert inside["requestId"] == "req-42"
    assert "requestId" not in outside


def test_record_shape(logs):
    get_logger("users_api.test").info("shape")
    rec = logs.records(logger="users_api.test")[0]
    assert {"level", "timestamp", "hostname", "process_id", "logger", "message"} <= set(rec)
    assert rec["timestamp"].endswith("Z")
    datetime.fromisoformat(rec["timestamp"].replace("Z", "+00:00"))


def test_user_fields_are_redacted(logs):
    log = get_logger("users_api.test")
    log.info(
        "user payload",
        {
            "user": {"id": "u1", "name": "A", "email": "a@x.com", "password": "secret"},
            "request": {"body": {"user": {"email": "b@x.com"}}},
        },
    )
    meta = logs.records(logger="users_api.test")[0]["meta"]
    assert meta["user"] == {"id": "u1", "name": REDACTED, "email": REDACTED, "password": REDACTED}
    assert meta["request"]["body"]["user"]["email"] == REDACTED


def test_redact_leaves_other_keys():
    value = {"name": "top-level name", "items": [{"user": {"name": "x"}}]}
    assert redact(value) == {"name": "top-level name", "items": [{"user": {"name": REDACTED}}]}


def test_logger_never_raises_on_unserializable_meta(logs):
    class Weird:
        def __repr__(self):
            return "<weird>"

    circular = {}
    circular["self"] = circular

    log = StructuredLogger("users_api.test")
    log.info("obj", {"obj": Weird()})
    log.info("circular", circular)

    records = logs.records(logger="users_api.test")
    assert records[0]["meta"] == {"obj": "<weird>"}
    assert records[1]["message"] == "circular"


def test_filter_stamps_third_party_loggers(logs):
    plain = logging.getLogger("thirdparty.lib")
    request_context.run("req-7", plain.warning, "from stdlib")
    rec = logs.records(logger="thirdparty.lib")[0]
    assert rec["requestId"] == "req-7"
    assert rec["level"] == "WARN"


def test_text_formatter_includes_request_id():
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(build_formatter("text"))
    handler.addFilter(RequestIdFilter())

    plain = logging.getLogger("users_api.text_test")
    plain.propagate = False
    plain.addHandler(handler)
    try:
        request_context.run("req-text", plain.error, "hello")
        plain.error("no request")
    finally:
        plain.removeHandler(handler)
        plain.propagate = True

    first, second = stream.getvalue().splitlines()
    assert "request=req-text" in first and "hello" in first
    assert "request=-" in second


def test_json_formatter_builds_on_python_json_logger():
    formatter = build_formatter("json")
    assert isinstance(formatter, JsonFormatter)
    assert isinstance(formatter, jsonlogger.JsonFormatter)


def test_internal_extra_fields_are_not_emitted(logs):
    request_context.run("req-json", get_logger("users_api.test").warn, "extra", {"k": "v"})
    get_logger("users_api.test").info("no meta")

    first, second = logs.records(logger="users_api.test")
    assert first["requestId"] == "req-json"
    assert first["level"] == "WARN"
    assert first["meta"] == {"k": "v"}
    assert not {"request_id", "trace"} & set(first)

    assert not {"requestId", "request_id", "trace", "meta"} & set(second)
