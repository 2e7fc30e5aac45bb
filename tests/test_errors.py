import pytest

from users_api.common.errors import AppError, BadRequestError, ConflictError, DatabaseError, NotFoundError


@pytest.mark.parametrize(
    "cls, message, code, logging_",
    [
        (BadRequestError, "Bad Request", 400, True),
        (NotFoundError, "Not Found", 404, False),
        (ConflictError, "Conflict", 409, False),
        (DatabaseError, "Database Error", 500, True),
    ],
)
def test_defaults(cls, message, code, logging_):
    err = cls()
    assert err.message == message
    assert err.status_code == code
    assert err.logging is logging_
    assert err.context == {}
    assert err.errors == [{"message": message}]
    assert str(err) == message


@pytest.mark.parametrize("cls", [BadRequestError, NotFoundError, ConflictError, DatabaseError])
def test_explicit_values_are_kept(cls):
    ctx = {"field": "email", "reason": "taken"}
    err = cls("custom message", code=422, context=ctx, logging=False)
    assert err.message == "custom message"
    assert err.status_code == 422
    assert err.logging is False
    assert err.context is ctx
    assert err.errors == [{"message": "custom message", "context": ctx}]


def test_explicit_logging_true_on_quiet_variant():
    assert ConflictError(logging=True).logging is True


def test_empty_message_is_not_replaced_by_default():
    assert BadRequestError("").message == ""


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        AppError("boom")


@pytest.mark.parametrize("code", [99, 600, 0, -1, True])
def test_invalid_status_code_rejected(code):
    with pytest.raises(ValueError):
        BadRequestError(code=code)


def test_variants_are_exceptions():
    with pytest.raises(AppError) as exc_info:
        raise ConflictError("User already exists in database")
    assert exc_info.value.status_code == 409
    assert exc_info.value.errors == [{"message": "User already exists in database"}]
