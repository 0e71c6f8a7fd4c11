import pytest

from stockroom.core.errors import INTERNAL_ERROR_MESSAGE, ErrorKind, Failure


@pytest.mark.parametrize(
    "kind,status_code",
    [
        (ErrorKind.NOT_FOUND, 404),
        (ErrorKind.VALIDATION_FAILED, 400),
        (ErrorKind.UNAUTHENTICATED, 401),
        (ErrorKind.INTERNAL, 500),
    ],
)
def test_kind_status_codes(kind, status_code):
    assert kind.status_code == status_code


def test_validation_failure_joins_messages_in_order():
    failure = Failure.validation_failed(["Name is bad", "Price is bad"])

    assert failure.kind == ErrorKind.VALIDATION_FAILED
    assert failure.messages == ("Name is bad", "Price is bad")
    assert failure.message == "Name is bad, Price is bad"
    assert failure.status_code == 400


def test_single_message_constructors():
    assert Failure.not_found("missing").message == "missing"
    assert Failure.unauthenticated("nope").status_code == 401
    assert Failure.internal().message == INTERNAL_ERROR_MESSAGE


def test_failure_requires_a_message():
    with pytest.raises(ValueError):
        Failure.validation_failed([])


def test_failures_are_immutable():
    failure = Failure.not_found("missing")
    with pytest.raises(AttributeError):
        failure.kind = ErrorKind.INTERNAL
