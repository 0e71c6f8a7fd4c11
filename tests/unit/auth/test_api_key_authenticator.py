"""Tests for API key comparison."""

from stockroom.core.errors import ErrorKind
from stockroom.infrastructure.auth import (
    API_KEY_REQUIRED_MESSAGE,
    INVALID_API_KEY_MESSAGE,
    authenticate_api_key,
)


def test_matching_key_is_allowed():
    assert authenticate_api_key("secret", "secret") is None


def test_missing_key():
    failure = authenticate_api_key(None, "secret")
    assert failure.kind == ErrorKind.UNAUTHENTICATED
    assert failure.message == API_KEY_REQUIRED_MESSAGE == "API key is required"


def test_empty_key_counts_as_missing():
    assert authenticate_api_key("", "secret").message == API_KEY_REQUIRED_MESSAGE


def test_wrong_key():
    failure = authenticate_api_key("guess", "secret")
    assert failure.status_code == 401
    assert failure.message == INVALID_API_KEY_MESSAGE == "Invalid API key"


def test_no_configured_key_rejects_everything():
    assert authenticate_api_key("anything", None).message == INVALID_API_KEY_MESSAGE
    assert authenticate_api_key("anything", "").message == INVALID_API_KEY_MESSAGE
