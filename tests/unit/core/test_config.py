import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from stockroom.core.config import Settings, get_settings


def test_settings_defaults():
    """Test that settings load with correct defaults."""
    get_settings.cache_clear()

    with patch.dict(os.environ, {}, clear=True):
        settings = Settings(_env_file=None)

    assert settings.app_name == "Stockroom"
    assert settings.environment == "development"
    assert settings.debug is False
    assert settings.api_prefix == "/api"
    assert settings.api_key is None
    assert settings.api_key_header == "x-api-key"
    assert settings.default_page_size == 10
    assert settings.max_page_size == 100
    assert settings.is_development is True
    assert settings.is_production is False
    assert settings.is_testing is False


def test_settings_env_override():
    """Test that environment variables override defaults."""
    get_settings.cache_clear()

    with patch.dict(os.environ, {
        "STOCKROOM_ENVIRONMENT": "production",
        "STOCKROOM_DEBUG": "true",
        "STOCKROOM_PORT": "9000",
        "STOCKROOM_API_KEY": "secret",
    }):
        settings = Settings(_env_file=None)

        assert settings.environment == "production"
        assert settings.debug is True
        assert settings.port == 9000
        assert settings.api_key == "secret"
        assert settings.is_production is True


def test_api_key_header_is_lowercased():
    settings = Settings(_env_file=None, api_key_header=" X-API-Key ")
    assert settings.api_key_header == "x-api-key"


def test_cors_origins_from_comma_separated_string():
    settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_default_page_size_cannot_exceed_max():
    with pytest.raises(ValidationError, match="default_page_size"):
        Settings(_env_file=None, default_page_size=50, max_page_size=20)


def test_page_sizes_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, default_page_size=0)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()
    get_settings.cache_clear()
