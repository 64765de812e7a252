"""Test configuration module."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from linear_mcp.config import Settings, get_settings


def setup_module():
    """Clear settings cache before tests."""
    get_settings.cache_clear()


def teardown_module():
    """Clear settings cache after tests."""
    get_settings.cache_clear()


class TestSettings:
    """Test Settings class."""

    def setup_method(self):
        get_settings.cache_clear()

    def teardown_method(self):
        get_settings.cache_clear()

    def test_default_settings(self):
        """Only the API key is required; everything else has a default."""
        env_vars = {"LINEAR_API_KEY": "lin_api_abc", "ENVIRONMENT": "test"}
        with patch.dict(os.environ, env_vars, clear=True):
            settings = Settings()

        assert settings.linear_api_key == "lin_api_abc"
        assert settings.linear_api_url == "https://api.linear.app/graphql"
        assert settings.app_name == "linear-mcp"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.http_timeout == 30.0
        assert settings.http_max_connections == 20

    def test_environment_overrides(self):
        env_vars = {
            "LINEAR_API_KEY": "lin_api_abc",
            "ENVIRONMENT": "test",
            "DEBUG": "true",
            "LOG_LEVEL": "WARNING",
            "LINEAR_API_URL": "https://linear.example.test/graphql",
            "HTTP_TIMEOUT": "5",
        }
        with patch.dict(os.environ, env_vars, clear=True):
            settings = Settings()

        assert settings.debug is True
        assert settings.log_level == "WARNING"
        assert settings.linear_api_url == "https://linear.example.test/graphql"
        assert settings.http_timeout == 5.0

    def test_api_key_is_stripped(self):
        with patch.dict(os.environ, {"LINEAR_API_KEY": "  lin_api_abc  ", "ENVIRONMENT": "test"}, clear=True):
            assert Settings().linear_api_key == "lin_api_abc"

    def test_missing_api_key(self):
        with patch.dict(os.environ, {"ENVIRONMENT": "test"}, clear=True):
            with pytest.raises(ValidationError):
                Settings()

    def test_blank_api_key(self):
        with patch.dict(os.environ, {"LINEAR_API_KEY": "   ", "ENVIRONMENT": "test"}, clear=True):
            with pytest.raises(ValidationError, match="LINEAR_API_KEY environment variable is required"):
                Settings()

    def test_get_settings_is_cached(self):
        with patch.dict(os.environ, {"LINEAR_API_KEY": "lin_api_abc", "ENVIRONMENT": "test"}, clear=True):
            first = get_settings()
            second = get_settings()

        assert first is second
