"""Test configuration and settings."""

import pytest
from pydantic import ValidationError

from newscat_gateway.core.config import Settings

ENV_VARS = (
    "HOST", "PORT", "DEBUG", "ENVIRONMENT", "LOG_LEVEL", "LOG_FORMAT",
    "NEWS_API_KEY", "NEWS_PAGE_SIZE", "STRICT_CODE_FORMAT", "STRICT_STARTUP",
    "UPSTREAM_TIMEOUT", "HTTPCAT_CHECK_METHOD",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Test configuration settings."""

    def test_default_settings(self):
        """Test that default settings are loaded correctly."""
        settings = Settings(_env_file=None)

        assert settings.HOST == "127.0.0.1"
        assert settings.PORT == 3000
        assert settings.DEBUG is False
        assert settings.ENVIRONMENT == "development"
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_FORMAT == "json"
        assert settings.NEWS_API_KEY is None
        assert settings.NEWS_PAGE_SIZE == 10
        assert settings.UPSTREAM_TIMEOUT == 10.0
        assert settings.STRICT_CODE_FORMAT is False
        assert settings.STRICT_STARTUP is False
        assert settings.INDEX_CANDIDATES == ["index.html", "../index.html", "public/index.html"]

    def test_settings_from_env(self, monkeypatch):
        """Test that settings can be loaded from environment variables."""
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("NEWS_API_KEY", "abc123")
        monkeypatch.setenv("NEWS_PAGE_SIZE", "5")
        monkeypatch.setenv("STRICT_CODE_FORMAT", "true")
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings(_env_file=None)

        assert settings.PORT == 9000
        assert settings.NEWS_API_KEY == "abc123"
        assert settings.NEWS_PAGE_SIZE == 5
        assert settings.STRICT_CODE_FORMAT is True
        assert settings.ENVIRONMENT == "production"

    def test_page_size_limited_to_deployed_values(self):
        """Only 5 and 10 articles per page are accepted."""
        with pytest.raises(ValidationError, match="5 or 10"):
            Settings(_env_file=None, NEWS_PAGE_SIZE=7)

    def test_log_level_normalized(self):
        """Log level is upper-cased and validated."""
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="verbose")

    def test_check_method_normalized(self):
        """Image check method accepts head/get in any case."""
        assert Settings(_env_file=None, HTTPCAT_CHECK_METHOD="head").HTTPCAT_CHECK_METHOD == "HEAD"
        with pytest.raises(ValidationError):
            Settings(_env_file=None, HTTPCAT_CHECK_METHOD="POST")

    def test_blank_key_counts_as_missing(self):
        """A whitespace key is not a configured credential."""
        settings = Settings(_env_file=None, NEWS_API_KEY="   ")

        assert settings.NEWS_API_KEY is None
        assert settings.news_api_key_configured is False
        assert settings.masked_api_key is None

    def test_masked_api_key(self):
        """Only the first eight characters are exposed."""
        settings = Settings(_env_file=None, NEWS_API_KEY="0123456789abcdef")

        assert settings.news_api_key_configured is True
        assert settings.masked_api_key == "01234567..."
