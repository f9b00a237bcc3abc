"""Configuration management for NewsCat Gateway."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings for the proxy and its two upstreams."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Server configuration
    HOST: str = Field(default="127.0.0.1", description="Server host")
    PORT: int = Field(default=3000, description="Server port")
    DEBUG: bool = Field(default=False, description="Debug mode")
    ENVIRONMENT: str = Field(default="development", description="Deployment profile name")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Logging format: json or text")

    # Security settings
    ALLOWED_HOSTS: list[str] = Field(default_factory=lambda: ["*"], description="Allowed hosts for TrustedHostMiddleware")
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"], description="CORS allowed origins")

    # NewsAPI upstream
    NEWS_API_KEY: Optional[str] = Field(default=None, description="NewsAPI credential")
    NEWS_API_URL: str = Field(default="https://newsapi.org/v2/everything", description="NewsAPI search endpoint")
    NEWS_LANGUAGE: str = Field(default="es", description="Language filter sent to NewsAPI")
    NEWS_PAGE_SIZE: int = Field(default=10, description="Articles per search (5 or 10)")

    # http.cat upstream
    HTTPCAT_BASE_URL: str = Field(default="https://http.cat", description="Base URL of the status-code image service")
    HTTPCAT_CHECK_METHOD: str = Field(default="GET", description="Method used for the image existence check: HEAD or GET")
    STRICT_CODE_FORMAT: bool = Field(default=False, description="Require status codes to be exactly three ASCII digits")

    # Upstream transport
    UPSTREAM_TIMEOUT: float = Field(default=10.0, gt=0, le=120.0, description="Upstream request timeout in seconds")
    USER_AGENT: str = Field(default="NewsApp/1.0", description="User-Agent sent to upstreams")

    # Startup behaviour
    STRICT_STARTUP: bool = Field(default=False, description="Refuse to start when NEWS_API_KEY is missing")

    # Front-end index page, first existing candidate wins
    INDEX_CANDIDATES: list[str] = Field(
        default_factory=lambda: ["index.html", "../index.html", "public/index.html"],
        description="Ordered candidate paths for the front-end index page"
    )

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level"""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @field_validator('LOG_FORMAT')
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format"""
        valid_formats = ['json', 'text']
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of {valid_formats}")
        return v.lower()

    @field_validator('NEWS_PAGE_SIZE')
    @classmethod
    def validate_page_size(cls, v):
        """Only the two deployed page sizes are supported"""
        if v not in (5, 10):
            raise ValueError("News page size must be 5 or 10")
        return v

    @field_validator('HTTPCAT_CHECK_METHOD')
    @classmethod
    def validate_check_method(cls, v):
        """Validate image existence check method"""
        if v.upper() not in ('HEAD', 'GET'):
            raise ValueError("Image check method must be HEAD or GET")
        return v.upper()

    @field_validator('NEWS_API_KEY')
    @classmethod
    def blank_key_is_missing(cls, v):
        """Treat an empty or blank key the same as an unset one"""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def news_api_key_configured(self) -> bool:
        """Whether a NewsAPI credential is available."""
        return bool(self.NEWS_API_KEY)

    @property
    def masked_api_key(self) -> Optional[str]:
        """Credential prefix safe to write to logs."""
        if not self.NEWS_API_KEY:
            return None
        return f"{self.NEWS_API_KEY[:8]}..."

    @property
    def allowed_hosts(self) -> list[str]:
        """Get allowed hosts for TrustedHostMiddleware."""
        return self.ALLOWED_HOSTS

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS allowed origins."""
        return self.CORS_ORIGINS


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings (for dependency injection)"""
    return settings
