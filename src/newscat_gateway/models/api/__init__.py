"""API response envelope models."""

from .common import ErrorResponse, HealthResponse, NotFoundResponse
from .httpcat import HttpCatResponse
from .news import NewsSearchResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "NotFoundResponse",
    "HttpCatResponse",
    "NewsSearchResponse",
]
