"""
Common API Models

Envelope shapes shared by every endpoint. Field names follow the public JSON
contract consumed by the browser front-end.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Error envelope: ``error`` plus optional hint fields."""
    error: str = Field(..., description="Human-readable error message")
    code: Optional[Union[str, int]] = Field(default=None, description="Error code for programmatic handling")
    mensaje: Optional[str] = Field(default=None, description="Additional detail")
    ejemplo: Optional[str] = Field(default=None, description="Example of a valid request")
    hint: Optional[str] = Field(default=None, description="How to fix the problem")
    path: Optional[str] = Field(default=None, description="Requested path")
    metodo: Optional[str] = Field(default=None, description="Requested HTTP method")


class NotFoundResponse(BaseModel):
    """Catch-all 404 envelope."""
    error: str = Field(default="Endpoint no encontrado")
    path: str = Field(..., description="Requested path")
    metodo: str = Field(..., description="Requested HTTP method")
    sugerencias: List[str] = Field(default_factory=list, description="Valid example requests")


class HealthResponse(BaseModel):
    """Health check response format."""
    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(default="ok", description="Process status")
    mensaje: str = Field(default="Servidor funcionando correctamente")
    api_key_configured: bool = Field(..., alias="apiKeyConfigurada", description="Whether NEWS_API_KEY is set")
    timestamp: str = Field(..., description="ISO-8601 timestamp")
    environment: str = Field(..., description="Deployment profile")


__all__ = [
    "ErrorResponse",
    "NotFoundResponse",
    "HealthResponse",
]
