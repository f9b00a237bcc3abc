"""
Response composer.

Every body the gateway sends is built here, either as a success envelope
(``success: true`` plus domain fields) or as an error envelope (``error`` plus
optional hints). Route handlers and exception handlers never build JSON.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import status
from fastapi.responses import JSONResponse

from newscat_gateway import __version__
from newscat_gateway.core.config import Settings
from newscat_gateway.core.exceptions import GatewayError
from newscat_gateway.core.upstream import ImageResult, NewsResult
from newscat_gateway.models.api import (
    ErrorResponse,
    HealthResponse,
    HttpCatResponse,
    NewsSearchResponse,
    NotFoundResponse,
)

SUGGESTIONS = ["/health", "/news?q=tecnologia", "/httpcat/404", "/api"]

INTERNAL_ERROR_MESSAGE = "Error interno del servidor"
INTERNAL_ERROR_DETAIL = "Ocurrió un error inesperado al procesar la solicitud"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def news_response(result: NewsResult, query: str) -> JSONResponse:
    """Success envelope for a news search."""
    body = NewsSearchResponse(
        total_results=result.total_results,
        articles=result.articles,
        query=query,
    )
    return JSONResponse(content=body.model_dump(by_alias=True))


def httpcat_response(result: ImageResult) -> JSONResponse:
    """Success envelope for a confirmed status-code image."""
    body = HttpCatResponse(
        code=result.code,
        image_url=result.image_url,
        message=f"HTTP Status {result.code}",
    )
    return JSONResponse(content=body.model_dump(by_alias=True))


def health_response(settings: Settings) -> JSONResponse:
    body = HealthResponse(
        api_key_configured=settings.news_api_key_configured,
        timestamp=_timestamp(),
        environment=settings.ENVIRONMENT,
    )
    return JSONResponse(content=body.model_dump(by_alias=True))


def error_response(exc: GatewayError, path: Optional[str] = None,
                   method: Optional[str] = None) -> JSONResponse:
    """Error envelope for a gateway error, using the error's own status."""
    body = ErrorResponse(
        error=exc.message,
        code=exc.code,
        mensaje=exc.mensaje,
        ejemplo=exc.ejemplo,
        hint=exc.hint,
        path=path,
        metodo=method,
    )
    return JSONResponse(
        status_code=exc.get_http_status_code(),
        content=body.model_dump(exclude_none=True),
    )


def http_error_response(status_code: int, message: str, path: str, method: str) -> JSONResponse:
    """Error envelope for framework-level HTTP errors other than 404."""
    body = ErrorResponse(error=message, path=path, metodo=method)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def not_found_response(path: str, method: str) -> JSONResponse:
    body = NotFoundResponse(path=path, metodo=method, sugerencias=list(SUGGESTIONS))
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=body.model_dump())


def internal_error_response(path: str) -> JSONResponse:
    """Sanitized 500; the underlying exception text never reaches the client."""
    body = ErrorResponse(error=INTERNAL_ERROR_MESSAGE, mensaje=INTERNAL_ERROR_DETAIL, path=path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(exclude_none=True),
    )


def api_description() -> Dict[str, Any]:
    """Static description of the public operations."""
    return {
        "nombre": "NewsCat Gateway",
        "version": __version__,
        "endpoints": {
            "health": {
                "metodo": "GET",
                "ruta": "/health",
                "descripcion": "Verificar estado del servidor"
            },
            "news": {
                "metodo": "GET",
                "ruta": "/news?q=termino",
                "descripcion": "Buscar noticias por término",
                "ejemplo": "/news?q=tecnologia"
            },
            "httpcat": {
                "metodo": "GET",
                "ruta": "/httpcat/:code",
                "descripcion": "Obtener imagen HTTP Cat",
                "ejemplo": "/httpcat/404"
            }
        },
        "status": "online",
        "timestamp": _timestamp(),
    }


def api_description_response() -> JSONResponse:
    return JSONResponse(content=api_description())


def index_fallback_response() -> JSONResponse:
    """Body for ``/`` when no front-end index page is available."""
    return JSONResponse(content={
        "mensaje": "API Backend funcionando",
        "endpoints": [
            "GET /health - Estado del servidor",
            "GET /api - Información de la API",
            "GET /news?q=termino - Buscar noticias",
            "GET /httpcat/:code - HTTP Cat"
        ],
        "docs": "/api"
    })
