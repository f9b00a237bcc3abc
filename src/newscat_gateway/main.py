"""Main entry point for the NewsCat Gateway application."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from newscat_gateway import __version__
from newscat_gateway.api import envelope
from newscat_gateway.api.routes import router
from newscat_gateway.core.config import Settings, get_settings
from newscat_gateway.core.exceptions import ConfigurationError, GatewayError
from newscat_gateway.core.logging import setup_logging

logger = logging.getLogger(__name__)

ENDPOINT_BANNER = {
    "health": "/health",
    "news": "/news?q=tecnologia",
    "httpcat": "/httpcat/404",
    "api_info": "/api",
}


def verify_startup(settings: Settings) -> None:
    """
    Check the NewsAPI credential before serving.

    With STRICT_STARTUP a missing key aborts startup; otherwise it is only
    reported and /news answers with a configuration error.
    """
    if settings.news_api_key_configured:
        logger.info(
            "Environment loaded",
            extra={"news_api_key": settings.masked_api_key}
        )
        return

    if settings.STRICT_STARTUP:
        logger.critical("NEWS_API_KEY is not configured and STRICT_STARTUP is enabled")
        raise ConfigurationError(
            "NEWS_API_KEY no está configurada",
            code="credential_missing",
            hint="Configura la variable de entorno NEWS_API_KEY"
        )

    logger.warning(
        "NEWS_API_KEY is not configured; /news will fail until it is set",
        extra={"steps": [
            "Copy .env.example to .env",
            "Add NEWS_API_KEY=<your key>",
            "Restart the server",
        ]}
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management
    Handles startup and shutdown procedures
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting NewsCat Gateway...")
    verify_startup(settings)

    logger.info(
        "Gateway configuration",
        extra={
            "environment": settings.ENVIRONMENT,
            "host": settings.HOST,
            "port": settings.PORT,
            "debug": settings.DEBUG,
            "log_level": settings.LOG_LEVEL,
            "news_page_size": settings.NEWS_PAGE_SIZE,
            "strict_code_format": settings.STRICT_CODE_FORMAT,
            "upstream_timeout": settings.UPSTREAM_TIMEOUT,
            "endpoints": ENDPOINT_BANNER,
        }
    )

    yield

    # Shutdown
    logger.info("Shutting down NewsCat Gateway...")


async def gateway_exception_handler(request: Request, exc: GatewayError):
    """Render domain errors with their own status and hints"""
    log = logger.error if exc.get_http_status_code() >= 500 else logger.info
    log(
        "Request failed",
        extra={"url": str(request.url), "method": request.method, "error": exc.to_dict()}
    )
    return envelope.error_response(exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Custom validation error handler"""
    logger.warning(
        "Request validation failed",
        extra={
            "url": str(request.url),
            "method": request.method,
            "errors": exc.errors()
        }
    )
    return envelope.http_error_response(
        status.HTTP_400_BAD_REQUEST,
        "Parámetros de la solicitud inválidos",
        request.url.path,
        request.method,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unmatched routes get the catch-all 404; other framework errors keep their status"""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        logger.info(
            "Endpoint not found",
            extra={"path": request.url.path, "method": request.method}
        )
        return envelope.not_found_response(request.url.path, request.method)

    message = "Método no permitido" if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED else str(exc.detail)
    return envelope.http_error_response(exc.status_code, message, request.url.path, request.method)


async def general_exception_handler(request: Request, exc: Exception):
    """General exception handler for unhandled errors"""
    logger.error(
        "Unhandled exception",
        extra={
            "url": str(request.url),
            "method": request.method,
            "error": str(exc)
        },
        exc_info=True
    )
    return envelope.internal_error_response(request.url.path)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Render unexpected errors inside the CORS layer so browsers can read the 500."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return await general_exception_handler(request, exc)


def create_app(settings: Optional[Settings] = None,
               transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the process-wide instance
        transport: Optional httpx transport for upstream calls (stubs in tests)
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="NewsCat Gateway",
        description="Proxy backend for NewsAPI search and http.cat status images",
        version=__version__,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check and system status"
            },
            {
                "name": "news",
                "description": "News search proxied to NewsAPI"
            },
            {
                "name": "httpcat",
                "description": "Status-code images from http.cat"
            },
            {
                "name": "docs",
                "description": "API description and front-end page"
            }
        ]
    )

    app.state.settings = settings
    app.state.upstream_transport = transport

    # Innermost: unexpected errors become the sanitized 500 before CORS headers are added
    app.add_middleware(UnhandledErrorMiddleware)

    # Add security middleware
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.allowed_hosts
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom exception handlers
    app.add_exception_handler(GatewayError, gateway_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(router)

    return app


# Create app instance for uvicorn to find
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    settings = get_settings()
    setup_logging(settings)

    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True,
        server_header=False,  # Don't reveal server info
        date_header=True,
    )


if __name__ == "__main__":
    main()
