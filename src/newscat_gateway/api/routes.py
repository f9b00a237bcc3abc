"""
NewsCat Gateway API Routes
Validates inbound parameters, calls the upstream client and hands the result
to the response composer. Failures are raised as GatewayError and rendered by
the application's exception handlers.
"""
import logging
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import FileResponse, JSONResponse

from newscat_gateway.api import envelope
from newscat_gateway.core.config import Settings
from newscat_gateway.core.static_site import resolve_index_page
from newscat_gateway.core.upstream import UpstreamClient
from newscat_gateway.core.validation import validate_search_query, validate_status_code
from newscat_gateway.models.api import (
    ErrorResponse,
    HealthResponse,
    HttpCatResponse,
    NewsSearchResponse,
)

logger = logging.getLogger(__name__)

# Create API router
router = APIRouter()


def get_app_settings(request: Request) -> Settings:
    """
    Dependency injection for the settings the application was built with
    """
    return request.app.state.settings


async def get_upstream_client(request: Request) -> AsyncIterator[UpstreamClient]:
    """
    Dependency injection for the upstream client
    Returns a new client for each request and closes it when the request ends
    """
    async with UpstreamClient(
        settings=request.app.state.settings,
        transport=request.app.state.upstream_transport,
    ) as client:
        yield client


@router.get("/health",
           tags=["health"],
           summary="Health Check",
           description="Check if the gateway is running and whether NewsAPI is configured",
           response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)):
    """Health check endpoint with basic system information"""
    return envelope.health_response(settings)


@router.get("/news",
           tags=["news"],
           summary="Search News",
           description="Search NewsAPI for articles matching a term",
           response_model=NewsSearchResponse,
           responses={
               400: {"model": ErrorResponse}, 401: {"model": ErrorResponse},
               426: {"model": ErrorResponse}, 429: {"model": ErrorResponse},
               500: {"model": ErrorResponse}, 502: {"model": ErrorResponse},
           })
async def search_news(
    q: Optional[str] = Query(default=None, description="Search term"),
    settings: Settings = Depends(get_app_settings),
    client: UpstreamClient = Depends(get_upstream_client),
):
    """Search news through NewsAPI"""
    query = validate_search_query(q)
    result = await client.fetch_news(query, settings.NEWS_API_KEY)
    return envelope.news_response(result, query)


async def _image_by_code(raw_code: Optional[str], settings: Settings,
                         client: UpstreamClient) -> JSONResponse:
    code = validate_status_code(raw_code, strict=settings.STRICT_CODE_FORMAT)
    result = await client.check_image_exists(code)
    return envelope.httpcat_response(result)


@router.get("/httpcat/{code}",
           tags=["httpcat"],
           summary="HTTP Cat Image",
           description="Resolve the http.cat image for a status code",
           response_model=HttpCatResponse,
           responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}})
async def httpcat_by_path(
    code: str,
    settings: Settings = Depends(get_app_settings),
    client: UpstreamClient = Depends(get_upstream_client),
):
    """Status-code image, code in the path"""
    return await _image_by_code(code, settings, client)


@router.get("/httpcat",
           tags=["httpcat"],
           summary="HTTP Cat Image (query form)",
           response_model=HttpCatResponse,
           responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}})
async def httpcat_by_query(
    code: Optional[str] = Query(default=None, description="HTTP status code"),
    settings: Settings = Depends(get_app_settings),
    client: UpstreamClient = Depends(get_upstream_client),
):
    """Status-code image, code in the query string"""
    return await _image_by_code(code, settings, client)


@router.get("/api", tags=["docs"], summary="API Info")
async def api_info():
    """Static description of the available operations"""
    return envelope.api_description_response()


@router.get("/", tags=["docs"], include_in_schema=False)
async def index(settings: Settings = Depends(get_app_settings)):
    """Serve the front-end page, or an endpoint listing when there is none"""
    index_page = resolve_index_page(settings.INDEX_CANDIDATES)
    if index_page is None:
        logger.debug("No index page found", extra={"candidates": settings.INDEX_CANDIDATES})
        return envelope.index_fallback_response()
    return FileResponse(index_page)
