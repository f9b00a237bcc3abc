"""
NewsCat Gateway Upstream Client
Talks to NewsAPI and http.cat and maps their answers onto gateway errors
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from newscat_gateway.core.config import Settings, get_settings
from newscat_gateway.core.exceptions import (
    CredentialMissingError,
    ImageNotFoundError,
    InvalidCredentialError,
    PlanLimitedError,
    RateLimitedError,
    TransportFailureError,
    UpstreamError,
    UpstreamGenericError,
)

logger = logging.getLogger(__name__)

DEFAULT_NEWS_ERROR = "Error al obtener noticias"

# NewsAPI status -> (exception class, user-facing message)
NEWS_STATUS_ERRORS = {
    401: (InvalidCredentialError, "API Key inválida o expirada. Verifica tu configuración"),
    429: (RateLimitedError, "Límite de solicitudes excedido. Intenta más tarde."),
    426: (PlanLimitedError, "Plan gratuito de NewsAPI limitado. Actualiza tu cuenta."),
}


@dataclass(frozen=True)
class NewsResult:
    """Successful NewsAPI search."""
    total_results: int
    articles: List[Dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class ImageResult:
    """Confirmed http.cat image for a status code."""
    code: int
    image_url: str


class UpstreamClient:
    """Client for the two upstream APIs, one instance per inbound request"""

    def __init__(self, settings: Optional[Settings] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        self.transport = transport
        self.http_client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry - initialize HTTP client"""
        self.http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.UPSTREAM_TIMEOUT),
            headers={"User-Agent": self.settings.USER_AGENT},
            follow_redirects=True,
            max_redirects=3,
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit - cleanup HTTP client"""
        if self.http_client:
            await self.http_client.aclose()
            self.http_client = None

    async def fetch_news(self, query: str, api_key: Optional[str]) -> NewsResult:
        """
        Search NewsAPI for articles matching ``query``

        Args:
            query: Validated, non-empty search term
            api_key: NewsAPI credential

        Returns:
            NewsResult with the upstream total and articles as received

        Raises:
            CredentialMissingError: No credential; nothing is sent upstream
            InvalidCredentialError, RateLimitedError, PlanLimitedError,
            UpstreamGenericError: Mapped non-2xx answers
            TransportFailureError: Upstream unreachable
        """
        if not api_key:
            logger.error("NEWS_API_KEY not configured")
            raise CredentialMissingError()
        self._ensure_client()

        params = {
            "q": query,
            "language": self.settings.NEWS_LANGUAGE,
            "pageSize": self.settings.NEWS_PAGE_SIZE,
            "apiKey": api_key,
        }

        logger.info(
            "Searching news",
            extra={"query": query, "page_size": self.settings.NEWS_PAGE_SIZE}
        )

        try:
            response = await self.http_client.get(self.settings.NEWS_API_URL, params=params)
        except httpx.TimeoutException as e:
            logger.error(f"NewsAPI timeout: {e}")
            raise TransportFailureError(
                "No se pudo contactar con NewsAPI",
                mensaje=f"Tiempo de espera agotado ({self.settings.UPSTREAM_TIMEOUT}s)"
            )
        except httpx.HTTPError as e:
            # Connection failures and redirect loops alike
            logger.error(f"NewsAPI connection error: {e}")
            raise TransportFailureError(
                "No se pudo contactar con NewsAPI",
                mensaje="Error de conexión con el servicio de noticias"
            )

        data = self._parse_json(response)

        if not response.is_success:
            raise self._map_news_error(response.status_code, data)

        if not self._is_news_payload(data):
            logger.error("NewsAPI returned an unexpected payload", extra={"status_code": response.status_code})
            raise UpstreamGenericError(
                "Respuesta inválida de NewsAPI", upstream_status=response.status_code
            )

        articles = data.get("articles") or []
        total_results = data.get("totalResults") or 0

        logger.info("News found", extra={"query": query, "total_results": total_results})
        return NewsResult(total_results=total_results, articles=articles)

    async def check_image_exists(self, code: int) -> ImageResult:
        """
        Confirm http.cat has an image for ``code``

        Any non-2xx answer or transport failure is reported as ImageNotFoundError.
        """
        self._ensure_client()
        image_url = f"{self.settings.HTTPCAT_BASE_URL.rstrip('/')}/{code}"

        try:
            response = await self.http_client.request(self.settings.HTTPCAT_CHECK_METHOD, image_url)
        except httpx.HTTPError as e:
            logger.warning(f"http.cat check failed: {e}", extra={"code": code})
            raise ImageNotFoundError()

        if not response.is_success:
            logger.debug(
                "http.cat has no image",
                extra={"code": code, "status_code": response.status_code}
            )
            raise ImageNotFoundError(upstream_status=response.status_code)

        return ImageResult(code=code, image_url=image_url)

    def _ensure_client(self) -> None:
        if not self.http_client:
            raise RuntimeError("Upstream client not initialized. Use async context manager.")

    def _map_news_error(self, status_code: int, data: Any) -> UpstreamError:
        """Translate a non-2xx NewsAPI answer into a gateway error"""
        logger.error("Error from NewsAPI", extra={"status_code": status_code, "body": data})

        upstream_code = status_code
        upstream_message = None
        if isinstance(data, dict):
            upstream_code = data.get("code") or status_code
            upstream_message = data.get("message")

        if status_code in NEWS_STATUS_ERRORS:
            error_class, message = NEWS_STATUS_ERRORS[status_code]
            return error_class(message, upstream_status=status_code, code=upstream_code)

        return UpstreamGenericError(
            upstream_message or DEFAULT_NEWS_ERROR,
            upstream_status=status_code,
            code=upstream_code
        )

    @staticmethod
    def _is_news_payload(data: Any) -> bool:
        """Object with an integer totalResults and a list of article objects"""
        if not isinstance(data, dict):
            return False
        total_results = data.get("totalResults")
        if total_results is not None and (isinstance(total_results, bool) or not isinstance(total_results, int)):
            return False
        articles = data.get("articles") or []
        return isinstance(articles, list) and all(isinstance(article, dict) for article in articles)

    @staticmethod
    def _parse_json(response: httpx.Response) -> Any:
        """Decode a JSON body, returning None when it is not JSON"""
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"Failed to parse JSON response: {e}")
            return None
