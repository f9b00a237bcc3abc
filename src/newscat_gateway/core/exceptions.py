"""
Gateway exceptions for NewsCat Gateway.

Every failure a handler can report is a ``GatewayError`` subclass carrying its
HTTP status and the hint fields of the error envelope. The global exception
handler turns them into responses, so handlers only ever raise.
"""

from typing import Any, Dict, Optional, Union


class GatewayError(Exception):
    """
    Base exception class for errors reported to API clients.

    Attributes:
        message: Human-readable error for the ``error`` envelope field
        code: Machine-checkable error code
        http_status: Status code of the response
        mensaje: Optional detail line
        ejemplo: Optional example of a valid request
        hint: Optional remediation hint
    """

    http_status: int = 500
    default_code: str = "gateway_error"

    def __init__(self, message: str, code: Optional[Union[str, int]] = None,
                 mensaje: Optional[str] = None, ejemplo: Optional[str] = None,
                 hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.mensaje = mensaje
        self.ejemplo = ejemplo
        self.hint = hint

    def get_http_status_code(self) -> int:
        """Get HTTP status code for this error."""
        return self.http_status

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "http_status": self.get_http_status_code(),
        }


# Client input errors (always 400, raised before any upstream I/O)

class ClientInputError(GatewayError):
    """Raised when a request parameter fails validation."""

    http_status = 400
    default_code = "invalid_input"


class EmptyQueryError(ClientInputError):
    """Search query missing or blank after trimming."""

    default_code = "empty_query"

    def __init__(self, message: str = "El parámetro 'q' es obligatorio.", **kwargs):
        kwargs.setdefault("ejemplo", "/news?q=tecnologia")
        super().__init__(message, **kwargs)


class InvalidFormatError(ClientInputError):
    """Status code is not an integer, or not three digits in strict mode."""

    default_code = "invalid_format"

    def __init__(self, message: str = "Código HTTP inválido", **kwargs):
        kwargs.setdefault("ejemplo", "/httpcat/404")
        super().__init__(message, **kwargs)


class OutOfRangeError(ClientInputError):
    """Status code outside [100, 599]."""

    default_code = "out_of_range"

    def __init__(self, message: str = "Código HTTP inválido", **kwargs):
        kwargs.setdefault("ejemplo", "/httpcat/404")
        super().__init__(message, **kwargs)


# Configuration errors

class ConfigurationError(GatewayError):
    """Raised when required configuration is absent."""

    http_status = 500
    default_code = "configuration_error"


class CredentialMissingError(ConfigurationError):
    """No NewsAPI key is configured; raised before any network call."""

    default_code = "credential_missing"

    def __init__(self, message: str = "Configuración incompleta", **kwargs):
        kwargs.setdefault("mensaje", "NEWS_API_KEY no está configurada en el servidor")
        kwargs.setdefault("hint", "Configura la variable de entorno NEWS_API_KEY")
        super().__init__(message, **kwargs)


# Upstream errors

class UpstreamError(GatewayError):
    """
    Raised when an upstream answered with a non-2xx status.

    Attributes:
        upstream_status: HTTP status returned by the upstream, if any
    """

    http_status = 502
    default_code = "upstream_error"

    def __init__(self, message: str, upstream_status: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.upstream_status = upstream_status

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict["upstream_status"] = self.upstream_status
        return base_dict


class InvalidCredentialError(UpstreamError):
    """Upstream rejected the API key (401)."""

    http_status = 401
    default_code = "invalid_credential"


class RateLimitedError(UpstreamError):
    """Upstream request quota exhausted (429)."""

    http_status = 429
    default_code = "rate_limited"


class PlanLimitedError(UpstreamError):
    """Upstream plan does not allow the request (426)."""

    http_status = 426
    default_code = "plan_limited"


class UpstreamGenericError(UpstreamError):
    """Any other non-2xx upstream answer.

    A 400 from the upstream means the forwarded request itself was rejected and
    is passed through; everything else becomes 502.
    """

    PASSTHROUGH_STATUSES = frozenset({400})

    def get_http_status_code(self) -> int:
        if self.upstream_status in self.PASSTHROUGH_STATUSES:
            return self.upstream_status
        return self.http_status


class TransportFailureError(UpstreamError):
    """Network-level failure reaching an upstream (DNS, refused, timeout)."""

    http_status = 502
    default_code = "transport_failure"


class ImageNotFoundError(UpstreamError):
    """No image exists upstream for the requested status code."""

    http_status = 404
    default_code = "image_not_found"

    def __init__(self, message: str = "Imagen no encontrada para este código HTTP", **kwargs):
        super().__init__(message, **kwargs)
