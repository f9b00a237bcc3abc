"""
Inbound parameter validation.

Pure functions: they either return the normalized value or raise a
``ClientInputError`` subclass. They run before any upstream call.
"""
import re
from typing import Optional

from newscat_gateway.core.exceptions import (
    EmptyQueryError,
    InvalidFormatError,
    OutOfRangeError,
)

MIN_STATUS_CODE = 100
MAX_STATUS_CODE = 599

_STRICT_CODE_PATTERN = re.compile(r"[0-9]{3}")
_LENIENT_CODE_PATTERN = re.compile(r"[+-]?[0-9]+")


def validate_search_query(raw: Optional[str]) -> str:
    """Return the trimmed query, rejecting missing or blank input."""
    if raw is None:
        raise EmptyQueryError()
    query = raw.strip()
    if not query:
        raise EmptyQueryError()
    return query


def validate_status_code(raw: Optional[str], strict: bool = False) -> int:
    """
    Parse and range-check an HTTP status code.

    Args:
        raw: Code as received in the path or query string
        strict: Require exactly three ASCII digits, no whitespace or sign

    Returns:
        The code as an integer in [100, 599]

    Raises:
        InvalidFormatError: Not an integer (or not three digits when strict)
        OutOfRangeError: Integer outside [100, 599]
    """
    if raw is None:
        raise InvalidFormatError()

    if strict:
        if not _STRICT_CODE_PATTERN.fullmatch(raw):
            raise InvalidFormatError(
                mensaje="El código debe tener exactamente 3 dígitos"
            )
        candidate = raw
    else:
        candidate = raw.strip()
        if not _LENIENT_CODE_PATTERN.fullmatch(candidate):
            raise InvalidFormatError()

    code = int(candidate)
    if code < MIN_STATUS_CODE or code > MAX_STATUS_CODE:
        raise OutOfRangeError(
            mensaje=f"El código debe estar entre {MIN_STATUS_CODE} y {MAX_STATUS_CODE}"
        )
    return code
