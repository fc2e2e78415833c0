"""Domain error primitives and the DRF boundary that renders them.

Services raise subclasses of ``DomainError``.  Each carries an
``ErrorKind``; the API layer maps the kind to an HTTP status in
``api_exception_handler`` so the service layer stays transport-agnostic.

Every error response (domain or DRF) shares one envelope::

    {
        "type": "client_error",
        "errors": [{"code": "not_found", "detail": "...", "attr": null}]
    }
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Dict, Iterator, Optional

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


class ErrorKind(StrEnum):
    """Closed set of failure categories a lifecycle operation can report."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation_error"
    GENERATION_EXHAUSTED = "generation_exhausted"
    CONFLICT = "conflict"


HTTP_STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.GENERATION_EXHAUSTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
}


class DomainError(Exception):
    """Base class for typed errors raised by the service layer."""

    kind: ErrorKind = ErrorKind.CONFLICT

    def __init__(
        self, message: str = "", errors: Optional[Dict[str, str]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.errors: Dict[str, str] = dict(errors or {})


class NotFound(DomainError):
    """An entity id does not resolve to a live record."""

    kind = ErrorKind.NOT_FOUND


class InvalidInput(DomainError):
    """One or more input fields are malformed.

    ``errors`` maps the offending field name to a human-readable message.
    """

    kind = ErrorKind.VALIDATION

    def __init__(self, errors: Dict[str, str], message: str = "") -> None:
        fields = ", ".join(sorted(errors)) or "input"
        super().__init__(message or f"Invalid value for: {fields}.", errors)


class GenerationExhausted(DomainError):
    """A generator ran out of attempts to produce a unique value."""

    kind = ErrorKind.GENERATION_EXHAUSTED


class Conflict(DomainError):
    """A write collides with state that already exists."""

    kind = ErrorKind.CONFLICT


# ---------------------------------------------------------------------------
# DRF boundary
# ---------------------------------------------------------------------------


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """DRF ``EXCEPTION_HANDLER``: render domain and framework errors uniformly.

    Returns ``None`` for anything it does not recognise so that Django
    surfaces it as an internal server error.
    """
    if isinstance(exc, DomainError):
        return _domain_error_response(exc, context)

    response = exception_handler(exc, context)
    if response is None:
        return None

    response.data = {
        "type": _error_type(response.status_code),
        "errors": list(_flatten(response.data)),
    }
    return response


def _domain_error_response(exc: DomainError, context: Dict[str, Any]) -> Response:
    status_code = HTTP_STATUS_BY_KIND[exc.kind]
    view = context.get("view")
    log = logger.bind(
        kind=str(exc.kind),
        error=exc.message,
        view=type(view).__name__ if view else None,
    )
    if status_code >= 500:
        log.error("api.domain_error")
    else:
        log.info("api.domain_error")

    if exc.errors:
        errors = [
            {"code": str(exc.kind), "detail": detail, "attr": attr}
            for attr, detail in exc.errors.items()
        ]
    else:
        errors = [{"code": str(exc.kind), "detail": exc.message, "attr": None}]

    return Response(
        {"type": _error_type(status_code), "errors": errors},
        status=status_code,
    )


def _error_type(status_code: int) -> str:
    return "server_error" if status_code >= 500 else "client_error"


def _flatten(detail: Any, attr: Optional[str] = None) -> Iterator[Dict[str, Any]]:
    if isinstance(detail, dict):
        for key, value in detail.items():
            if key in ("detail", "non_field_errors"):
                child = attr
            else:
                child = f"{attr}.{key}" if attr else str(key)
            yield from _flatten(value, child)
    elif isinstance(detail, list):
        for value in detail:
            yield from _flatten(value, attr)
    else:
        yield {
            "code": getattr(detail, "code", "error"),
            "detail": str(detail),
            "attr": attr,
        }
