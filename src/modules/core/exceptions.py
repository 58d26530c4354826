"""Standardised error bodies for the HTTP layer.

Every error leaving the API has the same shape::

    {
        "type": "validation_error" | "client_error" | "server_error",
        "errors": [{"code": "...", "detail": "...", "attr": "..." | null}]
    }

``standard_exception_handler`` is plugged into DRF via
``REST_FRAMEWORK["EXCEPTION_HANDLER"]``; the ``*_response`` helpers are
used by views that translate domain exceptions themselves.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from pydantic import ValidationError as PydanticValidationError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)

VALIDATION_ERROR = "validation_error"
CLIENT_ERROR = "client_error"
SERVER_ERROR = "server_error"


def _error(code: str, detail: str, attr: Optional[str] = None) -> Dict[str, Any]:
    return {"code": code, "detail": detail, "attr": attr}


def error_response(
    status_code: int,
    code: str,
    detail: str,
    attr: Optional[str] = None,
) -> Response:
    """Build a single-error response in the standard format."""
    error_type = CLIENT_ERROR if status_code < 500 else SERVER_ERROR
    if status_code == status.HTTP_400_BAD_REQUEST:
        error_type = VALIDATION_ERROR
    return Response(
        {"type": error_type, "errors": [_error(code, detail, attr)]},
        status=status_code,
    )


def validation_error_response(exc: PydanticValidationError) -> Response:
    """Translate a pydantic ``ValidationError`` into a 400 response."""
    errors = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or None
        errors.append(_error(err["type"], err["msg"], loc))
    return Response(
        {"type": VALIDATION_ERROR, "errors": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


def _flatten(detail: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    """Flatten DRF's nested ``ErrorDetail`` structures into a flat list."""
    if isinstance(detail, dict):
        errors = []
        for key, value in detail.items():
            nested = key if attr is None else f"{attr}.{key}"
            if key == "non_field_errors":
                nested = attr
            errors.extend(_flatten(value, nested))
        return errors
    if isinstance(detail, list):
        errors = []
        for item in detail:
            errors.extend(_flatten(item, attr))
        return errors
    code = getattr(detail, "code", "error")
    return [_error(str(code), str(detail), attr)]


def standard_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """DRF exception handler rendering errors in the standard format.

    Returns ``None`` for exceptions DRF does not know about, letting
    Django produce a 500 (the view never swallows generic exceptions).
    """
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()

    response = exception_handler(exc, context)
    if response is None or not isinstance(exc, exceptions.APIException):
        return response

    if isinstance(exc, exceptions.ValidationError):
        error_type = VALIDATION_ERROR
    elif response.status_code >= 500:
        error_type = SERVER_ERROR
    else:
        error_type = CLIENT_ERROR

    response.data = {"type": error_type, "errors": _flatten(exc.detail)}

    logger.warning(
        "api.error",
        status_code=response.status_code,
        error_type=error_type,
        exception=exc.__class__.__name__,
    )
    return response
