from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import (
    AuthenticationFailed,
    MethodNotAllowed,
    NotAuthenticated,
    NotFound,
    ParseError,
    PermissionDenied,
    UnsupportedMediaType,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import error_response
from apps.common import get_logger
from apps.remote.exceptions import RemoteAPIError

logger = get_logger(__name__).bind(component="api", layer="exception")

SERVER_ERROR_MESSAGE = _("Something went wrong")

# DRF exception -> (code, fallback message)
DRF_ERROR_CODES: Tuple[Tuple[type, str, Any], ...] = (
    (ValidationError, "VALIDATION_ERROR", _("Validation failed")),
    (ParseError, "VALIDATION_ERROR", _("Malformed request")),
    (AuthenticationFailed, "UNAUTHORIZED", _("Authentication failed")),
    (NotAuthenticated, "UNAUTHORIZED", _("Authentication required")),
    (PermissionDenied, "FORBIDDEN", _("You do not have permission to perform this action")),
    (NotFound, "NOT_FOUND", _("Resource not found")),
    (MethodNotAllowed, "METHOD_NOT_ALLOWED", _("Method not allowed")),
    (UnsupportedMediaType, "UNSUPPORTED_MEDIA_TYPE", _("Unsupported media type")),
)

REMOTE_STATUS_CODES: Dict[int, str] = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_422_UNPROCESSABLE_ENTITY: "VALIDATION_ERROR",
    status.HTTP_429_TOO_MANY_REQUESTS: "TOO_MANY_REQUESTS",
}


class ApplicationError(Exception):
    """
    Domain-level error raised from services or views and rendered through
    ``error_response``. ``status_code`` overrides the status implied by ``code``.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        hint: Optional[str] = None,
        extra: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        self.hint = hint
        self.extra = extra
        self.headers = headers

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
            hint=self.hint,
            extra=self.extra,
            headers=self.headers,
        )


def remote_error_response(exc: RemoteAPIError) -> Response:
    """Map a store backend failure onto the local error envelope."""
    code = REMOTE_STATUS_CODES.get(exc.status_code)
    if code is None:
        # transport failures and backend 5xx
        return error_response(
            "BAD_GATEWAY",
            str(exc) or "Store backend request failed",
            {"remoteStatus": exc.status_code} if exc.status_code else None,
            http_status=status.HTTP_502_BAD_GATEWAY,
        )
    return error_response(
        code,
        str(exc) or "Store backend rejected the request",
        exc.errors or None,
        http_status=exc.status_code,
    )


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Central exception handler for DRF views returning structured JSON errors."""

    bound_logger = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        bound_logger.info("Handled application error", code=exc.code, status=exc.status_code)
        return exc.to_response()

    if isinstance(exc, RemoteAPIError):
        bound_logger.info("Store backend error surfaced to client", remote_status=exc.status_code)
        return remote_error_response(exc)

    response = drf_exception_handler(exc, context)
    if response is None:
        bound_logger.exception("Unhandled exception bubbled to global handler")
        return error_response(
            "SERVER_ERROR",
            SERVER_ERROR_MESSAGE,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code, message, details = _describe(exc, response.data)
    bound_logger.info("Converted API exception", code=code, status=response.status_code)
    return error_response(
        code,
        message,
        details,
        http_status=response.status_code,
        headers=dict(response.headers) if getattr(response, "headers", None) else None,
    )


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _describe(exc: Exception, payload: Any) -> Tuple[str, Any, Optional[Any]]:
    for exc_class, code, fallback in DRF_ERROR_CODES:
        if isinstance(exc, exc_class):
            break
    else:
        code, fallback = "UNKNOWN_ERROR", _("Request failed")

    if isinstance(exc, ValidationError):
        return code, fallback, payload
    return code, _detail(payload, fallback), None


def _detail(payload: Any, fallback: Any) -> Any:
    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return payload["detail"]
    return fallback


__all__ = ["ApplicationError", "global_exception_handler", "remote_error_response"]
