from typing import Any, Dict, Optional


class RemoteAPIError(Exception):
    """
    Raised when the store backend answers with a non-2xx status.

    Args:
        message: Laravel ``message`` field, the raw body, or a generic fallback.
        status_code: HTTP status of the backend response; ``None`` for transport failures.
        payload: Decoded response body, when there was one.
        errors: Laravel validation errors (``{"field": ["..."]}``) when present.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        payload: Any = None,
        errors: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload
        self.errors = errors

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def is_forbidden(self) -> bool:
        return self.status_code == 403


class RemoteUnavailableError(RemoteAPIError):
    """The backend could not be reached or did not answer in time."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message, status_code=None)
        self.cause = cause


class UnexpectedResponseError(RemoteAPIError):
    """The backend answered 2xx with a body of an unusable shape."""

    def __init__(self, message: str, *, payload: Any = None):
        super().__init__(message, status_code=None, payload=payload)
