"""
Error types raised by the haulbase client.
"""

from typing import Any, Optional

DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"


class HaulbaseError(Exception):
    """Base class for all haulbase errors."""


class ValidationError(HaulbaseError):
    """Raised when arguments are rejected before any request is made."""


class ApiError(HaulbaseError):
    """
    An HTTP call failed.

    Attributes:
        message: Human-readable message extracted from the response
        status_code: HTTP status, or None for transport failures
        payload: Decoded response body, when there was one
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


class AuthenticationError(ApiError):
    """A 401 that could not be recovered by refreshing the access token."""


def message_from_payload(payload: Any) -> Optional[str]:
    """Pull `error.message` or `message` out of an API error body."""
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if payload.get("message"):
        return str(payload["message"])
    return None


def extract_error_message(exc: BaseException) -> str:
    """
    Turn any exception into the string shown to the user.

    Order: body `error.message`, body `message`, the exception message,
    then a generic fallback.
    """
    if isinstance(exc, ApiError):
        return message_from_payload(exc.payload) or exc.message or DEFAULT_ERROR_MESSAGE
    return str(exc) or DEFAULT_ERROR_MESSAGE
