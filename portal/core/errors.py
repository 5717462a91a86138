# portal/core/errors.py
from __future__ import annotations

from typing import Any, Dict, List

import requests


class PortalError(Exception):
    """Base class for every error raised by the portal."""


class InvalidInput(PortalError, ValueError):
    """Raised by the pure scoring helpers when given unusable numbers."""


class ValidationFailed(PortalError):
    """
    A payload failed local validation before any backend call was made.
    `errors` holds every problem found so the caller can show them all at once.
    """

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Validation failed")


class ApiError(PortalError):
    """Normalized failure of a backend call."""

    def __init__(
        self,
        message: str,
        status: int = 0,
        data: Any = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data
        self.retryable = retryable

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "status": self.status, "data": self.data}

    def __repr__(self) -> str:
        return f"ApiError(status={self.status}, message={self.message!r})"


def _response_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def handle_api_error(error: Exception) -> ApiError:
    """
    Convert anything raised while talking to the backend into an ApiError.

    - the server answered with an error status -> its `message` field + status
    - the request never got an answer (timeout, refused) -> status 0, retryable
    - anything else -> the exception text
    """
    if isinstance(error, ApiError):
        return error

    response = getattr(error, "response", None)
    if response is not None:
        data = _response_body(response)
        message = None
        if isinstance(data, dict):
            message = data.get("message")
        return ApiError(
            message=message or "An error occurred",
            status=response.status_code,
            data=data,
            retryable=response.status_code >= 500,
        )

    if isinstance(error, requests.Timeout):
        return ApiError(
            message="The server took too long to respond. Please try again.",
            status=0,
            retryable=True,
        )

    if isinstance(error, requests.RequestException):
        return ApiError(
            message="Network error. Please check your connection.",
            status=0,
            retryable=True,
        )

    return ApiError(message=str(error) or "An unexpected error occurred", status=0)
