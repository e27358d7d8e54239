"""Custom exception hierarchy for pycars."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class CarsError(Exception):
    """Base exception for all pycars errors."""


class CarsConfigError(CarsError):
    """Invalid or missing configuration."""


class CarsTransportError(CarsError):
    """HTTP-level failure (network error, undecodable payload)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class CarsApiError(CarsError):
    """API answered with a non-2xx status.

    ``body`` holds the decoded error payload (JSON when the server sent
    JSON, otherwise the raw text, ``None`` for an empty body).
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
        body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        self.body = body
        super().__init__(message)


class CarsValidationError(CarsApiError):
    """Server rejected the submitted fields (HTTP 400)."""


class CarsAuthenticationError(CarsApiError):
    """Missing, invalid or expired bearer token (HTTP 401/403)."""


class CarsNotFoundError(CarsApiError):
    """The addressed car does not exist or is not owned by the user (HTTP 404)."""


class CarDraftError(CarsError):
    """The form draft is incomplete or has non-numeric year/price.

    Raised before any request is sent.
    """

    def __init__(self, message: str, *, fields: Sequence[str] = ()) -> None:
        self.fields = tuple(fields)
        super().__init__(message)


def error_body(exc: BaseException) -> Any:
    """Return what should be logged for a failed call.

    API errors expose the server's response body; anything else falls
    back to the exception message.
    """
    body = getattr(exc, "body", None)
    if body is not None:
        return body
    return str(exc)
