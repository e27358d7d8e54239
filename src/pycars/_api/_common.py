"""Shared helpers for cars API endpoint modules.

This module centralizes the repeated patterns:
- attaching the session's bearer token
- mapping HTTP error statuses to the exception hierarchy

It is internal to pycars and may change at any time.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pycars._transport import Transport
from pycars.exceptions import (
    CarsApiError,
    CarsAuthenticationError,
    CarsNotFoundError,
    CarsValidationError,
)
from pycars.models.draft import ImageFile
from pycars.session import Session

_STATUS_ERRORS: dict[int, type[CarsApiError]] = {
    400: CarsValidationError,
    401: CarsAuthenticationError,
    403: CarsAuthenticationError,
    404: CarsNotFoundError,
}


def _summarize(body: Any) -> str:
    text = body if isinstance(body, str) else repr(body)
    return text[:200]


def raise_for_status(*, method: str, endpoint: str, status: int, body: Any) -> None:
    """Raise the matching :class:`CarsApiError` for a non-2xx *status*."""
    if 200 <= status < 300:
        return
    error_cls = _STATUS_ERRORS.get(status, CarsApiError)
    raise error_cls(
        f"HTTP {status} from {method} {endpoint}: {_summarize(body)}",
        status_code=status,
        endpoint=endpoint,
        body=body,
    )


async def send(
    *,
    method: str,
    endpoint: str,
    session: Session,
    transport: Transport,
    fields: Sequence[tuple[str, str]] | None = None,
    files: Mapping[str, ImageFile] | None = None,
) -> Any:
    """Send an authenticated request and return the decoded success body."""
    response = await transport.request(
        method,
        endpoint,
        headers=session.authorization_header(),
        fields=fields,
        files=files,
    )
    raise_for_status(method=method, endpoint=endpoint, status=response.status, body=response.body)
    return response.body
