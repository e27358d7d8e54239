"""HTTP transport: bearer-authenticated JSON and multipart requests."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple, Protocol

import aiohttp

from pycars._redact import redact_for_log
from pycars.config import CarsConfig
from pycars.exceptions import CarsTransportError
from pycars.models.draft import ImageFile

_logger = logging.getLogger(__name__)


class ApiResponse(NamedTuple):
    """Status code and decoded body of an HTTP response."""

    status: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    Implementations return non-2xx responses instead of raising; status
    mapping belongs to the endpoint layer.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        headers: Mapping[str, str],
        fields: Sequence[tuple[str, str]] | None = None,
        files: Mapping[str, ImageFile] | None = None,
    ) -> ApiResponse:
        ...


def _decode_body(text: str) -> Any:
    """JSON-decode *text*; empty bodies become ``None`` and non-JSON stays text."""
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def build_multipart(
    fields: Sequence[tuple[str, str]],
    files: Mapping[str, ImageFile] | None = None,
) -> aiohttp.MultipartWriter:
    """Build a ``multipart/form-data`` body.

    Files are only added when present, so an absent image is omitted
    rather than sent as an empty part.
    """
    writer = aiohttp.MultipartWriter("form-data")
    for name, value in fields:
        part = writer.append(value)
        part.set_content_disposition("form-data", name=name)
    for name, image in (files or {}).items():
        part = writer.append(image.content, {"Content-Type": image.content_type})
        part.set_content_disposition("form-data", name=name, filename=image.filename)
    return writer


def _describe_upload(
    fields: Sequence[tuple[str, str]] | None,
    files: Mapping[str, ImageFile] | None,
) -> dict[str, Any]:
    described: dict[str, Any] = dict(fields or ())
    for name, image in (files or {}).items():
        described[name] = f"<file:{image.filename} {image.content_type} {image.size}b>"
    return described


class HttpTransport:
    """aiohttp-backed transport for the cars REST API."""

    def __init__(
        self,
        config: CarsConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = (
            aiohttp.ClientTimeout(total=config.request_timeout) if config.request_timeout is not None else None
        )

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        headers: Mapping[str, str],
        fields: Sequence[tuple[str, str]] | None = None,
        files: Mapping[str, ImageFile] | None = None,
    ) -> ApiResponse:
        """Send one request and return its status and decoded body.

        Raises :class:`CarsTransportError` on network failures and
        timeouts. HTTP error statuses are returned, not raised.
        """
        url = f"{self._config.base_url}{endpoint}"
        request_headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": self._config.user_agent,
        }
        request_headers.update(headers)

        data = build_multipart(fields, files) if fields is not None else None
        kwargs: dict[str, Any] = {}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        _logger.debug("%s %s", method, url)
        if self._config.api_trace_enabled:
            _logger.debug(
                "Request %s %s headers=%s form=%s",
                method,
                endpoint,
                redact_for_log(request_headers),
                redact_for_log(_describe_upload(fields, files)),
            )

        try:
            async with self._http.request(method, url, data=data, headers=request_headers, **kwargs) as resp:
                status = resp.status
                text = await resp.text(errors="replace")
        except aiohttp.ClientError as exc:
            raise CarsTransportError(
                f"{method} {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except TimeoutError as exc:
            raise CarsTransportError(
                f"{method} {endpoint} timed out",
                endpoint=endpoint,
            ) from exc

        body = _decode_body(text)
        if self._config.api_trace_enabled:
            _logger.debug("Response %s %s status=%d body=%s", method, endpoint, status, redact_for_log(body))
        return ApiResponse(status=status, body=body)
