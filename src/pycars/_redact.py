"""Redaction for trace logging.

Trace logs include request headers, submitted form fields and decoded
JSON bodies. Bearer tokens and raw upload bytes must never reach them.
"""

from __future__ import annotations

from typing import Any

_REDACTED = "<redacted>"
_SECRET_KEYS: frozenset[str] = frozenset({"authorization", "cookie", "password", "token", "access", "refresh"})


def _shorten(text: str, limit: int) -> str:
    return text if len(text) <= limit else f"{text[:limit]}…<truncated>"


def redact_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Copy *value* with secrets masked, bytes summarized and long text cut."""
    if isinstance(value, dict):
        return {
            key: _REDACTED if str(key).lower() in _SECRET_KEYS else redact_for_log(item, max_string=max_string)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_for_log(item, max_string=max_string) for item in value]
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, str):
        return _shorten(value, max_string)
    return value
