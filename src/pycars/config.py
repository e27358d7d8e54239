"""Client configuration for pycars."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pycars._constants import BASE_URL, USER_AGENT
from pycars.exceptions import CarsConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_timeout(value: str) -> float | None:
    normalized = value.strip().lower()
    if normalized in {"", "none", "0"}:
        return None
    try:
        timeout = float(normalized)
    except ValueError as exc:
        raise CarsConfigError(f"CARS_REQUEST_TIMEOUT must be a number, got {value!r}") from exc
    if timeout < 0:
        raise CarsConfigError(f"CARS_REQUEST_TIMEOUT must not be negative, got {value!r}")
    return timeout


@dataclasses.dataclass(frozen=True)
class CarsConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Scheme, host and port of the cars API. Also used to resolve
        server-relative image paths. A trailing slash is stripped.
    request_timeout : float or None
        Total timeout in seconds for a single request. ``None`` keeps
        the HTTP library's default.
    user_agent : str
        User-Agent header sent with every request.
    api_trace_enabled : bool
        Log (redacted) request fields and response bodies at DEBUG level.
    """

    base_url: str = BASE_URL
    request_timeout: float | None = None
    user_agent: str = USER_AGENT
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.base_url:
            raise CarsConfigError("base_url must not be empty")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> CarsConfig:
        """Create configuration from environment variables.

        Reads ``CARS_BASE_URL``, ``CARS_REQUEST_TIMEOUT``,
        ``CARS_USER_AGENT`` and ``CARS_API_TRACE_ENABLED``. Explicit
        keyword arguments override environment values.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        base_url = env.get("CARS_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url

        user_agent = env.get("CARS_USER_AGENT")
        if user_agent is not None:
            config_kwargs["user_agent"] = user_agent

        timeout_env = env.get("CARS_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_timeout(timeout_env)

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("CARS_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
