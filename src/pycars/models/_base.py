"""Base model for cars API responses.

Every response model inherits from :class:`CarsBaseModel` which
provides:

* an immutable, extra-tolerant pydantic configuration, so fields the
  server adds later do not break parsing;
* a ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CarsBaseModel(BaseModel):
    """Base for cars API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict, repr=False)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        """Stash the raw payload unless the caller passed ``raw=`` explicitly."""
        if not isinstance(values, dict):
            return values
        if "raw" in values:
            return values
        merged = dict(values)
        merged["raw"] = dict(values)
        return merged
