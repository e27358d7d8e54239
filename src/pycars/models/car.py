"""Car listing model."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import field_validator

from pycars.models._base import CarsBaseModel


class Car(CarsBaseModel):
    """A car listed by the authenticated user.

    Mapped from the objects returned by ``/api/cars/mine/`` and
    ``/api/cars/{id}/``.
    """

    id: int
    """Server-assigned identifier."""
    make: str
    """Manufacturer (e.g. ``"Toyota"``)."""
    model: str
    """Model name (e.g. ``"Corolla"``)."""
    year: int
    """Model year."""
    price: Decimal
    """Asking price, kept exactly as the server formats it."""
    image: str | None = None
    """Server-relative path of the uploaded image, if any."""

    @field_validator("image", mode="before")
    @classmethod
    def _blank_image(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def image_url(self, base_url: str) -> str | None:
        """Displayable URL of the image, resolved against *base_url*."""
        if self.image is None:
            return None
        if self.image.startswith(("http://", "https://")):
            return self.image
        path = self.image if self.image.startswith("/") else f"/{self.image}"
        return f"{base_url.rstrip('/')}{path}"

    def describe(self) -> str:
        """One-line summary, e.g. ``"2020 Toyota Corolla - $15000"``."""
        return f"{self.year} {self.make} {self.model} - ${self.price}"
