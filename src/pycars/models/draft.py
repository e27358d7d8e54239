"""Form draft models.

A :class:`CarDraft` mirrors the car form's inputs: every scalar field is
kept as text exactly as typed, and the image is an optional local file
selected for upload. Drafts are immutable; each edit returns a new one.
"""

from __future__ import annotations

import mimetypes
from collections.abc import Sequence
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pycars.exceptions import CarDraftError
from pycars.models.car import Car

#: Scalar form fields, in the order they are sent.
DRAFT_FIELDS: tuple[str, ...] = ("make", "model", "year", "price")


class ImageFile(BaseModel):
    """An image file chosen for upload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    filename: str
    content: bytes = Field(repr=False)
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: str | Path) -> ImageFile:
        """Read *path* and guess its content type from the extension."""
        file_path = Path(path)
        content_type, _ = mimetypes.guess_type(file_path.name)
        return cls(
            filename=file_path.name,
            content=file_path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )

    @property
    def size(self) -> int:
        return len(self.content)


def _is_integer(value: str) -> bool:
    try:
        int(value.strip())
    except ValueError:
        return False
    return True


def _is_number(value: str) -> bool:
    try:
        return Decimal(value.strip()).is_finite()
    except InvalidOperation:
        return False


class CarDraft(BaseModel):
    """Unsaved form contents for creating or updating a car."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    make: str = ""
    model: str = ""
    year: str = ""
    price: str = ""
    image: ImageFile | None = None

    @classmethod
    def from_car(cls, car: Car) -> CarDraft:
        """Pre-fill a draft from an existing car.

        The image is left empty; a new file must be chosen to replace it.
        """
        return cls(make=car.make, model=car.model, year=str(car.year), price=str(car.price))

    @property
    def is_empty(self) -> bool:
        return self == CarDraft()

    def with_field(self, name: str, value: Any) -> CarDraft:
        """Return a copy with one scalar field replaced."""
        if name not in DRAFT_FIELDS:
            raise ValueError(f"unknown form field {name!r}; expected one of {DRAFT_FIELDS}")
        return self.model_copy(update={name: "" if value is None else str(value)})

    def with_image(self, files: Sequence[ImageFile]) -> CarDraft:
        """Return a copy whose image is the first of *files* (or none)."""
        return self.model_copy(update={"image": files[0] if files else None})

    def missing_fields(self) -> list[str]:
        return [name for name in DRAFT_FIELDS if not getattr(self, name).strip()]

    def invalid_fields(self) -> list[str]:
        invalid: list[str] = []
        if self.year.strip() and not _is_integer(self.year):
            invalid.append("year")
        if self.price.strip() and not _is_number(self.price):
            invalid.append("price")
        return invalid

    def check(self) -> None:
        """Raise :class:`CarDraftError` unless the draft can be submitted."""
        missing = self.missing_fields()
        if missing:
            raise CarDraftError(f"required fields are empty: {', '.join(missing)}", fields=missing)
        invalid = self.invalid_fields()
        if invalid:
            raise CarDraftError(f"fields must be numeric: {', '.join(invalid)}", fields=invalid)

    def form_fields(self) -> list[tuple[str, str]]:
        """Stripped scalar fields as ``(name, value)`` pairs for a multipart body."""
        return [(name, getattr(self, name).strip()) for name in DRAFT_FIELDS]
