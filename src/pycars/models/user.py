"""User model."""

from __future__ import annotations

from pycars.models._base import CarsBaseModel


class User(CarsBaseModel):
    """The signed-in user a session belongs to."""

    id: int | None = None
    username: str
