"""Authenticated session passed explicitly to everything that calls the API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from pycars.models.user import User


class Session(BaseModel):
    """Identity and bearer token of the signed-in user.

    The token is obtained elsewhere (login is not part of this library).
    Sessions are immutable; a refreshed token means a new ``Session``.

    Parameters
    ----------
    user : User
        The authenticated user.
    token : str
        Opaque bearer token attached to every request.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

    user: User
    token: str

    @field_validator("token")
    @classmethod
    def _require_token(cls, value: str) -> str:
        if not value:
            raise ValueError("token must be non-empty")
        return value

    def authorization_header(self) -> dict[str, str]:
        """Header mapping carrying the bearer token."""
        return {"Authorization": f"Bearer {self.token}"}

    def __repr__(self) -> str:
        return f"Session(user={self.user!r}, token=<redacted>)"
