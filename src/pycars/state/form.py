"""Car form state: the current draft and the car being edited, if any."""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from typing import Any

from pycars.models.car import Car
from pycars.models.draft import CarDraft, ImageFile


class FormMode(StrEnum):
    CREATE = "create"
    EDITING = "editing"


class CarForm:
    """Draft plus editing id.

    ``editing_id`` is ``None`` in create mode. ``begin_edit`` may
    re-target the form while already editing.
    """

    def __init__(self) -> None:
        self._draft = CarDraft()
        self._editing_id: int | None = None

    @property
    def draft(self) -> CarDraft:
        return self._draft

    @property
    def editing_id(self) -> int | None:
        return self._editing_id

    @property
    def mode(self) -> FormMode:
        return FormMode.CREATE if self._editing_id is None else FormMode.EDITING

    @property
    def title(self) -> str:
        return "Add New Car" if self.mode is FormMode.CREATE else "Edit Car"

    @property
    def submit_label(self) -> str:
        return "Add Car" if self.mode is FormMode.CREATE else "Update Car"

    @property
    def can_cancel(self) -> bool:
        return self.mode is FormMode.EDITING

    def change_field(self, name: str, value: Any) -> None:
        self._draft = self._draft.with_field(name, value)

    def select_image(self, files: Sequence[ImageFile]) -> None:
        self._draft = self._draft.with_image(files)

    def begin_edit(self, car: Car) -> None:
        self._draft = CarDraft.from_car(car)
        self._editing_id = car.id

    def reset(self) -> None:
        """Empty the draft, keeping the editing target."""
        self._draft = CarDraft()

    def cancel(self) -> None:
        self._draft = CarDraft()
        self._editing_id = None
