from __future__ import annotations

from pycars.models.car import Car
from pycars.models.draft import CarDraft, ImageFile
from pycars.state.form import CarForm, FormMode


def _car(car_id: int, model: str = "Accord") -> Car:
    return Car.model_validate({"id": car_id, "make": "Honda", "model": model, "year": 2018, "price": "9000.00"})


def test_new_form_is_empty_create_mode() -> None:
    form = CarForm()

    assert form.draft.is_empty
    assert form.mode is FormMode.CREATE
    assert form.title == "Add New Car"
    assert form.submit_label == "Add Car"
    assert form.can_cancel is False


def test_begin_edit_switches_to_editing_and_retargets() -> None:
    form = CarForm()
    form.select_image([ImageFile(filename="a.jpg", content=b"a")])

    form.begin_edit(_car(5))
    assert form.mode is FormMode.EDITING
    assert form.editing_id == 5
    assert form.draft.image is None
    assert form.title == "Edit Car"
    assert form.submit_label == "Update Car"
    assert form.can_cancel is True

    form.begin_edit(_car(8, model="Civic"))
    assert form.editing_id == 8
    assert form.draft.model == "Civic"


def test_cancel_always_yields_empty_draft() -> None:
    form = CarForm()
    form.cancel()
    assert form.draft == CarDraft()

    form.change_field("make", "Toyota")
    form.select_image([ImageFile(filename="a.jpg", content=b"a")])
    form.begin_edit(_car(5))
    form.change_field("price", "1")
    form.cancel()
    form.cancel()

    assert form.draft == CarDraft()
    assert form.editing_id is None
    assert form.mode is FormMode.CREATE


def test_reset_keeps_editing_target() -> None:
    form = CarForm()
    form.begin_edit(_car(5))

    form.reset()

    assert form.draft.is_empty
    assert form.editing_id == 5
