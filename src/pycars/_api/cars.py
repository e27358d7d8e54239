"""Car listing endpoints.

Endpoints:
  - GET    /api/cars/mine/
  - POST   /api/cars/mine/
  - PUT    /api/cars/{id}/
  - DELETE /api/cars/{id}/
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pycars._api._common import send
from pycars._constants import MY_CARS_ENDPOINT, car_endpoint
from pycars._transport import Transport
from pycars.exceptions import CarsApiError
from pycars.models.car import Car
from pycars.models.draft import CarDraft, ImageFile
from pycars.session import Session

_logger = logging.getLogger(__name__)


def build_car_form(draft: CarDraft) -> tuple[list[tuple[str, str]], dict[str, ImageFile]]:
    """Split a draft into multipart fields and files.

    The ``image`` file is only included when one was selected.
    """
    files: dict[str, ImageFile] = {}
    if draft.image is not None:
        files["image"] = draft.image
    return draft.form_fields(), files


def _parse_car(endpoint: str, body: Any) -> Car:
    if not isinstance(body, dict):
        raise CarsApiError(
            f"{endpoint} returned an unexpected payload: {str(body)[:128]}",
            endpoint=endpoint,
            body=body,
        )
    try:
        return Car.model_validate(body)
    except ValidationError as exc:
        raise CarsApiError(
            f"{endpoint} returned an invalid car: {exc.error_count()} validation error(s)",
            endpoint=endpoint,
            body=body,
        ) from exc


async def fetch_my_cars(session: Session, transport: Transport) -> list[Car]:
    """Fetch every car listed by the authenticated user."""
    body = await send(method="GET", endpoint=MY_CARS_ENDPOINT, session=session, transport=transport)
    if not isinstance(body, list):
        raise CarsApiError(
            f"{MY_CARS_ENDPOINT} returned an unexpected payload: {str(body)[:128]}",
            endpoint=MY_CARS_ENDPOINT,
            body=body,
        )
    cars = [_parse_car(MY_CARS_ENDPOINT, item) for item in body]
    ids = [car.id for car in cars]
    if len(set(ids)) != len(ids):
        raise CarsApiError(
            f"{MY_CARS_ENDPOINT} returned duplicate car ids: {ids}",
            endpoint=MY_CARS_ENDPOINT,
            body=body,
        )
    _logger.debug("Fetched %d car(s) for user=%s", len(cars), session.user.username)
    return cars


async def create_car(session: Session, transport: Transport, draft: CarDraft) -> Car:
    """Create a car from *draft* and return the stored record."""
    fields, files = build_car_form(draft)
    body = await send(
        method="POST",
        endpoint=MY_CARS_ENDPOINT,
        session=session,
        transport=transport,
        fields=fields,
        files=files,
    )
    return _parse_car(MY_CARS_ENDPOINT, body)


async def update_car(session: Session, transport: Transport, car_id: int, draft: CarDraft) -> Car:
    """Replace car *car_id* with the contents of *draft*."""
    endpoint = car_endpoint(car_id)
    fields, files = build_car_form(draft)
    body = await send(
        method="PUT",
        endpoint=endpoint,
        session=session,
        transport=transport,
        fields=fields,
        files=files,
    )
    return _parse_car(endpoint, body)


async def delete_car(session: Session, transport: Transport, car_id: int) -> None:
    """Delete car *car_id*. Any response body is ignored."""
    await send(method="DELETE", endpoint=car_endpoint(car_id), session=session, transport=transport)
