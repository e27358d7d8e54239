"""High-level async client for the cars REST API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pycars._api import cars as _cars_api
from pycars._transport import HttpTransport, Transport
from pycars.config import CarsConfig
from pycars.exceptions import CarsError
from pycars.models.car import Car
from pycars.models.draft import CarDraft
from pycars.session import Session

_logger = logging.getLogger(__name__)


class CarsClient:
    """Async data-access client for a user's car listings.

    Every call takes the :class:`~pycars.session.Session` it should be
    made with; the client itself holds no credentials.

    Usage::

        async with CarsClient(config) as client:
            cars = await client.list_my_cars(session)
    """

    def __init__(
        self,
        config: CarsConfig | None = None,
        *,
        http_session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config if config is not None else CarsConfig()
        self._external_session = http_session is not None
        self._http_session = http_session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None

    @property
    def config(self) -> CarsConfig:
        return self._config

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> CarsClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._external_transport:
            return
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise CarsError("Client not initialized. Use 'async with CarsClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def list_my_cars(self, session: Session) -> list[Car]:
        """Fetch all cars listed by the session's user."""
        return await _cars_api.fetch_my_cars(session, self._require_transport())

    async def create_car(self, session: Session, draft: CarDraft) -> Car:
        """Create a car; the image is uploaded only if the draft has one."""
        car = await _cars_api.create_car(session, self._require_transport(), draft)
        _logger.debug("Created car id=%s", car.id)
        return car

    async def update_car(self, session: Session, car_id: int, draft: CarDraft) -> Car:
        """Replace the fields of car *car_id* with *draft*."""
        car = await _cars_api.update_car(session, self._require_transport(), car_id, draft)
        _logger.debug("Updated car id=%s", car.id)
        return car

    async def delete_car(self, session: Session, car_id: int) -> None:
        """Delete car *car_id*."""
        await _cars_api.delete_car(session, self._require_transport(), car_id)
        _logger.debug("Deleted car id=%s", car_id)

    def image_url(self, car: Car) -> str | None:
        """Resolve *car*'s image path against the configured base URL."""
        return car.image_url(self._config.base_url)
