"""Page controller tying the car list and form to the data-access client."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from pycars._constants import CREATE_FAILED_MESSAGE, DELETE_FAILED_MESSAGE, UPDATE_FAILED_MESSAGE
from pycars.exceptions import CarsAuthenticationError, CarsError, error_body
from pycars.models.car import Car
from pycars.models.draft import CarDraft, ImageFile
from pycars.session import Session
from pycars.state.form import CarForm
from pycars.state.store import CarListStore

_logger = logging.getLogger(__name__)

AlertCallback = Callable[[str], None]


class CarsApi(Protocol):
    """Data-access operations the page needs. :class:`~pycars.client.CarsClient` satisfies it."""

    async def list_my_cars(self, session: Session) -> list[Car]:
        ...

    async def create_car(self, session: Session, draft: CarDraft) -> Car:
        ...

    async def update_car(self, session: Session, car_id: int, draft: CarDraft) -> Car:
        ...

    async def delete_car(self, session: Session, car_id: int) -> None:
        ...


class CarsPage:
    """The "my cars" page: list, form, and the handlers between them.

    Attaching a session (``set_session``) loads the list in a background
    task keyed by the token. Each load gets a new generation number;
    a response is applied only while its generation is still current.

    Failed mutations are logged and reported through *on_alert* with a
    fixed message; a failed load is only logged.
    """

    def __init__(
        self,
        api: CarsApi,
        *,
        on_alert: AlertCallback | None = None,
    ) -> None:
        self._api = api
        self._on_alert = on_alert
        self.cars = CarListStore()
        self.form = CarForm()
        self._session: Session | None = None
        self._generation = 0
        self._load_task: asyncio.Task[None] | None = None

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def load_task(self) -> asyncio.Task[None] | None:
        return self._load_task

    @property
    def heading(self) -> str:
        if self._session is None:
            return "Home Page"
        return f"Home Page for {self._session.user.username}!"

    # ------------------------------------------------------------------
    # Session and loading
    # ------------------------------------------------------------------

    def set_session(self, session: Session | None) -> asyncio.Task[None] | None:
        """Attach *session*, reloading the list if its token is new.

        Must be called from a running event loop. Returns the load task
        (possibly one already in flight for the same token).
        """
        previous = self._session
        self._session = session
        if session is None:
            self._generation += 1
            self._cancel_load()
            return None
        if previous is not None and previous.token == session.token:
            return self._load_task
        return self._start_load(session)

    async def refresh(self) -> None:
        """Reload the list with the current session and wait for it."""
        if self._session is None:
            _logger.debug("refresh() without a session; nothing to load")
            return
        await asyncio.wait({self._start_load(self._session)})

    async def wait_loaded(self) -> None:
        """Wait for the current load task, if any, to finish or be cancelled."""
        task = self._load_task
        if task is not None:
            await asyncio.wait({task})

    async def aclose(self) -> None:
        self._generation += 1
        task = self._cancel_load()
        if task is not None:
            await asyncio.wait({task})

    def _start_load(self, session: Session) -> asyncio.Task[None]:
        self._cancel_load()
        self._generation += 1
        generation = self._generation
        self._load_task = asyncio.get_running_loop().create_task(
            self._load(session, generation),
            name=f"pycars-load-{generation}",
        )
        return self._load_task

    def _cancel_load(self) -> asyncio.Task[None] | None:
        task = self._load_task
        if task is not None and not task.done():
            task.cancel()
        return task

    async def _load(self, session: Session, generation: int) -> None:
        try:
            cars = await self._api.list_my_cars(session)
        except CarsError as exc:
            _logger.error("Failed to load cars: %s", error_body(exc))
            return
        if generation != self._generation:
            _logger.debug("Discarding car list from generation %d (current %d)", generation, self._generation)
            return
        try:
            self.cars.replace_all(cars)
        except ValueError as exc:
            _logger.error("Failed to load cars: %s", exc)
            return
        editing_id = self.form.editing_id
        if editing_id is not None and editing_id not in self.cars:
            self.form.cancel()

    # ------------------------------------------------------------------
    # Form handlers
    # ------------------------------------------------------------------

    def change_field(self, name: str, value: Any) -> None:
        self.form.change_field(name, value)

    def select_image(self, files: Sequence[ImageFile]) -> None:
        self.form.select_image(files)

    def begin_edit(self, car: Car) -> None:
        if car.id not in self.cars:
            raise ValueError(f"car id={car.id} is not in the list")
        self.form.begin_edit(car)

    def cancel(self) -> None:
        self.form.cancel()

    async def submit(self) -> Car | None:
        """Create or update depending on the form mode.

        Raises :class:`~pycars.exceptions.CarDraftError` without sending
        anything if the draft is incomplete. Returns the server's record,
        or ``None`` if the request failed.
        """
        draft = self.form.draft
        draft.check()
        editing_id = self.form.editing_id
        if editing_id is None:
            return await self._create(draft)
        return await self._update(editing_id, draft)

    async def delete(self, car_id: int) -> bool:
        """Delete *car_id* remotely, then locally. No confirmation is asked."""
        try:
            await self._api.delete_car(self._require_session(), car_id)
        except CarsError as exc:
            self._fail("delete", DELETE_FAILED_MESSAGE, exc)
            return False
        self.cars.remove(car_id)
        if self.form.editing_id == car_id:
            self.form.cancel()
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _create(self, draft: CarDraft) -> Car | None:
        try:
            car = await self._api.create_car(self._require_session(), draft)
        except CarsError as exc:
            self._fail("create", CREATE_FAILED_MESSAGE, exc)
            return None
        # a reload that finished first may already hold the new record
        if not self.cars.replace(car.id, car):
            self.cars.append(car)
        self.form.reset()
        return car

    async def _update(self, car_id: int, draft: CarDraft) -> Car | None:
        try:
            car = await self._api.update_car(self._require_session(), car_id, draft)
        except CarsError as exc:
            self._fail("update", UPDATE_FAILED_MESSAGE, exc)
            return None
        self.cars.replace(car_id, car)
        self.form.cancel()
        return car

    def _require_session(self) -> Session:
        if self._session is None:
            raise CarsAuthenticationError("No session attached; sign in first")
        return self._session

    def _fail(self, action: str, message: str, exc: CarsError) -> None:
        _logger.error("Failed to %s car: %s", action, error_body(exc))
        if self._on_alert is None:
            _logger.warning("%s", message)
            return
        self._on_alert(message)
