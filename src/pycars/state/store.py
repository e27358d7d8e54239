"""In-memory list of the user's cars.

Order is the order the server returned on load, with created cars
appended at the end. Ids are unique within the list.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pycars.models.car import Car


class CarListStore:
    """Ordered, id-unique cache of car records."""

    def __init__(self, cars: Iterable[Car] = ()) -> None:
        self._cars: list[Car] = []
        self.replace_all(cars)

    def __len__(self) -> int:
        return len(self._cars)

    def __iter__(self) -> Iterator[Car]:
        return iter(tuple(self._cars))

    def __contains__(self, car_id: object) -> bool:
        return any(car.id == car_id for car in self._cars)

    @property
    def cars(self) -> tuple[Car, ...]:
        return tuple(self._cars)

    def ids(self) -> list[int]:
        return [car.id for car in self._cars]

    def get(self, car_id: int) -> Car | None:
        for car in self._cars:
            if car.id == car_id:
                return car
        return None

    def replace_all(self, cars: Iterable[Car]) -> None:
        """Swap in a freshly loaded list."""
        incoming = list(cars)
        ids = [car.id for car in incoming]
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate car ids in list: {ids}")
        self._cars = incoming

    def append(self, car: Car) -> None:
        if car.id in self:
            raise ValueError(f"car id={car.id} is already in the list")
        self._cars.append(car)

    def replace(self, car_id: int, car: Car) -> bool:
        """Put *car* where *car_id* was. Returns ``False`` if *car_id* is absent."""
        for index, existing in enumerate(self._cars):
            if existing.id == car_id:
                self._cars[index] = car
                return True
        return False

    def remove(self, car_id: int) -> bool:
        """Drop *car_id*. Returns ``False`` if it was not in the list."""
        remaining = [car for car in self._cars if car.id != car_id]
        removed = len(remaining) != len(self._cars)
        self._cars = remaining
        return removed
