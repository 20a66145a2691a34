from typing import Callable, Iterator, List, Optional

from core.exceptions import InvalidBusError
from schemas.bus import Bus

BusPredicate = Callable[[Bus], bool]


class BusSequence:
    """Lazy, re-iterable view over the repository in insertion order.

    Each iteration walks the backing list afresh, so a sequence taken before
    an install also yields the newly installed bus.
    """

    def __init__(self, buses: List[Bus], predicate: Optional[BusPredicate] = None):
        self._buses = buses
        self._predicate = predicate

    def __iter__(self) -> Iterator[Bus]:
        for bus in self._buses:
            if self._predicate is None or self._predicate(bus):
                yield bus


class BusRepository:
    def __init__(self) -> None:
        self._buses: List[Bus] = []

    def __len__(self) -> int:
        return len(self._buses)

    def add(self, bus: Bus) -> Bus:
        # Uniqueness of bus_number is enforced by BusService, not here.
        if not bus.bus_number:
            raise InvalidBusError("A bus must have a bus number to be installed.")
        self._buses.append(bus)
        return bus

    def find_by_number(self, bus_number: str) -> Optional[Bus]:
        for bus in self._buses:
            if bus.bus_number == bus_number:
                return bus
        return None

    def list_all(self) -> BusSequence:
        return BusSequence(self._buses)

    def search_by_route(self, origin: str, destination: str) -> BusSequence:
        return BusSequence(self._buses, lambda bus: bus.matches_route(origin, destination))
