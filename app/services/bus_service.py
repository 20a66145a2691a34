import logging
from typing import Callable, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from core.config import Settings, get_settings
from core.exceptions import (
    BusNotFoundError,
    DuplicateBusError,
    InvalidInputError,
    NoBusesError,
    OperationCancelled,
)
from repos.bus_repository import BusRepository
from schemas.bus import INSTALL_FIELDS, Bus, BusDetail, BusInfo, ConfirmCancellation
from schemas.reservation import Cancellation, Reservation
from schemas.seat import is_cancel_input

logger = logging.getLogger(__name__)

ReadField = Callable[[str], Optional[str]]


class BusService:
    def __init__(self, repository: BusRepository, settings: Optional[Settings] = None):
        self._repository = repository
        self._settings = settings or get_settings()

    def has_buses(self) -> bool:
        return len(self._repository) > 0

    def ensure_buses_installed(self, message: str = "No buses installed. Please install a bus first.") -> None:
        if not self.has_buses():
            raise NoBusesError(message)

    def register_bus(self, info: BusInfo) -> Bus:
        if self._repository.find_by_number(info.bus_number) is not None:
            raise DuplicateBusError(info.bus_number)
        bus = Bus.create(info, self._settings.default_fare)
        self._repository.add(bus)
        logger.info("Installed bus %s (%s -> %s)", bus.bus_number, bus.origin, bus.destination)
        return bus

    def install_bus(self, read_field: ReadField) -> Bus:
        """Ask for the six bus fields in turn and register the result.

        The first blank or "0" answer stops the prompts and nothing is stored.
        """
        values: Dict[str, str] = {}
        for field, prompt in INSTALL_FIELDS:
            value = read_field(prompt)
            if is_cancel_input(value):
                logger.debug("Install cancelled at field %s", field)
                raise OperationCancelled("Installation cancelled.")
            if field == "bus_number" and self._repository.find_by_number(value.strip()) is not None:
                raise DuplicateBusError(value.strip())
            values[field] = value
        try:
            info = BusInfo(**values)
        except PydanticValidationError as exc:
            raise InvalidInputError("Invalid bus details. Installation cancelled.") from exc
        return self.register_bus(info)

    def get_bus(self, bus_number: str) -> Bus:
        bus = self._repository.find_by_number(bus_number.strip())
        if bus is None:
            raise BusNotFoundError(bus_number)
        return bus

    def reserve_seat(self, bus_number: str, seat_number: int, passenger_name: Optional[str]) -> Reservation:
        bus = self.get_bus(bus_number)
        fare = bus.reserve_seat(seat_number, passenger_name)
        passenger = bus.occupant_of(seat_number)
        logger.info("Reserved seat %s on bus %s for %s", seat_number, bus.bus_number, passenger)
        return Reservation(
            bus_number=bus.bus_number, seat_number=seat_number, passenger_name=passenger, fare=fare
        )

    def cancel_seat(self, bus_number: str, seat_number: int, confirm: ConfirmCancellation) -> Cancellation:
        bus = self.get_bus(bus_number)
        passenger = bus.cancel_seat(seat_number, confirm)
        logger.info("Cancelled seat %s on bus %s (was %s)", seat_number, bus.bus_number, passenger)
        return Cancellation(bus_number=bus.bus_number, seat_number=seat_number, passenger_name=passenger)

    def show_bus(self, bus_number: str) -> BusDetail:
        return self.get_bus(bus_number).describe_detailed()

    def list_buses(self) -> List[BusInfo]:
        return [bus.describe_summary() for bus in self._repository.list_all()]

    def search_by_route(self, origin: str, destination: str) -> List[BusInfo]:
        return [bus.describe_summary() for bus in self._repository.search_by_route(origin, destination)]
