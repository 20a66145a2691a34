from decimal import Decimal
from typing import Callable, List, Optional

from pydantic import BaseModel, Field, field_validator

from core.config import get_settings
from core.exceptions import OperationCancelled, SeatAlreadyEmptyError, SeatOccupiedError
from schemas.seat import SEAT_ROWS, SEATS_PER_ROW, Seat, SeatView, is_cancel_input, seat_position

# (field, prompt) pairs in the order install asks for them.
INSTALL_FIELDS = (
    ("bus_number", "Enter bus number (or 0 to cancel): "),
    ("driver_name", "Enter driver's name (or 0 to cancel): "),
    ("arrival_time", "Enter arrival time (or 0 to cancel): "),
    ("departure_time", "Enter departure time (or 0 to cancel): "),
    ("origin", "Enter origin (From) (or 0 to cancel): "),
    ("destination", "Enter destination (To) (or 0 to cancel): "),
)

ConfirmCancellation = Callable[[int, str], bool]


class BusInfo(BaseModel):
    bus_number: str = Field(..., min_length=1)
    driver_name: str = Field(..., min_length=1)
    arrival_time: str = Field(..., min_length=1)
    departure_time: str = Field(..., min_length=1)
    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)

    @field_validator(
        "bus_number", "driver_name", "arrival_time", "departure_time", "origin", "destination",
        mode="before",
    )
    @classmethod
    def strip_text(cls, value: str) -> str:
        if not isinstance(value, str):
            raise TypeError("bus fields must be strings")
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("bus fields must not be empty")
        return cleaned


class BusDetail(BusInfo):
    seats: List[SeatView]
    empty_seats: int = Field(..., ge=0)


class Bus(BusInfo):
    seats: List[List[Seat]]

    @field_validator("seats")
    @classmethod
    def check_grid(cls, value: List[List[Seat]]) -> List[List[Seat]]:
        if len(value) != SEAT_ROWS or any(len(row) != SEATS_PER_ROW for row in value):
            raise ValueError(f"a bus has exactly {SEAT_ROWS} rows of {SEATS_PER_ROW} seats")
        return value

    @classmethod
    def create(cls, info: BusInfo, fare: Optional[Decimal] = None) -> "Bus":
        if fare is None:
            fare = get_settings().default_fare
        seats = [[Seat(fare=fare) for _ in range(SEATS_PER_ROW)] for _ in range(SEAT_ROWS)]
        return cls(**info.model_dump(), seats=seats)

    def _seat(self, seat_number: int) -> Seat:
        row, column = seat_position(seat_number)
        return self.seats[row][column]

    def occupant_of(self, seat_number: int) -> Optional[str]:
        return self._seat(seat_number).passenger_name

    def fare_of(self, seat_number: int) -> Decimal:
        return self._seat(seat_number).fare

    def reserve_seat(self, seat_number: int, passenger_name: Optional[str]) -> Decimal:
        """Book a seat and return the fare due.

        Raises InvalidSeatNumberError, SeatOccupiedError or OperationCancelled;
        none of them touch the seat.
        """
        seat = self._seat(seat_number)
        if seat.is_reserved:
            raise SeatOccupiedError(seat_number, seat.passenger_name)
        if is_cancel_input(passenger_name):
            raise OperationCancelled()
        seat.passenger_name = passenger_name.strip()
        return seat.fare

    def cancel_seat(self, seat_number: int, confirm: ConfirmCancellation) -> str:
        """Free a reserved seat once ``confirm(seat_number, occupant)`` agrees.

        Returns the name of the passenger whose reservation was dropped.
        """
        seat = self._seat(seat_number)
        if not seat.is_reserved:
            raise SeatAlreadyEmptyError(seat_number)
        occupant = seat.passenger_name
        if not confirm(seat_number, occupant):
            raise OperationCancelled("Cancellation aborted.")
        seat.passenger_name = None
        return occupant

    def matches_route(self, origin: str, destination: str) -> bool:
        return self.origin == origin and self.destination == destination

    def empty_seat_count(self) -> int:
        return sum(1 for row in self.seats for seat in row if not seat.is_reserved)

    def describe_summary(self) -> BusInfo:
        return BusInfo(**self.model_dump(exclude={"seats"}))

    def describe_detailed(self) -> BusDetail:
        views: List[SeatView] = []
        for row_index, row in enumerate(self.seats):
            for column_index, seat in enumerate(row):
                views.append(
                    SeatView(
                        seat_number=row_index * SEATS_PER_ROW + column_index + 1,
                        row=row_index,
                        column=column_index,
                        passenger_name=seat.passenger_name,
                        fare=seat.fare,
                    )
                )
        return BusDetail(
            **self.model_dump(exclude={"seats"}),
            seats=views,
            empty_seats=self.empty_seat_count(),
        )
