from decimal import Decimal
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.exceptions import InvalidSeatNumberError

SEAT_ROWS = 8
SEATS_PER_ROW = 4
SEAT_COUNT = SEAT_ROWS * SEATS_PER_ROW

CANCEL_TOKEN = "0"


def is_cancel_input(value: Optional[str]) -> bool:
    """Blank input and the "0" token both abort a multi-step operation."""
    if value is None:
        return True
    cleaned = value.strip()
    return not cleaned or cleaned == CANCEL_TOKEN


def seat_position(seat_number: int) -> Tuple[int, int]:
    """Map a 1-based seat number onto its zero-based (row, column) in the grid."""
    if isinstance(seat_number, bool) or not isinstance(seat_number, int):
        raise InvalidSeatNumberError(seat_number)
    if seat_number < 1 or seat_number > SEAT_COUNT:
        raise InvalidSeatNumberError(seat_number)
    return (seat_number - 1) // SEATS_PER_ROW, (seat_number - 1) % SEATS_PER_ROW


class Seat(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    passenger_name: Optional[str] = Field(None, min_length=1)
    fare: Decimal = Field(..., ge=0, frozen=True)

    @property
    def is_reserved(self) -> bool:
        return self.passenger_name is not None


class SeatView(BaseModel):
    seat_number: int = Field(..., ge=1, le=SEAT_COUNT)
    row: int = Field(..., ge=0, lt=SEAT_ROWS)
    column: int = Field(..., ge=0, lt=SEATS_PER_ROW)
    passenger_name: Optional[str] = None
    fare: Decimal

    @field_validator("fare", mode="after")
    @classmethod
    def quantize_fare(cls, value: Decimal) -> Decimal:
        return value.quantize(Decimal("0.01"))

    @property
    def is_reserved(self) -> bool:
        return self.passenger_name is not None
