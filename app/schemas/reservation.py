from decimal import Decimal

from pydantic import BaseModel, Field

from schemas.seat import SEAT_COUNT


class Reservation(BaseModel):
    bus_number: str
    seat_number: int = Field(..., ge=1, le=SEAT_COUNT)
    passenger_name: str = Field(..., min_length=1)
    fare: Decimal = Field(..., ge=0)


class Cancellation(BaseModel):
    bus_number: str
    seat_number: int = Field(..., ge=1, le=SEAT_COUNT)
    passenger_name: str = Field(..., min_length=1)
