"""
Unit tests for the Bus model: reservation, cancellation and descriptions
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from core.config import Settings
from core.exceptions import (
    InvalidSeatNumberError,
    OperationCancelled,
    SeatAlreadyEmptyError,
    SeatOccupiedError,
)
from schemas.bus import Bus, BusInfo
from schemas.seat import Seat


def always(answer):
    calls = []

    def confirm(seat_number, occupant):
        calls.append((seat_number, occupant))
        return answer

    confirm.calls = calls
    return confirm


class TestBusCreate:
    def test_all_seats_start_empty_with_default_fare(self, bus):
        assert len(bus.seats) == 8
        assert all(len(row) == 4 for row in bus.seats)
        assert bus.empty_seat_count() == 32
        assert all(seat.fare == Decimal("300.00") for row in bus.seats for seat in row)

    def test_custom_fare(self, bus_info_factory):
        bus = Bus.create(bus_info_factory(), Decimal("125.50"))

        assert bus.fare_of(17) == Decimal("125.50")

    def test_grid_shape_is_enforced(self, bus_info_factory):
        seats = [[Seat(fare=Decimal("1"))] * 4] * 7

        with pytest.raises(PydanticValidationError):
            Bus(**bus_info_factory().model_dump(), seats=seats)

    def test_default_fare_comes_from_settings(self, bus_info_factory, monkeypatch):
        monkeypatch.setattr("schemas.bus.get_settings", lambda: Settings(default_fare=Decimal("42.00")))

        bus = Bus.create(bus_info_factory())

        assert bus.fare_of(1) == Decimal("42.00")


class TestBusInfo:
    def test_fields_are_stripped(self):
        info = BusInfo(
            bus_number="  B1 ",
            driver_name=" Dan",
            arrival_time="08:00 ",
            departure_time="10:00",
            origin="NYC",
            destination="Boston",
        )

        assert info.bus_number == "B1"
        assert info.driver_name == "Dan"
        assert info.arrival_time == "08:00"

    def test_blank_field_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            BusInfo(
                bus_number="B1",
                driver_name="   ",
                arrival_time="08:00",
                departure_time="10:00",
                origin="NYC",
                destination="Boston",
            )


class TestReserveSeat:
    def test_reserve_returns_fare(self, bus):
        fare = bus.reserve_seat(5, "Alice")

        assert fare == Decimal("300.00")
        assert bus.occupant_of(5) == "Alice"
        assert bus.seats[1][0].passenger_name == "Alice"

    def test_reserved_seat_reports_occupant_and_keeps_state(self, bus):
        bus.reserve_seat(5, "Alice")

        with pytest.raises(SeatOccupiedError) as exc_info:
            bus.reserve_seat(5, "Bob")

        assert exc_info.value.occupant == "Alice"
        assert bus.occupant_of(5) == "Alice"

    @pytest.mark.parametrize("name", ["", "0", "  ", None])
    def test_cancel_token_as_name_aborts(self, bus, name):
        with pytest.raises(OperationCancelled):
            bus.reserve_seat(3, name)

        assert bus.occupant_of(3) is None

    @pytest.mark.parametrize("seat_number", [0, 33])
    def test_out_of_range(self, bus, seat_number):
        with pytest.raises(InvalidSeatNumberError):
            bus.reserve_seat(seat_number, "Alice")

        assert bus.empty_seat_count() == 32


class TestCancelSeat:
    def test_reserve_then_cancel_restores_seat(self, bus):
        bus.reserve_seat(12, "Alice")
        confirm = always(True)

        former = bus.cancel_seat(12, confirm)

        assert former == "Alice"
        assert confirm.calls == [(12, "Alice")]
        assert bus.occupant_of(12) is None
        assert bus.fare_of(12) == Decimal("300.00")

    def test_declined_confirmation_keeps_reservation(self, bus):
        bus.reserve_seat(12, "Alice")

        with pytest.raises(OperationCancelled) as exc_info:
            bus.cancel_seat(12, always(False))

        assert exc_info.value.message == "Cancellation aborted."
        assert bus.occupant_of(12) == "Alice"

    def test_empty_seat_is_not_confirmed(self, bus):
        confirm = always(True)

        with pytest.raises(SeatAlreadyEmptyError):
            bus.cancel_seat(12, confirm)

        assert confirm.calls == []
        assert bus.empty_seat_count() == 32

    def test_out_of_range(self, bus):
        with pytest.raises(InvalidSeatNumberError):
            bus.cancel_seat(40, always(True))


class TestRouteAndDescriptions:
    def test_matches_route_is_exact(self, bus):
        assert bus.matches_route("NYC", "Boston") is True
        assert bus.matches_route("nyc", "Boston") is False
        assert bus.matches_route("Boston", "NYC") is False

    def test_summary_has_no_seats(self, bus, bus_info_factory):
        summary = bus.describe_summary()

        assert type(summary) is BusInfo
        assert summary.model_dump() == bus_info_factory().model_dump()

    def test_detailed_lists_every_seat(self, bus):
        bus.reserve_seat(5, "Alice")

        detail = bus.describe_detailed()

        assert [seat.seat_number for seat in detail.seats] == list(range(1, 33))
        assert detail.empty_seats == 31
        seat_five = detail.seats[4]
        assert (seat_five.row, seat_five.column) == (1, 0)
        assert seat_five.passenger_name == "Alice"
        assert detail.seats[0].passenger_name is None
        assert detail.bus_number == "B1"
