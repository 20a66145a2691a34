import logging
from typing import Callable, Dict, Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

from core.config import Settings, get_settings
from core.exceptions import (
    BookingError,
    InvalidInputError,
    NotFoundError,
    OperationCancelled,
    SeatOccupiedError,
)
from schemas.bus import BusDetail, BusInfo
from schemas.response import OperationResult, Outcome
from schemas.seat import SEATS_PER_ROW, is_cancel_input
from services.bus_service import BusService

logger = logging.getLogger(__name__)

ReadLine = Callable[[str], str]
Action = Callable[[], OperationResult]

EXIT_CHOICE = 7

MENU_ENTRIES = (
    "Install New Bus",
    "Reserve a Seat",
    "Show Bus Details",
    "Show All Buses Available",
    "Cancel (Remove) a Seat",
    "Search Buses by Route",
    "Exit",
)

OUTCOME_STYLES = {
    Outcome.OK: "green",
    Outcome.CANCELLED: "yellow",
    Outcome.INVALID: "red",
    Outcome.NOT_FOUND: "red",
    Outcome.CONFLICT: "red",
}


class ConsoleController:
    """Numbered menu loop over a BusService.

    Every menu action returns an OperationResult. Errors raised by the service
    are turned into results in ``dispatch`` so the loop never stops on them.
    """

    def __init__(
        self,
        service: BusService,
        console: Console,
        read_line: Optional[ReadLine] = None,
        settings: Optional[Settings] = None,
    ):
        self._service = service
        self._console = console
        self._read_line = read_line or console.input
        self._settings = settings or get_settings()
        self._actions: Dict[int, Action] = {
            1: self.install_bus,
            2: self.reserve_seat,
            3: self.show_bus,
            4: self.list_buses,
            5: self.cancel_seat,
            6: self.search_by_route,
        }

    def run(self) -> int:
        if self._settings.clear_screen:
            self._console.clear()
        while True:
            self._print_menu()
            try:
                raw = self._read_line("\t\tEnter your choice:-> ")
                choice = self._parse_choice(raw)
                if choice == EXIT_CHOICE:
                    break
                if choice is None or choice not in self._actions:
                    self.render_result(
                        OperationResult(
                            outcome=Outcome.INVALID,
                            message=f"Invalid choice. Please enter a number between 1 and {EXIT_CHOICE}.",
                        )
                    )
                    continue
                self.render_result(self.dispatch(self._actions[choice]))
            except EOFError:
                break
        self._console.print("Exiting... Have a nice day!")
        return 0

    def dispatch(self, action: Action) -> OperationResult:
        try:
            return action()
        except BookingError as exc:
            logger.debug("%s ended with %s: %s", action.__name__, exc.outcome, exc.message)
            return OperationResult(outcome=exc.outcome, message=exc.message)

    def install_bus(self) -> OperationResult[BusInfo]:
        bus = self._service.install_bus(self._read_line)
        return OperationResult(message="Bus installed successfully!", data=bus.describe_summary())

    def reserve_seat(self) -> OperationResult:
        self._service.ensure_buses_installed()
        bus_number = self._ask_text("Enter bus number to reserve seat (or 0 to cancel): ")
        bus = self._service.get_bus(bus_number)
        seat_number = self._ask_seat_number("Enter seat number (1-32) (or 0 to cancel): ")
        occupant = bus.occupant_of(seat_number)
        if occupant is not None:
            raise SeatOccupiedError(seat_number, occupant)
        passenger = self._read_line("Enter passenger's name (or 0 to cancel): ")
        reservation = self._service.reserve_seat(bus_number, seat_number, passenger)
        return OperationResult(
            message=(
                f"Seat {seat_number} reserved successfully for {reservation.passenger_name}.\n"
                f"Fare: {self._settings.currency_label} {reservation.fare:.2f}"
            ),
            data=reservation,
        )

    def show_bus(self) -> OperationResult[BusDetail]:
        self._service.ensure_buses_installed("No buses installed yet.")
        bus_number = self._ask_text("Enter bus number to show details (or 0 to cancel): ")
        detail = self._service.show_bus(bus_number)
        self.render_detail(detail)
        return OperationResult(message="", data=detail)

    def list_buses(self) -> OperationResult:
        self._service.ensure_buses_installed("No buses available.")
        buses = self._service.list_buses()
        self.render_summaries(buses, "*")
        return OperationResult(message="", data=buses)

    def cancel_seat(self) -> OperationResult:
        self._service.ensure_buses_installed("No buses installed yet.")
        bus_number = self._ask_text("Enter bus number to cancel a seat (or 0 to cancel): ")
        self._service.get_bus(bus_number)
        seat_number = self._ask_seat_number("Enter seat number to cancel (1-32) (or 0 to cancel): ")
        cancellation = self._service.cancel_seat(bus_number, seat_number, self._confirm)
        return OperationResult(
            message=f"Reservation for seat {seat_number} has been cancelled.",
            data=cancellation,
        )

    def search_by_route(self) -> OperationResult:
        self._service.ensure_buses_installed("No buses available.")
        origin = self._ask_text("Enter origin (From): ", "Search cancelled.")
        destination = self._ask_text("Enter destination (To): ", "Search cancelled.")
        matches = self._service.search_by_route(origin, destination)
        if not matches:
            raise NotFoundError(f"No matching buses found for route {origin} -> {destination}.")
        self.render_summaries(matches, "=")
        return OperationResult(message="", data=matches)

    def render_result(self, result: OperationResult) -> None:
        if result.message:
            self._console.print(escape(result.message), style=OUTCOME_STYLES[result.outcome])

    def render_summaries(self, buses: Iterable[BusInfo], characters: str) -> None:
        for info in buses:
            self._console.print(Rule(characters=characters))
            self._console.print(self._info_table(info, route_line=True))
            self._console.print(Rule(characters=characters))

    def render_detail(self, detail: BusDetail) -> None:
        label = self._settings.currency_label
        self._console.print(Rule(characters="*"))
        self._console.print(self._info_table(detail, route_line=False))
        self._console.print(Rule(characters="*"))

        grid = Table(show_header=True, header_style="bold")
        grid.add_column("Row", justify="right")
        for column in range(SEATS_PER_ROW):
            grid.add_column(f"Col {column + 1}")
        for row_start in range(0, len(detail.seats), SEATS_PER_ROW):
            row = detail.seats[row_start:row_start + SEATS_PER_ROW]
            cells = [
                f"Seat {seat.seat_number:2d}: {escape(seat.passenger_name or 'Empty')} ({label} {seat.fare:.2f})"
                for seat in row
            ]
            grid.add_row(str(row[0].row + 1), *cells)
        self._console.print(grid)
        self._console.print(f"Total empty seats: {detail.empty_seats}")

    def _info_table(self, info: BusInfo, route_line: bool) -> Table:
        table = Table.grid(padding=(0, 1))
        table.add_column(no_wrap=True)
        table.add_column()
        table.add_row("Bus Number    :", escape(info.bus_number))
        table.add_row("Driver        :", escape(info.driver_name))
        table.add_row("Arrival Time  :", escape(info.arrival_time))
        table.add_row("Departure Time:", escape(info.departure_time))
        if route_line:
            table.add_row("Route         :", escape(f"{info.origin} -> {info.destination}"))
        else:
            table.add_row("From          :", escape(info.origin))
            table.add_row("To            :", escape(info.destination))
        return table

    def _print_menu(self) -> None:
        self._console.print(f"\n\t\t===== {escape(self._settings.app_name)} =====")
        for number, entry in enumerate(MENU_ENTRIES, start=1):
            self._console.print(f"\t\t{number}. {entry}")
        self._console.print()

    def _ask_text(self, prompt: str, cancel_message: str = "Operation cancelled.") -> str:
        value = self._read_line(prompt)
        if is_cancel_input(value):
            raise OperationCancelled(cancel_message)
        return value.strip()

    def _ask_seat_number(self, prompt: str) -> int:
        raw = self._read_line(prompt)
        if raw is None or not raw.strip():
            raise OperationCancelled()
        try:
            seat_number = int(raw.strip())
        except ValueError as exc:
            raise InvalidInputError("Invalid input. Operation cancelled.") from exc
        if seat_number == 0:
            raise OperationCancelled()
        return seat_number

    def _confirm(self, seat_number: int, occupant: str) -> bool:
        answer = self._read_line(
            f"Are you sure you want to cancel the reservation for seat {seat_number} "
            f"(Passenger: {escape(occupant)})? (y/n): "
        )
        return answer.strip().lower().startswith("y")

    @staticmethod
    def _parse_choice(raw: str) -> Optional[int]:
        try:
            return int(raw.strip())
        except ValueError:
            return None
