from schemas.response import Outcome


class BookingError(Exception):
    """Base class for every error the booking core reports back to the menu."""

    outcome: Outcome = Outcome.INVALID

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class OperationCancelled(BookingError):
    """User-initiated abort via "0" or blank input. State is never changed."""

    outcome = Outcome.CANCELLED

    def __init__(self, message: str = "Operation cancelled.") -> None:
        super().__init__(message)


class ValidationError(BookingError):
    outcome = Outcome.INVALID


class InvalidSeatNumberError(ValidationError):
    def __init__(self, seat_number: int) -> None:
        self.seat_number = seat_number
        super().__init__("Invalid seat number. Please enter a number between 1 and 32.")


class InvalidInputError(ValidationError):
    pass


class InvalidBusError(ValidationError):
    pass


class NotFoundError(BookingError):
    outcome = Outcome.NOT_FOUND


class BusNotFoundError(NotFoundError):
    def __init__(self, bus_number: str) -> None:
        self.bus_number = bus_number
        super().__init__("Bus not found.")


class NoBusesError(NotFoundError):
    pass


class ConflictError(BookingError):
    outcome = Outcome.CONFLICT


class SeatOccupiedError(ConflictError):
    def __init__(self, seat_number: int, occupant: str) -> None:
        self.seat_number = seat_number
        self.occupant = occupant
        super().__init__(f"That seat is already reserved by {occupant}!")


class SeatAlreadyEmptyError(ConflictError):
    def __init__(self, seat_number: int) -> None:
        self.seat_number = seat_number
        super().__init__("This seat is already empty.")


class DuplicateBusError(ConflictError):
    def __init__(self, bus_number: str) -> None:
        self.bus_number = bus_number
        super().__init__(f"Bus {bus_number} is already installed.")
