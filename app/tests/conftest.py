import io
from typing import List

import pytest
from rich.console import Console

from controllers.console_controller import ConsoleController
from core.config import Settings
from repos.bus_repository import BusRepository
from schemas.bus import Bus, BusInfo
from services.bus_service import BusService


class ScriptedInput:
    """Feeds canned answers to prompts and records every prompt it was shown."""

    def __init__(self, *lines: str):
        self._lines: List[str] = list(lines)
        self.prompts: List[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._lines)


def make_info(bus_number: str = "B1", origin: str = "NYC", destination: str = "Boston") -> BusInfo:
    return BusInfo(
        bus_number=bus_number,
        driver_name="Dan",
        arrival_time="08:00",
        departure_time="10:00",
        origin=origin,
        destination=destination,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(clear_screen=False, log_level="DEBUG")


@pytest.fixture
def bus_info_factory():
    return make_info


@pytest.fixture
def bus() -> Bus:
    return Bus.create(make_info())


@pytest.fixture
def repository() -> BusRepository:
    return BusRepository()


@pytest.fixture
def service(repository: BusRepository, settings: Settings) -> BusService:
    return BusService(repository, settings)


@pytest.fixture
def scripted_input():
    return ScriptedInput


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None, highlight=False)


@pytest.fixture
def controller_factory(service: BusService, console: Console, settings: Settings):
    def _build(*lines: str):
        read_line = ScriptedInput(*lines)
        controller = ConsoleController(service, console, read_line=read_line, settings=settings)
        return controller, read_line

    return _build
