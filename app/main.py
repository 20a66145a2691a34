import logging
import sys
from typing import Optional

from rich.console import Console

from controllers.console_controller import ConsoleController, ReadLine
from core.config import Settings, get_settings
from repos.bus_repository import BusRepository
from services.bus_service import BusService


def build_controller(
    console: Console,
    read_line: Optional[ReadLine] = None,
    settings: Optional[Settings] = None,
) -> ConsoleController:
    settings = settings or get_settings()
    repository = BusRepository()
    service = BusService(repository, settings)
    return ConsoleController(service, console, read_line=read_line, settings=settings)


def run() -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger(__name__)
    logger.info("Starting %s", settings.app_name)

    console = Console(highlight=False)
    controller = build_controller(console, settings=settings)
    exit_code = controller.run()

    logger.info("%s stopped with exit code %s", settings.app_name, exit_code)
    return exit_code


if __name__ == "__main__":
    sys.exit(run())
