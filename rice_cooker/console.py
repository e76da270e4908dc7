"""
Operator console for the rice cooker simulator.

Renders the numbered menu, prompts for numeric arguments, forwards each
selection to the ``RiceCooker`` and prints the messages it reports. The
console owns its cooker instance; there is no global appliance.
"""

import sys
from typing import Callable, Optional, TextIO

import fire
import structlog

from .config.loader import load_settings
from .errors import ConfigurationError, InvalidSelectionError
from .logging.config import configure_logging
from .state.machine import RiceCooker
from .state.models import CommandResult

logger = structlog.get_logger(__name__)

WELCOME = "Welcome to the Rice Cooker Management Program!"
GOODBYE = "Goodbye!"
INVALID_OPTION = "Invalid option. Please choose a number between 1 and 15."
INVALID_NUMBER = "Input valid number, please."

MENU_ITEMS = (
    "Plug In",
    "Unplug",
    "Add Rice",
    "Add Water",
    "Start Cooking",
    "Stop Cooking",
    "Start Steam Cooking",
    "Stop Steam Cooking",
    "Keep Warm",
    "Display Remaining Time",
    "Set Temperature",
    "Set Cooking Time",
    "Clean",
    "Display Status",
    "Exit",
)
EXIT_OPTION = len(MENU_ITEMS)


def parse_option(raw: str) -> int:
    """Turn console input into a menu number, or raise InvalidSelectionError."""
    # The whole input must be a number; "3abc" is an invalid option, not option 3.
    try:
        option = int(raw.strip())
    except ValueError:
        raise InvalidSelectionError(INVALID_OPTION, selection=raw) from None

    if not 1 <= option <= EXIT_OPTION:
        raise InvalidSelectionError(INVALID_OPTION, selection=option)
    return option


class OperatorConsole:
    """Text menu front end driving a single RiceCooker."""

    def __init__(
        self,
        cooker: RiceCooker,
        input_func: Optional[Callable[[str], str]] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None
    ) -> None:
        self.cooker = cooker
        self.cooker.listener = self.report
        self._input = input_func or input
        self._out = out
        self._err = err
        self._actions: dict[int, Callable[[], CommandResult]] = {
            1: cooker.plug_in,
            2: cooker.unplug,
            3: lambda: cooker.add_rice(self.ask_int("Enter the quantity of rice (in cups): ")),
            4: lambda: cooker.add_water(self.ask_int("Enter the quantity of water (in cups): ")),
            5: lambda: cooker.start_cooking(self.ask_int("Enter the cooking time (in minutes): ")),
            6: cooker.stop_cooking,
            7: cooker.start_steam_cooking,
            8: cooker.stop_steam_cooking,
            9: cooker.keep_warm,
            10: cooker.display_remaining_time,
            11: lambda: cooker.set_temperature(self.ask_float("Enter the temperature (in Celsius): ")),
            12: lambda: cooker.set_cooking_time(self.ask_int("Enter the cooking time (in minutes): ")),
            13: cooker.clean,
            14: cooker.display_status,
        }

    def say(self, line: str) -> None:
        print(line, file=self._out or sys.stdout, flush=True)

    def warn(self, line: str) -> None:
        print(line, file=self._err or sys.stderr, flush=True)

    def report(self, result: CommandResult) -> None:
        """Print a command outcome: success lines to stdout, errors to stderr."""
        if result.ok:
            for line in result.messages:
                self.say(line)
        else:
            for line in result.messages:
                self.warn(f"Error: {line}")

    def show_menu(self) -> None:
        lines = ["", "Menu:"]
        lines.extend(f"{number}. {label}" for number, label in enumerate(MENU_ITEMS, start=1))
        self.say("\n".join(lines))

    def ask_int(self, prompt: str) -> int:
        """Prompt until the operator enters a whole number."""
        while True:
            raw = self._input(prompt)
            try:
                return int(raw.strip())
            except ValueError:
                self.say(INVALID_NUMBER)

    def ask_float(self, prompt: str) -> float:
        """Prompt until the operator enters a number."""
        while True:
            raw = self._input(prompt)
            try:
                return float(raw.strip())
            except ValueError:
                self.say(INVALID_NUMBER)

    def perform_action(self, option: int) -> bool:
        """
        Execute one menu selection.

        Returns:
            False when the operator chose to exit, True otherwise
        """
        if option == EXIT_OPTION:
            self.say(GOODBYE)
            return False

        action = self._actions.get(option)
        if action is None:
            self.say(INVALID_OPTION)
            logger.info("Invalid menu selection", selection=option)
            return True

        self.report(action())
        return True

    def run(self) -> int:
        """Menu loop. Returns the process exit status."""
        self.say(WELCOME)
        try:
            while True:
                self.show_menu()
                raw = self._input("Enter the option number: ")
                try:
                    option = parse_option(raw)
                except InvalidSelectionError as exc:
                    self.say(str(exc))
                    logger.info("Invalid menu selection", selection=exc.selection)
                    continue
                if not self.perform_action(option):
                    return 0
        except EOFError:
            self.say(GOODBYE)
            return 0
        finally:
            self.cooker.close()


def run(config: Optional[str] = None, log_level: Optional[str] = None,
        log_json: bool = False) -> None:
    """
    Start the interactive rice cooker console.

    Args:
        config: Path to a YAML configuration file
        log_level: Override the configured logging level
        log_json: Emit logs as JSON
    """
    overrides: dict = {}
    if log_level:
        overrides.setdefault("logging", {})["level"] = log_level.upper()
    if log_json:
        overrides.setdefault("logging", {})["format_json"] = True

    try:
        settings = load_settings(config, overrides)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    configure_logging(
        level=settings.logging.level,
        format_json=settings.logging.format_json,
        include_timestamp=settings.logging.include_timestamp,
    )

    console = OperatorConsole(RiceCooker(params=settings.cooker))
    sys.exit(console.run())


def main() -> None:
    """Console script entry point."""
    fire.Fire(run)


if __name__ == "__main__":
    main()
