"""
Core rice cooker state machine.

Every operation checks its guard before touching any state. A failed guard
is reported back as a ``CommandResult`` carrying a ``PreconditionError``;
nothing is raised to the caller and nothing is half-applied.

Console commands and countdown ticks arrive on different threads, so all
state access is serialized through one re-entrant lock.
"""

import functools
import threading
from datetime import datetime
from typing import Callable, Optional, Protocol

import structlog

from ..config.defaults import TEMPERATURE_FLOOR_CELSIUS, CookerParams
from ..errors import PreconditionError
from ..logging.config import get_state_logger, log_command_rejected, log_state_transition
from ..utils.time import calculate_remaining_minutes, format_timestamp, now_utc
from .models import CommandResult, Cooking, CookerMode, CookerStatus, Idle, format_number
from .timer import CookdownTimer

logger = structlog.get_logger(__name__)
state_logger = get_state_logger(__name__)


class TickScheduler(Protocol):
    """Anything that can drive the countdown: ``CookdownTimer`` or a test double."""

    @property
    def active(self) -> bool: ...

    def start(self, callback: Callable[[], object]) -> None: ...

    def cancel(self) -> None: ...


def _reported(method):
    """Run a command under the state lock and report guard failures as results."""
    @functools.wraps(method)
    def wrapper(self: "RiceCooker", *args, **kwargs) -> CommandResult:
        with self._lock:
            try:
                return method(self, *args, **kwargs)
            except PreconditionError as exc:
                log_command_rejected(
                    self.logger,
                    appliance_id=self.appliance_id,
                    operation=exc.operation,
                    failed_checks=exc.failed_checks,
                    reason=exc.message,
                )
                return CommandResult.failure(exc)
    return wrapper


class RiceCooker:
    """Gatekeeper and mutator for all rice cooker state."""

    def __init__(
        self,
        params: Optional[CookerParams] = None,
        clock: Optional[Callable[[], datetime]] = None,
        timer: Optional[TickScheduler] = None,
        listener: Optional[Callable[[CommandResult], None]] = None,
        appliance_id: str = "rice-cooker"
    ) -> None:
        self.params = params or CookerParams()
        self.appliance_id = appliance_id
        self.listener = listener
        self.logger = logger
        self.state_logger = state_logger

        self._clock = clock or now_utc
        self._timer = timer or CookdownTimer(self.params.tick_interval_seconds)
        self._lock = threading.RLock()

        self._powered_on = False
        self._mode: CookerMode = Idle()
        self._temperature_celsius: float = 0
        self._cooking_duration_minutes = 0
        self._rice_cups = 0
        self._water_cups = 0
        self._cook_started_at: Optional[datetime] = None

    # -- read-only views -----------------------------------------------------

    @property
    def mode(self) -> CookerMode:
        return self._mode

    @property
    def powered_on(self) -> bool:
        return self._powered_on

    @property
    def cooking(self) -> bool:
        return isinstance(self._mode, Cooking)

    @property
    def steam_cooking(self) -> bool:
        return self._mode.steam

    @property
    def warming(self) -> bool:
        """Keep-warm flag (``keep_warm`` is the command that sets it)."""
        return self._mode.keep_warm

    @property
    def temperature_celsius(self) -> float:
        return self._temperature_celsius

    @property
    def cooking_duration_minutes(self) -> int:
        return self._cooking_duration_minutes

    @property
    def rice_cups(self) -> int:
        return self._rice_cups

    @property
    def water_cups(self) -> int:
        return self._water_cups

    @property
    def cook_started_at(self) -> Optional[datetime]:
        return self._cook_started_at

    @property
    def remaining_minutes(self) -> int:
        """Minutes left in the cook cycle, derived from the wall clock; 0 while idle."""
        with self._lock:
            if not self.cooking:
                return 0
            return calculate_remaining_minutes(
                self._cooking_duration_minutes, self._cook_started_at, self._clock()
            )

    @property
    def timer_active(self) -> bool:
        return self._timer.active

    def status(self) -> CookerStatus:
        """Snapshot of every field."""
        with self._lock:
            return CookerStatus(
                powered_on=self._powered_on,
                cooking=self.cooking,
                steam_cooking=self.steam_cooking,
                keep_warm=self.warming,
                temperature_celsius=self._temperature_celsius,
                default_temperature_celsius=self.params.default_temperature_celsius,
                cooking_duration_minutes=self._cooking_duration_minutes,
                remaining_minutes=self.remaining_minutes,
                rice_cups=self._rice_cups,
                water_cups=self._water_cups,
                cook_started_at=self._cook_started_at,
            )

    # -- power ---------------------------------------------------------------

    @_reported
    def plug_in(self) -> CommandResult:
        self._powered_on = True
        self.logger.info("Cooker plugged in", appliance_id=self.appliance_id)
        return CommandResult.success("Rice cooker is plugged in.")

    @_reported
    def unplug(self) -> CommandResult:
        # Unplugging does not stop a running cook cycle or its countdown.
        self._powered_on = False
        if self.cooking:
            self.logger.warning(
                "Cooker unplugged while cooking; cook cycle continues",
                appliance_id=self.appliance_id,
                remaining_minutes=self.remaining_minutes,
                timer_active=self._timer.active
            )
        else:
            self.logger.info("Cooker unplugged", appliance_id=self.appliance_id)
        return CommandResult.success("Rice cooker is unplugged.")

    # -- ingredients ---------------------------------------------------------

    @_reported
    def add_rice(self, quantity: int) -> CommandResult:
        self._require(
            "add_rice",
            "Error adding rice. Please make sure the cooker is not cooking and "
            "provide a valid quantity (greater than 0).",
            not_cooking=not self.cooking,
            positive_quantity=quantity > 0,
        )
        self._rice_cups += quantity
        self.logger.info("Rice added", quantity=quantity, rice_cups=self._rice_cups)
        return CommandResult.success(
            f"Added {format_number(quantity)} cups of rice to the cooker.",
            value=self._rice_cups
        )

    @_reported
    def add_water(self, quantity: int) -> CommandResult:
        self._require(
            "add_water",
            "Error adding water. Please provide a valid quantity (greater than 0).",
            positive_quantity=quantity > 0,
        )
        self._water_cups += quantity
        self.logger.info("Water added", quantity=quantity, water_cups=self._water_cups)
        return CommandResult.success(
            f"Added {format_number(quantity)} cups of water to the cooker.",
            value=self._water_cups
        )

    # -- cook cycle ----------------------------------------------------------

    @_reported
    def start_cooking(self, duration_minutes: Optional[int] = None) -> CommandResult:
        """
        Start a cook cycle and its countdown.

        Args:
            duration_minutes: Cycle length; defaults to the preset from
                ``set_cooking_time`` when omitted.
        """
        self._require(
            "start_cooking",
            "Error starting cooking. Please check if the cooker is plugged in, rice and "
            "water are added, and cooking is not already in progress.",
            powered_on=self._powered_on,
            rice_added=self._rice_cups > 0,
            water_added=self._water_cups > 0,
            not_cooking=not self.cooking,
        )
        if duration_minutes is None:
            duration_minutes = self._cooking_duration_minutes

        previous = self._mode
        self._cooking_duration_minutes = duration_minutes
        self._cook_started_at = self._clock()
        self._mode = Cooking(keep_warm=previous.keep_warm)
        self._transition(previous, "start_cooking", {
            "duration_minutes": duration_minutes,
            "cook_started_at": format_timestamp(self._cook_started_at),
        })
        self._timer.start(self.tick)

        remaining = self.remaining_minutes
        return CommandResult.success(
            "Cooking started.", *self._remaining_lines(remaining), value=remaining
        )

    @_reported
    def stop_cooking(self) -> CommandResult:
        self._require(
            "stop_cooking",
            "Error stopping cooking. Cooking is not in progress.",
            cooking=self.cooking,
        )
        return CommandResult.success(self._stop("stop_cooking"), value=0)

    @_reported
    def start_steam_cooking(self) -> CommandResult:
        self._require(
            "start_steam_cooking",
            "Error starting steam cooking. Please check if the cooker is plugged in, cooking "
            "is in progress, and steam cooking is not already in progress.",
            powered_on=self._powered_on,
            cooking=self.cooking,
            not_steam_cooking=not self.steam_cooking,
        )
        self._mode = self._mode.with_steam(True)
        self.logger.info("Steam cooking started", appliance_id=self.appliance_id)
        return CommandResult.success("Steam cooking started.")

    @_reported
    def stop_steam_cooking(self) -> CommandResult:
        self._require(
            "stop_steam_cooking",
            "Error stopping steam cooking. Steam cooking is not in progress.",
            steam_cooking=self.steam_cooking,
        )
        self._mode = self._mode.with_steam(False)
        self.logger.info("Steam cooking stopped", appliance_id=self.appliance_id)
        return CommandResult.success("Steam cooking stopped.")

    @_reported
    def keep_warm(self) -> CommandResult:
        self._require(
            "keep_warm",
            "Error activating keep warm function. Please check if the cooker is plugged in, "
            "cooking is in progress, and keep warm function is not already activated.",
            powered_on=self._powered_on,
            cooking=self.cooking,
            not_warming=not self.warming,
        )
        self._mode = self._mode.with_keep_warm()
        self.logger.info("Keep warm activated", appliance_id=self.appliance_id)
        return CommandResult.success("Keep warm function activated.")

    @_reported
    def display_remaining_time(self) -> CommandResult:
        self._require(
            "display_remaining_time",
            "Error displaying remaining time. Cooking or keep warm function must be in progress.",
            cooking_or_warming=self.cooking or self.warming,
        )
        remaining = self.remaining_minutes
        return CommandResult.success(*self._remaining_lines(remaining), value=remaining)

    # -- settings ------------------------------------------------------------

    @_reported
    def set_temperature(self, temperature: float) -> CommandResult:
        self._require(
            "set_temperature",
            "Error setting temperature. Please check if the cooker is plugged in.",
            powered_on=self._powered_on,
        )
        minimum = max(self.params.min_temperature_celsius, TEMPERATURE_FLOOR_CELSIUS)
        self._require(
            "set_temperature",
            "Error setting temperature. Temperature must be greater than or equal to "
            f"{format_number(minimum)}°C.",
            minimum_temperature=temperature >= minimum,
        )
        self._temperature_celsius = temperature
        self.logger.info("Temperature set", temperature_celsius=temperature)
        return CommandResult.success(
            f"Temperature set to {format_number(temperature)}°C.", value=temperature
        )

    @_reported
    def set_cooking_time(self, minutes: int) -> CommandResult:
        # The guard does not require an active cook cycle even though the
        # message mentions it; while idle this only presets the duration.
        self._require(
            "set_cooking_time",
            "Error setting cooking time. Please check if the cooker is plugged in, not "
            "cooking, and provide a valid time.",
            powered_on=self._powered_on,
            positive_time=minutes > 0,
        )
        self._cooking_duration_minutes = minutes
        self.logger.info("Cooking time set", minutes=minutes, cooking=self.cooking)

        messages = [f"Cooking time set to {format_number(minutes)} minutes."]
        if self.cooking:
            messages.extend(self._refresh_countdown("set_cooking_time"))
        return CommandResult.success(*messages, value=self.remaining_minutes)

    @_reported
    def clean(self) -> CommandResult:
        self._require(
            "clean",
            "Error cleaning. Please make sure the cooker is not cooking and it is "
            "unplugged before cleaning.",
            not_cooking=not self.cooking,
            unplugged=not self._powered_on,
        )
        self.logger.info("Cooker cleaned", appliance_id=self.appliance_id)
        return CommandResult.success("Cleaning the rice cooker.")

    @_reported
    def display_status(self) -> CommandResult:
        status = self.status()
        self.logger.debug("Status displayed", appliance_id=self.appliance_id, status=status.to_dict())
        return CommandResult.success(status.render(), value=status)

    # -- countdown -----------------------------------------------------------

    def tick(self) -> CommandResult:
        """
        Countdown callback: refresh remaining time and auto-stop at zero.

        Called by the timer thread once per interval; safe to call directly.
        Produced messages are also pushed to ``listener``.
        """
        with self._lock:
            if not self.cooking:
                return CommandResult.success()
            self.logger.debug(
                "Cookdown tick",
                appliance_id=self.appliance_id,
                remaining_minutes=self.remaining_minutes
            )
            result = CommandResult.success(
                *self._refresh_countdown("timer_expired"), value=self.remaining_minutes
            )

        if self.listener is not None and result.messages:
            self.listener(result)
        return result

    def close(self) -> None:
        """Cancel any pending countdown tick."""
        self._timer.cancel()

    # -- internals -----------------------------------------------------------

    def _require(self, operation: str, message: str, **checks: bool) -> None:
        failed = [name for name, passed in checks.items() if not passed]
        if failed:
            raise PreconditionError(message, operation=operation, failed_checks=failed)

    def _refresh_countdown(self, trigger: str) -> list[str]:
        remaining = self.remaining_minutes
        if remaining > 0:
            return self._remaining_lines(remaining)
        return [self._stop(trigger)]

    def _remaining_lines(self, remaining: int) -> list[str]:
        if self.cooking and remaining > 0:
            return [f"Cooking time remaining: {remaining} minutes."]
        return []

    def _stop(self, trigger: str) -> str:
        previous = self._mode
        self._timer.cancel()
        self._mode = Idle(keep_warm=previous.keep_warm)
        self._transition(previous, trigger, {
            "duration_minutes": self._cooking_duration_minutes,
            "steam_cooking": previous.steam,
        })
        return "Cooking stopped."

    def _transition(self, previous: CookerMode, trigger: str, context: dict) -> None:
        log_state_transition(
            self.state_logger,
            appliance_id=self.appliance_id,
            from_state=previous.phase.value,
            to_state=self._mode.phase.value,
            trigger=trigger,
            context=context
        )
