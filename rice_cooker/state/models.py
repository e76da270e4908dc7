"""
State machine data models for the rice cooker.

The cooking, steam and keep-warm flags are derived from an explicit phase
value instead of being stored independently, so steam cooking without an
active cook cycle cannot be represented.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from ..errors import CookerError
from ..utils.time import format_timestamp


class CookerPhase(str, Enum):
    """Cook cycle phases."""
    IDLE = "idle"
    COOKING = "cooking"


@dataclass(frozen=True)
class Idle:
    """No cook cycle running. Keep-warm survives the end of a cycle."""

    keep_warm: bool = False

    @property
    def phase(self) -> CookerPhase:
        return CookerPhase.IDLE

    @property
    def steam(self) -> bool:
        return False


@dataclass(frozen=True)
class Cooking:
    """Cook cycle running, with optional steam and keep-warm sub-modes."""

    steam: bool = False
    keep_warm: bool = False

    @property
    def phase(self) -> CookerPhase:
        return CookerPhase.COOKING

    def with_steam(self, steam: bool) -> 'Cooking':
        return Cooking(steam=steam, keep_warm=self.keep_warm)

    def with_keep_warm(self) -> 'Cooking':
        return Cooking(steam=self.steam, keep_warm=True)


CookerMode = Union[Idle, Cooking]


def format_number(value: Union[int, float]) -> str:
    """Render 60.0 as '60' and 60.5 as '60.5'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class CookerStatus:
    """Read-only snapshot of every cooker field."""

    powered_on: bool
    cooking: bool
    steam_cooking: bool
    keep_warm: bool
    temperature_celsius: float                       # 0 means unset
    default_temperature_celsius: float
    cooking_duration_minutes: int
    remaining_minutes: int
    rice_cups: int
    water_cups: int
    cook_started_at: Optional[datetime] = None

    @property
    def display_temperature_celsius(self) -> float:
        """Target temperature, falling back to the default while unset."""
        if self.temperature_celsius != 0:
            return self.temperature_celsius
        return self.default_temperature_celsius

    def render(self) -> str:
        """Multi-line status block shown by the console."""
        def flag(value: bool) -> str:
            return str(value).lower()

        return "\n".join([
            "Rice Cooker Status:",
            f"  Plugged In: {flag(self.powered_on)}",
            f"  Cooking: {flag(self.cooking)}",
            f"  Steam Cooking: {flag(self.steam_cooking)}",
            f"  Keep Warm: {flag(self.keep_warm)}",
            f"  Temperature: {format_number(self.display_temperature_celsius)}°C",
            f"  Rice Quantity: {self.rice_cups} cups",
            f"  Water Quantity: {self.water_cups} cups",
        ])

    def to_dict(self) -> dict[str, Any]:
        return {
            "powered_on": self.powered_on,
            "cooking": self.cooking,
            "steam_cooking": self.steam_cooking,
            "keep_warm": self.keep_warm,
            "temperature_celsius": self.temperature_celsius,
            "display_temperature_celsius": self.display_temperature_celsius,
            "cooking_duration_minutes": self.cooking_duration_minutes,
            "remaining_minutes": self.remaining_minutes,
            "rice_cups": self.rice_cups,
            "water_cups": self.water_cups,
            "cook_started_at": format_timestamp(self.cook_started_at),
        }


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one cooker operation as reported to the operator."""

    ok: bool
    messages: tuple[str, ...] = field(default_factory=tuple)
    error: Optional[CookerError] = None
    value: Any = None

    @classmethod
    def success(cls, *messages: str, value: Any = None) -> 'CommandResult':
        return cls(ok=True, messages=tuple(messages), value=value)

    @classmethod
    def failure(cls, error: CookerError) -> 'CommandResult':
        return cls(ok=False, messages=(str(error),), error=error)
