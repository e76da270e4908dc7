"""Pytest configuration and shared fixtures."""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from rice_cooker.config.defaults import CookerParams
from rice_cooker.logging.config import configure_logging
from rice_cooker.state.machine import RiceCooker


@pytest.fixture(autouse=True)
def quiet_logging():
    """Route structlog through stdlib logging at WARNING for every test."""
    configure_logging(level="WARNING")


class FakeClock:
    """Controllable wall clock."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: float = 0, seconds: float = 0) -> None:
        self.now += timedelta(minutes=minutes, seconds=seconds)


class ManualTimer:
    """Tick scheduler that only fires when the test says so."""

    def __init__(self):
        self.callback: Optional[Callable[[], object]] = None
        self.start_count = 0
        self.cancel_count = 0

    @property
    def active(self) -> bool:
        return self.callback is not None

    def start(self, callback: Callable[[], object]) -> None:
        self.callback = callback
        self.start_count += 1

    def cancel(self) -> None:
        self.callback = None
        self.cancel_count += 1

    def fire(self):
        assert self.callback is not None, "timer is not running"
        return self.callback()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def manual_timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def cooker(clock: FakeClock, manual_timer: ManualTimer) -> RiceCooker:
    """Fresh cooker: unplugged, empty, idle."""
    return RiceCooker(params=CookerParams(), clock=clock, timer=manual_timer)


@pytest.fixture
def ready_cooker(cooker: RiceCooker) -> RiceCooker:
    """Plugged in with 2 cups of rice and 3 cups of water."""
    cooker.plug_in()
    cooker.add_rice(2)
    cooker.add_water(3)
    return cooker


@pytest.fixture
def cooking_cooker(ready_cooker: RiceCooker) -> RiceCooker:
    """Cooking a 20 minute cycle."""
    ready_cooker.start_cooking(20)
    return ready_cooker
