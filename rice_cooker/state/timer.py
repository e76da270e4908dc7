"""
Cookdown timer.

A repeating, cancellable tick source backed by ``threading.Timer``. The
timer knows nothing about cooking; the state machine hands it a callback
and cancels it when the cook cycle ends.
"""

import threading
from typing import Callable, Optional

import structlog

logger = structlog.get_logger(__name__)


class CookdownTimer:
    """Fires a callback every ``interval_seconds`` until cancelled."""

    def __init__(self, interval_seconds: float = 60.0):
        self.interval_seconds = interval_seconds
        self.logger = logger
        self._lock = threading.Lock()
        self._handle: Optional[threading.Timer] = None
        self._callback: Optional[Callable[[], object]] = None
        # Bumped on every start/cancel so a tick already in flight
        # does not reschedule a stale schedule.
        self._generation = 0

    @property
    def active(self) -> bool:
        """Whether a tick is currently scheduled."""
        with self._lock:
            return self._handle is not None

    def start(self, callback: Callable[[], object]) -> None:
        """Begin ticking, replacing any schedule already running."""
        with self._lock:
            self._cancel_locked()
            self._callback = callback
            self._schedule_locked(self._generation)
        self.logger.debug("Cookdown timer started", interval_seconds=self.interval_seconds)

    def cancel(self) -> None:
        """Stop ticking. Safe to call from inside the callback."""
        with self._lock:
            was_active = self._handle is not None
            self._cancel_locked()
        if was_active:
            self.logger.debug("Cookdown timer cancelled")

    def _cancel_locked(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._callback = None
        self._generation += 1

    def _schedule_locked(self, generation: int) -> None:
        handle = threading.Timer(self.interval_seconds, self._fire, args=(generation,))
        handle.daemon = True
        self._handle = handle
        handle.start()

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._handle is None:
                return
            callback = self._callback

        try:
            callback()
        except Exception:
            self.logger.exception("Cookdown tick failed")

        with self._lock:
            if generation == self._generation and self._handle is not None:
                self._schedule_locked(generation)
