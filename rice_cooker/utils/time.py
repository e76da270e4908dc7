"""
Wall-clock helpers for the cooking countdown.

The countdown is never decremented directly. Remaining time is always
derived from the cook start anchor and the current wall-clock time, so these
helpers are the single place where elapsed time is measured.
"""

import math
from datetime import datetime, timezone
from typing import Optional


def now_utc() -> datetime:
    """Current wall-clock time as a UTC datetime."""
    return datetime.now(timezone.utc)


def elapsed_seconds(start_time: datetime, end_time: Optional[datetime] = None) -> float:
    """
    Calculate elapsed time in seconds between two timestamps.

    Args:
        start_time: Start timestamp
        end_time: End timestamp, defaults to the current wall-clock time

    Returns:
        Elapsed time in seconds
    """
    if end_time is None:
        end_time = now_utc()

    return (end_time - start_time).total_seconds()


def elapsed_minutes(start_time: datetime, end_time: Optional[datetime] = None) -> int:
    """
    Whole minutes elapsed since start_time, floored.

    A clock that moved backwards yields a negative count, same as the
    underlying subtraction.
    """
    return math.floor(elapsed_seconds(start_time, end_time) / 60)


def calculate_remaining_minutes(
    duration_minutes: int,
    started_at: Optional[datetime],
    now: Optional[datetime] = None
) -> int:
    """
    Minutes left in a cook cycle of duration_minutes started at started_at.

    Returns 0 when there is no start anchor; never returns a negative value.
    """
    if started_at is None:
        return 0

    return max(duration_minutes - elapsed_minutes(started_at, now), 0)


def format_timestamp(ts: Optional[datetime]) -> Optional[str]:
    """Format a timestamp for logging and status output."""
    if ts is None:
        return None
    return ts.isoformat()
