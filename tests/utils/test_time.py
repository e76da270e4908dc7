"""
Tests for wall-clock helpers.

Verifies elapsed-minute flooring and the remaining-time derivation the
cooking countdown relies on.
"""

import pytest
from datetime import datetime, timezone, timedelta
from unittest.mock import patch

from rice_cooker.utils.time import (
    now_utc, elapsed_seconds, elapsed_minutes, calculate_remaining_minutes, format_timestamp
)

START = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestNowUtc:
    """Test now_utc function."""

    def test_uses_wall_clock(self):
        with patch('rice_cooker.utils.time.datetime') as mock_datetime:
            mock_datetime.now.return_value = START

            assert now_utc() == START
            mock_datetime.now.assert_called_once_with(timezone.utc)


class TestElapsed:
    """Test elapsed time helpers."""

    def test_elapsed_seconds(self):
        assert elapsed_seconds(START, START + timedelta(seconds=90)) == 90.0

    def test_elapsed_seconds_defaults_to_now(self):
        with patch('rice_cooker.utils.time.now_utc', return_value=START + timedelta(minutes=2)):
            assert elapsed_seconds(START) == 120.0

    @pytest.mark.parametrize("delta,expected", [
        (timedelta(0), 0),
        (timedelta(seconds=59), 0),
        (timedelta(seconds=60), 1),
        (timedelta(minutes=4, seconds=59), 4),
        (timedelta(hours=1), 60),
    ])
    def test_elapsed_minutes_floors(self, delta, expected):
        assert elapsed_minutes(START, START + delta) == expected


class TestRemainingMinutes:
    """Test calculate_remaining_minutes."""

    def test_no_anchor(self):
        assert calculate_remaining_minutes(20, None, START) == 0

    def test_counts_down(self):
        assert calculate_remaining_minutes(20, START, START + timedelta(minutes=5)) == 15

    def test_never_negative(self):
        assert calculate_remaining_minutes(20, START, START + timedelta(minutes=45)) == 0


def test_format_timestamp():
    assert format_timestamp(START) == "2024-01-01T12:00:00+00:00"
    assert format_timestamp(None) is None
