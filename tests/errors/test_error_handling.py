"""
Error handling tests for the rice cooker simulator.

Covers the error hierarchy and the all-or-nothing guarantee: a rejected
command never leaves the cooker partially updated.
"""

import pytest

from rice_cooker.errors import (
    CookerError,
    PreconditionError,
    InvalidSelectionError,
    ConfigurationError,
)


class TestErrorClassification:
    """Test error classification system."""

    def test_operator_errors_are_recoverable(self):
        precondition = PreconditionError("guard failed", operation="clean", failed_checks=["unplugged"])
        assert isinstance(precondition, CookerError)
        assert precondition.recoverable is True
        assert precondition.operation == "clean"
        assert precondition.failed_checks == ["unplugged"]
        assert precondition.context == {}

        selection = InvalidSelectionError("bad option", selection=99)
        assert isinstance(selection, CookerError)
        assert selection.recoverable is True
        assert selection.selection == 99

    def test_configuration_error_is_fatal(self):
        error = ConfigurationError("bad config", errors=["x"], source="cooker.yaml",
                                   context={"line": 3})
        assert error.recoverable is False
        assert error.errors == ["x"]
        assert error.source == "cooker.yaml"
        assert error.context == {"line": 3}

    def test_defaults(self):
        error = PreconditionError("guard failed")
        assert error.operation is None
        assert error.failed_checks == []
        assert str(error) == "guard failed"


class TestAllOrNothing:
    """Rejected commands leave every field untouched."""

    @pytest.mark.parametrize("command,args", [
        ("add_rice", (0,)),
        ("add_water", (-2,)),
        ("start_cooking", (10,)),
        ("stop_cooking", ()),
        ("start_steam_cooking", ()),
        ("stop_steam_cooking", ()),
        ("keep_warm", ()),
        ("display_remaining_time", ()),
        ("set_temperature", (30,)),
        ("set_cooking_time", (0,)),
    ])
    def test_rejected_command_is_noop(self, cooker, manual_timer, command, args):
        cooker.plug_in()
        before = cooker.status()

        result = getattr(cooker, command)(*args)

        assert result.ok is False
        assert isinstance(result.error, PreconditionError)
        assert result.error.operation == command
        assert cooker.status() == before
        assert manual_timer.start_count == 0

    def test_operations_never_raise(self, cooker):
        """Every guard failure is reported, not raised."""
        for command in ("stop_cooking", "start_steam_cooking", "stop_steam_cooking",
                        "keep_warm", "display_remaining_time"):
            assert getattr(cooker, command)().ok is False
        assert cooker.set_cooking_time(5).ok is False
        assert cooker.set_temperature(80).ok is False
