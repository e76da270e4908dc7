"""
Operator error classifications.

These exceptions describe commands the operator issued at the wrong time or
with the wrong input. They never leave the cooker in a partial state; the
operator simply re-issues the command.
"""

from typing import Any, Optional

from .base import CookerError


class PreconditionError(CookerError):
    """A command guard failed: wrong power/cooking state or a bad quantity."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 failed_checks: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.failed_checks = failed_checks or []


class InvalidSelectionError(CookerError):
    """Menu selector outside the numbered range, or not a number at all."""

    def __init__(self, message: str, selection: Optional[Any] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.selection = selection
