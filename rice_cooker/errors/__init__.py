"""
Error classification system for the rice cooker simulator.

Operator errors are reported back to the console as text and never abort
the program; system failures are raised at startup.
"""

from .base import CookerError
from .operator import (
    PreconditionError,
    InvalidSelectionError,
)
from .system_failures import (
    ConfigurationError,
)

__all__ = [
    "CookerError",
    # Operator Errors
    "PreconditionError",
    "InvalidSelectionError",
    # System Failures
    "ConfigurationError",
]
