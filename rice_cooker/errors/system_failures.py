"""
System failure error classifications.

These errors stop the program at startup and need the operator to fix the
environment (for example the configuration file) before retrying.
"""

from typing import Optional

from .base import CookerError


class ConfigurationError(CookerError):
    """Configuration file could not be read or holds invalid values."""

    def __init__(self, message: str, errors: Optional[list] = None,
                 source: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
        self.source = source
        self.recoverable = False
