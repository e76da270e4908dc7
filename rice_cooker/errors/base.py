"""Base exception for the rice cooker simulator."""

from typing import Any, Dict, Optional


class CookerError(Exception):
    """Base class for every error raised inside the simulator."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.recoverable = True
