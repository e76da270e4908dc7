"""
Centralized logging configuration for the rice cooker simulator.

This module provides standardized logging configuration using structlog
for all components. Log output goes to stderr so it never interleaves with
the console messages the operator reads on stdout.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "WARNING",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s",  # structlog will handle formatting
        force=True
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_state_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for cooker state transitions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for state transitions
    """
    # Initial values stay on the lazy proxy, so a logger created at import
    # time still picks up a configure_logging() call made later.
    return structlog.get_logger(
        name,
        subsystem="state_machine",
        audit_trail=True
    )


def log_state_transition(
    logger: FilteringBoundLogger,
    appliance_id: str,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a cooker phase transition with standardized format.

    Args:
        logger: Structlog logger instance
        appliance_id: ID of the cooker transitioning
        from_state: Current phase
        to_state: Target phase
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        appliance_id=appliance_id,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("State transition")


def log_command_rejected(
    logger: FilteringBoundLogger,
    appliance_id: str,
    operation: Optional[str],
    failed_checks: list[str],
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a command whose guard failed.

    Args:
        logger: Structlog logger instance
        appliance_id: ID of the cooker that rejected the command
        operation: Name of the rejected operation
        failed_checks: Names of the guard conditions that did not hold
        reason: Message reported to the operator
        context: Additional context data
    """
    bound_logger = logger.bind(
        appliance_id=appliance_id,
        operation=operation,
        failed_checks=failed_checks,
        reason=reason
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.warning("Command rejected")
