"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any

from .defaults import TEMPERATURE_FLOOR_CELSIUS, CookerParams, LoggingParams

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _unknown_keys(section: str, params: dict[str, Any], known: type) -> list[ValidationError]:
    allowed = {f.name for f in fields(known)}
    return [
        ValidationError(
            field=f"{section}.{key}",
            message="Unknown configuration key",
            value=params[key]
        )
        for key in params
        if key not in allowed
    ]


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_cooker_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate appliance parameters."""
        errors = _unknown_keys("cooker", params, CookerParams)

        if "default_temperature_celsius" in params:
            value = params["default_temperature_celsius"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="cooker.default_temperature_celsius",
                    message="Must be a positive number",
                    value=value
                ))

        # The floor can be raised but never lowered
        if "min_temperature_celsius" in params:
            value = params["min_temperature_celsius"]
            if not _is_number(value) or value < TEMPERATURE_FLOOR_CELSIUS:
                errors.append(ValidationError(
                    field="cooker.min_temperature_celsius",
                    message=f"Must be a number of at least {TEMPERATURE_FLOOR_CELSIUS:g}",
                    value=value
                ))

        if "tick_interval_seconds" in params:
            value = params["tick_interval_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="cooker.tick_interval_seconds",
                    message="Must be a positive number of seconds",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = _unknown_keys("logging", params, LoggingParams)

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        for name in ("format_json", "include_timestamp"):
            if name in params:
                value = params[name]
                if not isinstance(value, bool):
                    errors.append(ValidationError(
                        field=f"logging.{name}",
                        message="Must be a boolean",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        for section in config:
            if section not in ("cooker", "logging"):
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=config[section]
                ))

        cooker = config.get("cooker", {})
        if not isinstance(cooker, dict):
            errors.append(ValidationError(field="cooker", message="Must be a mapping", value=cooker))
            cooker = {}
        errors.extend(ConfigValidator.validate_cooker_params(cooker))

        logging_cfg = config.get("logging", {})
        if not isinstance(logging_cfg, dict):
            errors.append(ValidationError(field="logging", message="Must be a mapping", value=logging_cfg))
            logging_cfg = {}
        errors.extend(ConfigValidator.validate_logging_params(logging_cfg))

        # Cross-field check only once both temperatures are individually valid
        if not errors:
            default_temp = cooker.get("default_temperature_celsius")
            min_temp = cooker.get("min_temperature_celsius")
            if default_temp is not None and min_temp is not None and default_temp < min_temp:
                errors.append(ValidationError(
                    field="cooker.default_temperature_celsius",
                    message="Must not be below cooker.min_temperature_celsius",
                    value=default_temp
                ))

        return errors
