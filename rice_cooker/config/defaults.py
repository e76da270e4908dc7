"""Default configuration parameters for the rice cooker simulator."""

from dataclasses import dataclass

# Target temperatures below this are never accepted, whatever the configuration says.
TEMPERATURE_FLOOR_CELSIUS = 55.0


@dataclass(frozen=True)
class CookerParams:
    """Appliance behaviour parameters."""
    default_temperature_celsius: float = 74.0       # Shown while no temperature is set
    min_temperature_celsius: float = TEMPERATURE_FLOOR_CELSIUS  # Lowest accepted target temperature
    tick_interval_seconds: float = 60.0             # Countdown refresh period


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "WARNING"
    format_json: bool = False
    include_timestamp: bool = True


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    cooker: CookerParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        cooker=CookerParams(),
        logging=LoggingParams(),
    )
