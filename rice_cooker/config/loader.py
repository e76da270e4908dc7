"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..errors import ConfigurationError
from .defaults import CookerParams, DefaultConfig, LoggingParams, get_default_config
from .validation import ConfigValidator


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "cooker.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_path: Path
    defaults: DefaultConfig
    required: bool = False

    @classmethod
    def create(cls, config_path: Optional[Union[str, Path]] = None) -> "ConfigLoader":
        """
        Create a ConfigLoader instance.

        An explicitly given path must exist; the default path is optional.
        """
        if config_path is None:
            return cls(config_path=DEFAULT_CONFIG_PATH, defaults=get_default_config())

        return cls(
            config_path=Path(config_path),
            defaults=get_default_config(),
            required=True,
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from the YAML configuration file."""
        if not self.config_path.exists():
            if self.required:
                raise ConfigurationError(
                    f"Configuration file not found: {self.config_path}",
                    source=str(self.config_path)
                )
            return {}

        try:
            with open(self.config_path) as f:
                file_config = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigurationError(
                f"Configuration file is not valid YAML: {self.config_path}",
                source=str(self.config_path)
            ) from exc

        if file_config is None:
            return {}

        if not isinstance(file_config, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                source=str(self.config_path)
            )

        return file_config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides, e.g. command line options (highest priority)
        2. Configuration file
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge, validate and build the effective configuration."""
        config = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            details = "; ".join(f"{err.field}: {err.message} (got: {err.value})" for err in errors)
            raise ConfigurationError(
                f"Invalid configuration: {details}",
                errors=errors,
                source=str(self.config_path)
            )

        settings = DefaultConfig(
            cooker=CookerParams(**config["cooker"]),
            logging=LoggingParams(**config["logging"]),
        )
        return settings

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_settings(
    config_path: Optional[Union[str, Path]] = None,
    overrides: Optional[dict[str, Any]] = None
) -> DefaultConfig:
    """Load the effective configuration, raising ConfigurationError if invalid."""
    return ConfigLoader.create(config_path).load(overrides)
