"""Unit tests for configuration management."""

import pytest
from pathlib import Path

from rice_cooker.config.defaults import get_default_config
from rice_cooker.config.loader import ConfigLoader, load_settings
from rice_cooker.config.validation import ConfigValidator
from rice_cooker.errors import ConfigurationError


@pytest.fixture
def config_file(tmp_path: Path):
    def write(text: str) -> Path:
        path = tmp_path / "cooker.yaml"
        path.write_text(text)
        return path
    return write


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        config = get_default_config()
        assert config.cooker.default_temperature_celsius == 74
        assert config.cooker.min_temperature_celsius == 55
        assert config.cooker.tick_interval_seconds == 60
        assert config.logging.level == "WARNING"


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_missing_optional_file_uses_defaults(self, tmp_path: Path) -> None:
        loader = ConfigLoader(config_path=tmp_path / "absent.yaml", defaults=get_default_config())

        config = loader.merge_config()

        assert config["cooker"]["min_temperature_celsius"] == 55
        assert config["logging"]["level"] == "WARNING"

    def test_explicit_missing_file_is_an_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(tmp_path / "absent.yaml")
        assert exc_info.value.recoverable is False

    def test_file_overrides_defaults(self, config_file) -> None:
        path = config_file("cooker:\n  tick_interval_seconds: 1.5\n")

        settings = load_settings(path)

        assert settings.cooker.tick_interval_seconds == 1.5
        assert settings.cooker.default_temperature_celsius == 74

    def test_overrides_beat_file(self, config_file) -> None:
        path = config_file("logging:\n  level: INFO\n  format_json: true\n")

        settings = load_settings(path, {"logging": {"level": "DEBUG"}})

        assert settings.logging.level == "DEBUG"
        assert settings.logging.format_json is True

    def test_empty_file(self, config_file) -> None:
        settings = load_settings(config_file(""))
        assert settings == get_default_config()

    def test_invalid_yaml(self, config_file) -> None:
        with pytest.raises(ConfigurationError, match="not valid YAML"):
            load_settings(config_file("cooker: [unclosed\n"))

    def test_non_mapping_file(self, config_file) -> None:
        with pytest.raises(ConfigurationError, match="mapping"):
            load_settings(config_file("- 1\n- 2\n"))

    def test_invalid_values_rejected(self, config_file) -> None:
        path = config_file("cooker:\n  tick_interval_seconds: 0\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(path)

        assert [err.field for err in exc_info.value.errors] == ["cooker.tick_interval_seconds"]

    def test_minimum_below_floor_rejected(self, config_file) -> None:
        path = config_file(
            "cooker:\n  min_temperature_celsius: 40\n  default_temperature_celsius: 45\n"
        )

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(path)

        assert [err.field for err in exc_info.value.errors] == ["cooker.min_temperature_celsius"]

    def test_minimum_above_floor_accepted(self, config_file) -> None:
        settings = load_settings(config_file("cooker:\n  min_temperature_celsius: 60\n"))
        assert settings.cooker.min_temperature_celsius == 60


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_defaults(self) -> None:
        config = ConfigLoader.create().merge_config()
        assert ConfigValidator.validate_config(config) == []

    @pytest.mark.parametrize("params,field", [
        ({"default_temperature_celsius": -1}, "cooker.default_temperature_celsius"),
        ({"min_temperature_celsius": "hot"}, "cooker.min_temperature_celsius"),
        ({"min_temperature_celsius": 40}, "cooker.min_temperature_celsius"),
        ({"min_temperature_celsius": 54.9}, "cooker.min_temperature_celsius"),
        ({"tick_interval_seconds": True}, "cooker.tick_interval_seconds"),
        ({"heat": 1}, "cooker.heat"),
    ])
    def test_invalid_cooker_params(self, params, field) -> None:
        errors = ConfigValidator.validate_cooker_params(params)
        assert [err.field for err in errors] == [field]

    @pytest.mark.parametrize("params,field", [
        ({"level": "LOUD"}, "logging.level"),
        ({"format_json": "yes"}, "logging.format_json"),
        ({"include_timestamp": 1}, "logging.include_timestamp"),
    ])
    def test_invalid_logging_params(self, params, field) -> None:
        errors = ConfigValidator.validate_logging_params(params)
        assert [err.field for err in errors] == [field]

    def test_lowercase_level_accepted(self) -> None:
        assert ConfigValidator.validate_logging_params({"level": "debug"}) == []

    def test_default_below_minimum(self) -> None:
        config = {
            "cooker": {"default_temperature_celsius": 50, "min_temperature_celsius": 55},
            "logging": {},
        }

        errors = ConfigValidator.validate_config(config)

        assert [err.field for err in errors] == ["cooker.default_temperature_celsius"]

    def test_unknown_section(self) -> None:
        errors = ConfigValidator.validate_config({"oven": {}})
        assert [err.field for err in errors] == ["oven"]
