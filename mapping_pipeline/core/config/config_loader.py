"""
Configuration Loader
Loads and validates YAML configuration files
"""

from pathlib import Path
from typing import Any, Dict, Tuple
import yaml

from .app_config import EditorConfig


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


class ConfigLoader:
    """
    Loads and validates editor configuration from YAML files.

    Responsibilities:
    - Read YAML configuration file
    - Validate types and value ranges
    - Fill in defaults for absent keys
    - Return validated EditorConfig instance
    """

    def __init__(self, config_path: Path):
        """
        Initialize ConfigLoader with path to config file.

        Args:
            config_path: Path to YAML configuration file
        """
        self._config_path = Path(config_path)

    def load(self) -> EditorConfig:
        """
        Load and validate configuration from YAML file.

        Returns:
            EditorConfig: Validated configuration object

        Raises:
            ConfigValidationError: If configuration is invalid
            FileNotFoundError: If config file doesn't exist
        """
        config_data = self._load_yaml()
        return self.from_dict(config_data)

    def from_dict(self, config_data: Dict[str, Any]) -> EditorConfig:
        """Validate an already parsed configuration mapping."""
        defaults = EditorConfig()

        return EditorConfig(
            canvas_size=self._validate_size(config_data, "canvas", defaults.canvas_size),
            fps=self._validate_positive_int(config_data, "fps", defaults.fps),
            loop=self._validate_bool(config_data, "loop", defaults.loop),
            default_profile=self._validate_profile(config_data, defaults.default_profile),
            new_source_size=self._validate_size(config_data, "new_source", defaults.new_source_size),
            new_zone_size=self._validate_size(config_data, "new_zone", defaults.new_zone_size),
            copy_offset=self._validate_non_negative_int(config_data, "copy_offset", defaults.copy_offset),
            shuffle_attempts=self._validate_non_negative_int(config_data, "shuffle_attempts", defaults.shuffle_attempts),
            export_indent=self._validate_non_negative_int(config_data, "export_indent", defaults.export_indent),
            logs_dir=self._validate_logs_dir(config_data, defaults.logs_dir),
        )

    def _load_yaml(self) -> Dict[str, Any]:
        """Load YAML file and return parsed data."""
        if not self._config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self._config_path}"
            )

        try:
            with open(self._config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)

            if data is None:
                return {}

            if not isinstance(data, dict):
                raise ConfigValidationError(
                    "Configuration must be a YAML mapping/dictionary"
                )

            return data

        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML syntax: {e}")

    def _validate_size(self, config: Dict[str, Any], key: str, default: Tuple[int, int]) -> Tuple[int, int]:
        """Validate a {w, h} section."""
        if key not in config:
            return default

        section = config[key]
        if not isinstance(section, dict):
            raise ConfigValidationError(
                f"Field '{key}' must be a mapping with 'w' and 'h', got {type(section).__name__}"
            )

        w = section.get("w", default[0])
        h = section.get("h", default[1])
        for name, value in (("w", w), ("h", h)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigValidationError(
                    f"Field '{key}.{name}' must be an integer, got {type(value).__name__}"
                )
            if value <= 0:
                raise ConfigValidationError(
                    f"Field '{key}.{name}' must be greater than 0, got {value}"
                )
        return (w, h)

    def _validate_positive_int(self, config: Dict[str, Any], key: str, default: int) -> int:
        value = self._validate_non_negative_int(config, key, default)
        if value == 0:
            raise ConfigValidationError(f"Field '{key}' must be greater than 0, got 0")
        return value

    def _validate_non_negative_int(self, config: Dict[str, Any], key: str, default: int) -> int:
        if key not in config:
            return default

        value = config[key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigValidationError(
                f"Field '{key}' must be an integer, got {type(value).__name__}"
            )
        if value < 0:
            raise ConfigValidationError(
                f"Field '{key}' must be non-negative, got {value}"
            )
        return value

    def _validate_bool(self, config: Dict[str, Any], key: str, default: bool) -> bool:
        if key not in config:
            return default

        value = config[key]
        if not isinstance(value, bool):
            raise ConfigValidationError(
                f"Field '{key}' must be a boolean, got {type(value).__name__}"
            )
        return value

    def _validate_profile(self, config: Dict[str, Any], default: str) -> str:
        """Validate default_profile field."""
        if "default_profile" not in config:
            return default

        profile = config["default_profile"]
        if not isinstance(profile, str):
            raise ConfigValidationError(
                f"Field 'default_profile' must be a string, got {type(profile).__name__}"
            )
        if not profile.strip():
            raise ConfigValidationError("Field 'default_profile' cannot be empty")

        return profile.strip()

    def _validate_logs_dir(self, config: Dict[str, Any], default: str) -> str:
        if "logs_dir" not in config:
            return default

        logs_dir = config["logs_dir"]
        if not isinstance(logs_dir, str) or not logs_dir.strip():
            raise ConfigValidationError("Field 'logs_dir' must be a non-empty string")
        return logs_dir.strip()
