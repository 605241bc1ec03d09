"""Configuration management for timetracker."""

import copy
from pathlib import Path
from typing import Any, Optional

import yaml  # type: ignore[import-untyped]
from jsonschema import ValidationError, validate  # type: ignore[import-untyped]


class ConfigManager:
    """Manage application configuration."""

    DEFAULT_CONFIG = {
        "version": "1.0",
        "general": {
            "database_path": None,
        },
        "tracking": {
            "interval": 60,
            "rounding": "half_even",
        },
        "display": {
            "color": True,
        },
        "advanced": {
            "log_level": "WARNING",
            "log_file": None,
        },
    }

    CONFIG_SCHEMA = {
        "type": "object",
        "properties": {
            "version": {"type": "string"},
            "general": {
                "type": "object",
                "properties": {
                    "database_path": {"type": ["string", "null"]},
                },
            },
            "tracking": {
                "type": "object",
                "properties": {
                    "interval": {"type": "integer", "minimum": 1, "maximum": 3600},
                    "rounding": {"type": "string", "enum": ["half_even", "half_up"]},
                },
            },
            "display": {
                "type": "object",
                "properties": {
                    "color": {"type": "boolean"},
                },
            },
            "advanced": {
                "type": "object",
                "properties": {
                    "log_level": {
                        "type": "string",
                        "enum": ["DEBUG", "INFO", "WARNING", "ERROR"],
                    },
                    "log_file": {"type": ["string", "null"]},
                },
            },
        },
        "required": ["version"],
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_path: Path to config file. Defaults to ~/.timetracker/config.yml
        """
        if config_path is None:
            config_path = Path.home() / ".timetracker" / "config.yml"
        self.config_path = config_path
        self._config: dict[str, Any] = {}
        self._load_or_create()

    def _load_or_create(self) -> None:
        """Load existing config or create default."""
        if self.config_path.exists():
            with open(self.config_path, encoding="utf-8") as f:
                loaded_config = yaml.safe_load(f) or {}
            # Merge with defaults to ensure all keys exist
            self._config = self._merge_with_defaults(loaded_config)
            try:
                self.validate()
            except ValueError as e:
                backup_path = self.config_path.with_suffix(".yml.backup")
                self.config_path.rename(backup_path)
                self._config = copy.deepcopy(self.DEFAULT_CONFIG)
                self.save()
                raise ValueError(
                    f"Config validation failed, backed up to {backup_path}. "
                    f"Using defaults. Error: {e}"
                )
        else:
            self._config = copy.deepcopy(self.DEFAULT_CONFIG)
            self.save()

    def _merge_with_defaults(self, config: dict[str, Any]) -> dict[str, Any]:
        """Merge config with defaults to ensure all keys exist.

        Args:
            config: User configuration

        Returns:
            Merged configuration with all default keys
        """
        result = copy.deepcopy(self.DEFAULT_CONFIG)
        self._deep_merge(result, config)
        return result

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> None:
        """Deep merge override into base dictionary (in-place)."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., 'tracking.interval')
            default: Default value if key not found or unset

        Returns:
            Configuration value or default

        Example:
            >>> config.get('tracking.rounding')
            'half_even'
            >>> config.get('nonexistent.key', 'default')
            'default'
        """
        value: Any = self._config
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
            if value is None:
                return default
        return value

    def has(self, key: str) -> bool:
        """Check whether a key exists, even if its value is null."""
        value: Any = self._config
        for k in key.split("."):
            if not isinstance(value, dict) or k not in value:
                return False
            value = value[k]
        return True

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation.

        Args:
            key: Configuration key in dot notation
            value: Value to set

        Raises:
            ValueError: If configuration is invalid after setting

        Example:
            >>> config.set('tracking.interval', 30)
        """
        keys = key.split(".")
        previous = copy.deepcopy(self._config)
        config = self._config
        for k in keys[:-1]:
            if k not in config or not isinstance(config[k], dict):
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value
        try:
            self.validate()
        except ValueError:
            self._config = previous
            raise
        self.save()

    def validate(self) -> bool:
        """Validate configuration against schema.

        Returns:
            True if valid

        Raises:
            ValueError: If configuration is invalid
        """
        try:
            validate(instance=self._config, schema=self.CONFIG_SCHEMA)
            return True
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e.message}")

    def save(self) -> None:
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.dump(
                self._config, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )

    def reset(self) -> None:
        """Reset to default configuration."""
        self._config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.save()

    def to_dict(self) -> dict[str, Any]:
        """Get full configuration as dictionary.

        Returns:
            Copy of configuration dictionary
        """
        return copy.deepcopy(self._config)

    def get_all_keys(self, prefix: str = "") -> list[str]:
        """Get all configuration keys in dot notation.

        Args:
            prefix: Prefix for recursive traversal (internal use)

        Returns:
            List of all configuration keys
        """
        keys = []
        config = self._config if not prefix else self.get(prefix, {})

        if isinstance(config, dict):
            for key, value in config.items():
                full_key = f"{prefix}.{key}" if prefix else key
                if isinstance(value, dict):
                    keys.extend(self.get_all_keys(full_key))
                else:
                    keys.append(full_key)
        return keys
