"""Configuration management for the Productboard connector using YAML files."""

import os
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger()

CONFIG_DIR_NAME = ".productboard-connector"
TOKEN_ENV_VAR = "PRODUCTBOARD_API_TOKEN"

# Values are never logged for these keys.
SECRET_KEYS = frozenset({"api_token"})

CONFIG_KEYS = ("api_token", "base_url", "search_shape")
SEARCH_SHAPES = ("envelope", "bare")


class Config:
    """Configuration manager using YAML file storage.

    Local config lives in .productboard-connector/config.yaml in the current
    directory, global config in ~/.productboard-connector/config.yaml. Reads
    check local config first, then global config.
    """

    def __init__(self, use_global: bool = False, config_dir: Path | None = None) -> None:
        """Initialize configuration manager.

        Args:
            use_global: If True, use global config only. If False, use local config with global fallback.
            config_dir: Custom directory to store config file (overrides use_global)
        """
        if config_dir is not None:
            self.config_dir = Path(config_dir)
            self.is_global = use_global
        elif use_global:
            self.config_dir = Path.home() / CONFIG_DIR_NAME
            self.is_global = True
        else:
            self.config_dir = Path.cwd() / CONFIG_DIR_NAME
            self.is_global = False

        self.config_file = self.config_dir / "config.yaml"
        self._config: dict[str, Any] = self._load(self.config_file)

        self._global_config: dict[str, Any] = {}
        if not self.is_global:
            global_config_file = Path.home() / CONFIG_DIR_NAME / "config.yaml"
            if global_config_file.exists() and global_config_file != self.config_file:
                try:
                    self._global_config = self._load(global_config_file)
                except ValueError as e:
                    logger.warning("Failed to load global config", error=str(e))

        logger.debug("Config initialized", config_file=str(self.config_file), is_global=self.is_global)

    def _load(self, config_file: Path) -> dict[str, Any]:
        """Load configuration from a YAML file.

        Returns:
            Configuration dictionary, empty if the file does not exist
        """
        if not config_file.exists():
            logger.debug("Config file does not exist, initializing empty config", config_file=str(config_file))
            return {}

        try:
            with open(config_file, "r") as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load config", config_file=str(config_file), error=str(e))
            raise ValueError(f"Failed to load config from {config_file}: {e}") from e

        if not isinstance(config, dict):
            raise ValueError(f"Config file {config_file} must contain a mapping")
        logger.debug("Config loaded successfully", keys=list(config.keys()))
        return config

    def _save(self) -> None:
        """Save configuration to YAML file."""
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w") as f:
                yaml.safe_dump(self._config, f, default_flow_style=False, sort_keys=False)
            logger.debug("Config saved successfully")
        except OSError as e:
            logger.error("Failed to save config", error=str(e))
            raise ValueError(f"Failed to save config to {self.config_file}: {e}") from e

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get a configuration value, local first, then global."""
        if key in self._config:
            logger.debug("Getting config value from local", key=key)
            return self._config[key]

        if not self.is_global and key in self._global_config:
            logger.debug("Getting config value from global", key=key)
            return self._global_config[key]

        logger.debug("Config value not found", key=key)
        return default

    def set(self, key: str, value: str) -> None:
        logger.debug("Setting config value", key=key, secret=key in SECRET_KEYS)
        self._config[key] = value
        self._save()

    def unset(self, key: str) -> None:
        logger.debug("Unsetting config value", key=key)
        if key in self._config:
            del self._config[key]
            self._save()

    def list(self) -> dict[str, Any]:
        """List all configuration settings.

        For local config, global values are merged underneath local ones.
        """
        if self.is_global:
            logger.debug("Listing global config values", count=len(self._config))
            return self._config.copy()

        merged = self._global_config.copy()
        merged.update(self._config)
        logger.debug("Listing merged config values", count=len(merged))
        return merged

    def api_token(self) -> str | None:
        """Resolve the API token from config, falling back to the environment."""
        return self.get("api_token") or os.environ.get(TOKEN_ENV_VAR) or None


def get_config(use_global: bool = False) -> Config:
    """Get a configuration instance.

    Args:
        use_global: If True, return global config. If False, return local config with global fallback.
    """
    return Config(use_global=use_global)


def mask_secret(key: str, value: Any) -> Any:
    """Mask secret values for display."""
    if key in SECRET_KEYS and value:
        text = str(value)
        return f"{text[:4]}…" if len(text) > 8 else "…"
    return value


def validate_setting(key: str, value: str) -> str:
    """Check a setting before it is stored and return its normalized value.

    Raises:
        ValueError: If the key is unknown or the value is not usable for it
    """
    if key not in CONFIG_KEYS:
        raise ValueError(f"Unknown config key: '{key}'. Expected one of: {list(CONFIG_KEYS)}")

    value = str(value).strip()
    if not value:
        raise ValueError(f"{key} cannot be empty")
    if key == "search_shape" and value not in SEARCH_SHAPES:
        raise ValueError(f"Unknown search_shape: '{value}'. Expected 'envelope' or 'bare'")
    if key == "base_url":
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got '{value}'")
        value = value.rstrip("/")
    return value
