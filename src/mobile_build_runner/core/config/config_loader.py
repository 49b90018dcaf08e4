import logging
import os
from typing import Any

from dotenv import load_dotenv

from mobile_build_runner.constants import (
    DEFAULT_CUSTOM_ARGS_PREFIX,
    DEFAULT_PAIR_SEPARATOR,
    ConfigKey,
)
from mobile_build_runner.custom_args_prefix import (
    validate_custom_args_prefix,
    validate_pair_separator,
)

logger = logging.getLogger(__name__)


def _str_to_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    val = val.strip().lower()
    if val in ("true", "1", "yes", "on"):
        return True
    if val in ("false", "0", "no", "off", "none"):
        return False
    return default


class ConfigLoader:
    """Configuration loader.

    This class provides a structured interface for loading configuration data
    from environment variables and configuration files.
    """

    def __init__(self, use_dotenv: bool = True) -> None:
        """Initialize the configuration loader."""
        self._use_dotenv = use_dotenv
        self._config_cache: dict[str, Any] | None = None

    def load_config(self, config_file: str | None = None) -> dict[str, Any]:
        """Load configuration from environment and optional config file.

        Args:
            config_file: Optional path to configuration file

        Returns:
            Dictionary containing all configuration values
        """
        if self._config_cache is None:
            self._config_cache = self._load_base_config()

        config: dict[str, Any] = dict(self._config_cache)

        if config_file:
            try:
                file_config: dict[str, Any] = self._load_config_file(config_file)
                config.update(file_config)
            except (FileNotFoundError, ValueError) as exc:
                logger.warning("Failed to load config file %s: %s", config_file, exc)

        return config

    def _load_base_config(self) -> dict[str, Any]:
        """Load base configuration from environment variables.

        Returns:
            Dictionary containing base configuration
        """
        if self._use_dotenv:
            load_dotenv()

        prefix: str = os.getenv("MOBILE_BUILD_ARGS_PREFIX", DEFAULT_CUSTOM_ARGS_PREFIX)
        err: str | None = validate_custom_args_prefix(prefix)
        if err:
            logger.warning(
                "Invalid custom args prefix %s: %s, using default", prefix, err
            )
            prefix = DEFAULT_CUSTOM_ARGS_PREFIX

        separator: str = os.getenv("MOBILE_BUILD_ARGS_SEPARATOR", DEFAULT_PAIR_SEPARATOR)
        err = validate_pair_separator(separator, prefix)
        if err:
            logger.warning(
                "Invalid pair separator %r: %s, using default", separator, err
            )
            separator = DEFAULT_PAIR_SEPARATOR

        return {
            ConfigKey.ARGS_PREFIX.value: prefix,
            ConfigKey.ARGS_SEPARATOR.value: separator,
            ConfigKey.LOG_LEVEL.value: os.getenv("MOBILE_BUILD_LOG_LEVEL", "INFO"),
            ConfigKey.LOG_FILE.value: os.getenv("MOBILE_BUILD_LOG_FILE"),
            ConfigKey.STRICT.value: _str_to_bool(os.getenv("MOBILE_BUILD_STRICT"), False),
        }

    def _load_config_file(self, config_file: str) -> dict[str, Any]:
        """Load configuration from a file.

        Args:
            config_file: Path to the configuration file

        Returns:
            Dictionary containing configuration from file

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file has invalid format
        """
        import json
        from pathlib import Path

        import yaml

        path: Path = Path(config_file)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        try:
            content: str = path.read_text(encoding="utf-8")

            # Try YAML first, then JSON
            try:
                result: Any = yaml.safe_load(content)
                return result if isinstance(result, dict) else {}
            except yaml.YAMLError:
                result = json.loads(content)
                return result if isinstance(result, dict) else {}

        except (json.JSONDecodeError, yaml.YAMLError) as exc:  # type: ignore[misc]
            raise ValueError(f"Invalid configuration file format: {exc}") from exc

    def reload_config(self) -> None:
        """Clear the config cache to force reload on next access."""
        self._config_cache = None
