from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from mobile_build_runner.constants import (
    DEFAULT_CUSTOM_ARGS_PREFIX,
    DEFAULT_PAIR_SEPARATOR,
    ConfigKey,
)
from mobile_build_runner.core.common.exceptions import ConfigurationError
from mobile_build_runner.core.config.config_loader import ConfigLoader, _str_to_bool
from mobile_build_runner.core.domain.build_request import BuildTarget
from mobile_build_runner.custom_args_prefix import (
    validate_custom_args_prefix,
    validate_pair_separator,
)

logger = logging.getLogger(__name__)


def _coerce_bool(value: Any) -> bool:
    """Booleans from files may arrive as strings ('"false"' in YAML or JSON)."""
    if isinstance(value, str):
        return _str_to_bool(value, False)
    return bool(value)


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ParserConfig(BaseModel):
    """Where the custom argument blob lives and how it is split."""

    model_config = ConfigDict(frozen=True)

    prefix: str = DEFAULT_CUSTOM_ARGS_PREFIX
    separator: str = DEFAULT_PAIR_SEPARATOR

    @model_validator(mode="after")
    def _validate(self) -> ParserConfig:
        err = validate_custom_args_prefix(self.prefix)
        if err is None:
            err = validate_pair_separator(self.separator, self.prefix)
        if err:
            raise ValueError(err)
        return self


class SceneConfig(BaseModel):
    """Explicit scene lists; when both lists for a platform are empty the
    host's enabled scenes are used instead."""

    model_config = ConfigDict(frozen=True)

    common: tuple[str, ...] = ()
    android_only: tuple[str, ...] = ()
    ios_only: tuple[str, ...] = ()

    def platform_only(self, target: BuildTarget) -> tuple[str, ...]:
        if target is BuildTarget.ANDROID:
            return self.android_only
        return self.ios_only


class LoggingConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: LogLevel = LogLevel.INFO
    log_file: str | None = None


class AppConfig(BaseModel):
    """Top level configuration for the runner."""

    model_config = ConfigDict(frozen=True)

    parser: ParserConfig = Field(default_factory=ParserConfig)
    scenes: SceneConfig = Field(default_factory=SceneConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    strict: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        """Build a config from a flat or nested dictionary.

        Flat keys (as produced by ConfigLoader) are folded into their sections;
        nested sections from a config file take precedence.
        """
        parser: dict[str, Any] = {}
        if ConfigKey.ARGS_PREFIX.value in data:
            parser["prefix"] = data[ConfigKey.ARGS_PREFIX.value]
        if ConfigKey.ARGS_SEPARATOR.value in data:
            parser["separator"] = data[ConfigKey.ARGS_SEPARATOR.value]
        parser.update(data.get("parser") or {})

        log_cfg: dict[str, Any] = {}
        if data.get(ConfigKey.LOG_LEVEL.value):
            log_cfg["level"] = str(data[ConfigKey.LOG_LEVEL.value]).upper()
        if data.get(ConfigKey.LOG_FILE.value):
            log_cfg["log_file"] = data[ConfigKey.LOG_FILE.value]
        log_cfg.update(data.get("logging") or {})
        if "level" in log_cfg:
            log_cfg["level"] = str(log_cfg["level"]).upper()

        try:
            return cls(
                parser=ParserConfig(**parser),
                scenes=SceneConfig(**(data.get("scenes") or {})),
                logging=LoggingConfig(**log_cfg),
                strict=_coerce_bool(data.get(ConfigKey.STRICT.value, False)),
            )
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid configuration: {exc}", details={"errors": exc.errors()}
            ) from exc


def load_config(
    config_path: str | Path | None = None, loader: ConfigLoader | None = None
) -> AppConfig:
    """Load configuration from environment and an optional YAML/JSON file."""
    loader = loader or ConfigLoader()
    data = loader.load_config(str(config_path) if config_path else None)
    config = AppConfig.from_dict(data)
    logger.debug(
        "Loaded configuration: prefix=%r separator=%r strict=%s",
        config.parser.prefix,
        config.parser.separator,
        config.strict,
    )
    return config
