from mobile_build_runner.core.config.app_config import (
    AppConfig,
    LoggingConfig,
    LogLevel,
    ParserConfig,
    SceneConfig,
    load_config,
)

__all__ = [
    "AppConfig",
    "LogLevel",
    "LoggingConfig",
    "ParserConfig",
    "SceneConfig",
    "load_config",
]
