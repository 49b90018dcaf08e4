"""
Logging utilities for the build runner.

This module provides:
- Structured loggers (structlog) rendered into stdlib logging
- Root logger configuration with the project format
- Redaction of keystore passwords passed on the command line
"""

import contextlib
import logging
import re
from collections.abc import Iterable

import structlog

from mobile_build_runner.constants import DEFAULT_PAIR_SEPARATOR, SECRET_ARGUMENT_KEYS

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s:%(lineno)d %(message)s"


_STRUCTLOG_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.KeyValueRenderer(key_order=["event"]),
]


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    The logger always renders into the stdlib logger of the same name, so
    events reach the configured handlers and the redaction filter even when
    configure_logging was never called.

    Args:
        name: Optional logger name

    Returns:
        A structured logger
    """
    return structlog.wrap_logger(  # type: ignore[no-any-return]
        logging.getLogger(name),
        processors=_STRUCTLOG_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def _secret_pair_pattern(
    keys: Iterable[str], separator: str = DEFAULT_PAIR_SEPARATOR
) -> re.Pattern | None:
    escaped = sorted((re.escape(k) for k in keys if k), key=len, reverse=True)
    if not escaped:
        return None
    # name=value up to the next pair separator or whitespace
    value_class = rf"[^{re.escape(separator)}\s]+"
    return re.compile(rf"(?P<name>{'|'.join(escaped)})=(?P<value>{value_class})")


class SecretRedactionFilter(logging.Filter):
    """Logging filter that masks credentials in log records.

    Masks the value of any ``<secret key>=<value>`` pair (for example a
    ``keystorePass`` inside the custom argument blob) and any literal secret
    values handed to the filter.
    """

    def __init__(
        self,
        secrets: Iterable[str] | None = None,
        keys: Iterable[str] = SECRET_ARGUMENT_KEYS,
        mask: str = "***",
        separator: str = DEFAULT_PAIR_SEPARATOR,
    ) -> None:
        super().__init__()
        self.mask = mask
        self.pair_pattern = _secret_pair_pattern(keys, separator)
        self._secrets: set[str] = {s for s in (secrets or []) if s}
        self.value_pattern: re.Pattern | None = None
        self._compile_values()

    def _compile_values(self) -> None:
        values = sorted(self._secrets, key=len, reverse=True)
        self.value_pattern = (
            re.compile("|".join(re.escape(v) for v in values)) if values else None
        )

    def add_secret(self, value: str) -> None:
        if value and value not in self._secrets:
            self._secrets.add(value)
            self._compile_values()

    def redact(self, text: str) -> str:
        # Known values first so a partial pair match cannot split them
        if self.value_pattern is not None:
            text = self.value_pattern.sub(self.mask, text)
        if self.pair_pattern is not None:
            text = self.pair_pattern.sub(rf"\g<name>={self.mask}", text)
        return text

    def _sanitize(self, obj: object) -> object:
        if isinstance(obj, str):
            return self.redact(obj)
        if isinstance(obj, dict):
            return {k: self._sanitize(v) for k, v in obj.items()}
        if isinstance(obj, list | tuple):
            return type(obj)(self._sanitize(v) for v in obj)
        return obj

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if isinstance(record.msg, str):
            record.msg = self.redact(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = self._sanitize(record.args)  # type: ignore[assignment]
            elif isinstance(record.args, tuple):
                record.args = tuple(self._sanitize(a) for a in record.args)
        return True


def install_secret_redaction_filter(
    secrets: Iterable[str] | None = None,
    mask: str = "***",
    separator: str = DEFAULT_PAIR_SEPARATOR,
) -> SecretRedactionFilter:
    """Install a redaction filter on the root logger and its handlers."""
    root = logging.getLogger()
    filter_instance = SecretRedactionFilter(secrets, mask=mask, separator=separator)
    root.addFilter(filter_instance)
    for handler in list(root.handlers):
        with contextlib.suppress(AttributeError):
            handler.addFilter(filter_instance)
    return filter_instance


def configure_logging(
    level: int | str = logging.INFO,
    log_format: str | None = None,
    log_file: str | None = None,
    separator: str = DEFAULT_PAIR_SEPARATOR,
) -> SecretRedactionFilter:
    """Configure stdlib logging, which get_logger renders into.

    Args:
        level: Logging level
        log_format: Optional log format string
        log_file: Optional log file path
        separator: Pair separator of the custom argument blob, for redaction

    Returns:
        The installed redaction filter, so callers can register more secrets
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(fmt=log_format or DEFAULT_LOG_FORMAT)

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    return install_secret_redaction_filter(separator=separator)
