from __future__ import annotations

import logging

from mobile_build_runner.core.common.exceptions import BuildRunnerError
from mobile_build_runner.core.interfaces.error_reporter_interface import (
    IErrorReporter,
)

logger = logging.getLogger(__name__)


class LoggingErrorReporter(IErrorReporter):
    """Default reporter: forwards problems to the standard logging tree."""

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target or logger

    def warning(self, error: BuildRunnerError) -> None:
        self._logger.warning("%s: %s", type(error).__name__, error.message)

    def error(self, error: BuildRunnerError) -> None:
        self._logger.error("%s: %s", type(error).__name__, error.message)


class CollectingErrorReporter(IErrorReporter):
    """Keeps reported problems in memory, optionally forwarding them."""

    def __init__(self, forward_to: IErrorReporter | None = None) -> None:
        self.warnings: list[BuildRunnerError] = []
        self.errors: list[BuildRunnerError] = []
        self._forward_to = forward_to

    @property
    def problems(self) -> list[BuildRunnerError]:
        return [*self.errors, *self.warnings]

    def has_problems(self) -> bool:
        return bool(self.errors or self.warnings)

    def warning(self, error: BuildRunnerError) -> None:
        self.warnings.append(error)
        if self._forward_to is not None:
            self._forward_to.warning(error)

    def error(self, error: BuildRunnerError) -> None:
        self.errors.append(error)
        if self._forward_to is not None:
            self._forward_to.error(error)

    def clear(self) -> None:
        self.warnings.clear()
        self.errors.clear()
