from __future__ import annotations

from typing import Protocol

from mobile_build_runner.core.common.exceptions import BuildRunnerError


class IErrorReporter(Protocol):
    """Channel through which the argument parser surfaces problems.

    Reporting never raises; the parser keeps going after every call.
    """

    def warning(self, error: BuildRunnerError) -> None:
        """Report a recoverable problem, such as a malformed pair."""
        ...

    def error(self, error: BuildRunnerError) -> None:
        """Report a problem that leaves the caller with an empty result."""
        ...
