"""
Common exception classes for the mobile build runner.

This module defines custom exception classes used throughout the application
for better error handling and categorization. Parser problems are modelled as
exceptions too, but the parser hands them to an error reporter instead of
raising them.
"""

from __future__ import annotations


class BuildRunnerError(Exception):
    """Base exception class for all build runner errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        **kwargs,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        for key, value in (kwargs or {}).items():
            setattr(self, key, value)

    def to_dict(self) -> dict:
        error_dict = {
            "message": self.message,
            "type": self.__class__.__name__,
            "details": self.details,
        }

        for attr_name in dir(self):
            if (
                not attr_name.startswith("_")
                and attr_name not in ["message", "details", "args"]
                and not callable(getattr(self, attr_name))
            ):
                error_dict[attr_name] = getattr(self, attr_name)

        return {"error": error_dict}


class MalformedPairError(BuildRunnerError):
    """A token in the custom argument blob is not a single name=value pair."""

    def __init__(
        self,
        token: str,
        message: str | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        message = message or f"The custom argument [{token}] seems to be malformed."
        super().__init__(message, details, **kwargs)
        self.token = token


class MissingArgumentVectorError(BuildRunnerError):
    """The process argument vector is unavailable or empty."""

    def __init__(
        self,
        message: str = "Can't find any command line arguments!",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class DuplicateCustomArgumentsError(BuildRunnerError):
    """More than one argument carries the custom args prefix."""

    def __init__(
        self,
        prefix: str,
        count: int,
        message: str | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        message = message or (
            f"Found {count} arguments starting with {prefix!r}; "
            f"using the first and ignoring {count - 1}."
        )
        super().__init__(message, details, **kwargs)
        self.prefix = prefix
        self.count = count


class DuplicateKeyError(BuildRunnerError):
    """A name appears more than once inside a single custom argument blob."""

    def __init__(
        self,
        key: str,
        message: str | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        message = message or (
            f"The custom argument [{key}] is given more than once; the last value wins."
        )
        super().__init__(message, details, **kwargs)
        self.key = key


class ConfigurationError(BuildRunnerError):
    """Raised when there's a configuration issue."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class NoScenesError(BuildRunnerError):
    """Raised when a build request has nothing to build."""

    def __init__(
        self,
        message: str = "No scenes to build.",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class BuildError(BuildRunnerError):
    """Raised when the host build pipeline reports a failure."""

    def __init__(
        self,
        message: str = "Build failed",
        target: str | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)
        self.target = target


class StrictModeError(BuildRunnerError):
    """Raised when strict mode is on and the parser reported problems."""

    def __init__(
        self,
        message: str = "Custom arguments contained problems",
        problems: list[BuildRunnerError] | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)
        self.problems = list(problems or [])
