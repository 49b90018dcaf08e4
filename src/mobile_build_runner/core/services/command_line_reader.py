"""
Reader for custom arguments passed to a build process.

The host launches the process with its own flags plus one extra argument of
the form ``<prefix>name1=value1;name2=value2``. Everything here works on the
raw argument vector and never caches: each lookup re-parses the vector.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from mobile_build_runner.constants import (
    DEFAULT_CUSTOM_ARGS_PREFIX,
    DEFAULT_PAIR_SEPARATOR,
)
from mobile_build_runner.core.common.exceptions import (
    DuplicateCustomArgumentsError,
    DuplicateKeyError,
    MalformedPairError,
    MissingArgumentVectorError,
)
from mobile_build_runner.core.interfaces.custom_argument_parser_interface import (
    ICustomArgumentParser,
)
from mobile_build_runner.core.interfaces.error_reporter_interface import (
    IErrorReporter,
)
from mobile_build_runner.core.services.error_reporter import LoggingErrorReporter

logger = logging.getLogger(__name__)

_DEFAULT_REPORTER = LoggingErrorReporter(logger)


def get_raw_args() -> list[str]:
    """Return the process argument vector verbatim."""
    return list(sys.argv)


def get_command_line(
    args: Sequence[str] | None = None, reporter: IErrorReporter | None = None
) -> str:
    """Join the argument vector into a single space separated string."""
    reporter = reporter or _DEFAULT_REPORTER
    if args is None:
        args = get_raw_args()

    if len(args) > 0:
        return " ".join(args)

    reporter.error(MissingArgumentVectorError())
    return ""


def find_custom_argument_blob(
    args: Sequence[str] | None,
    prefix: str = DEFAULT_CUSTOM_ARGS_PREFIX,
    reporter: IErrorReporter | None = None,
) -> str:
    """Return the first argument starting with ``prefix``, prefix removed.

    Returns an empty string when nothing matches. A missing vector is reported
    as an error and also yields an empty string.
    """
    reporter = reporter or _DEFAULT_REPORTER
    if args is None:
        reporter.error(
            MissingArgumentVectorError(
                f"Error processing arguments: no argument vector to search for {prefix!r}"
            )
        )
        return ""

    matches = [arg for arg in args if isinstance(arg, str) and arg.startswith(prefix)]
    if not matches:
        logger.debug("No argument starting with %r found", prefix)
        return ""

    if len(matches) > 1:
        reporter.warning(DuplicateCustomArgumentsError(prefix, len(matches)))

    return matches[0][len(prefix) :]


def parse_custom_arguments(
    blob: str,
    pair_separator: str = DEFAULT_PAIR_SEPARATOR,
    reporter: IErrorReporter | None = None,
) -> dict[str, str]:
    """Parse a ``name=value`` list separated by ``pair_separator``.

    Rules:
    - Each token is split on the first ``=`` only, so values may contain ``=``.
    - Tokens without ``=`` or with an empty name are reported and skipped.
    - Empty tokens (for example a trailing separator) are skipped silently.
    - A name given twice keeps its last value and is reported.
    """
    reporter = reporter or _DEFAULT_REPORTER
    result: dict[str, str] = {}
    if not blob:
        return result

    for token in blob.split(pair_separator):
        if not token:
            continue

        name, sep, value = token.partition("=")
        if not sep or not name:
            reporter.warning(MalformedPairError(token))
            continue

        if name in result:
            reporter.warning(DuplicateKeyError(name))
        result[name] = value

    return result


def get_custom_arguments(
    args: Sequence[str] | None = None,
    prefix: str = DEFAULT_CUSTOM_ARGS_PREFIX,
    pair_separator: str = DEFAULT_PAIR_SEPARATOR,
    reporter: IErrorReporter | None = None,
) -> dict[str, str]:
    """Find the custom argument blob and decode it into a fresh dictionary.

    The process argument vector is used when ``args`` is None.
    """
    if args is None:
        args = get_raw_args()
    blob = find_custom_argument_blob(args, prefix, reporter)
    return parse_custom_arguments(blob, pair_separator, reporter)


def get_custom_argument(
    name: str,
    args: Sequence[str] | None = None,
    prefix: str = DEFAULT_CUSTOM_ARGS_PREFIX,
    pair_separator: str = DEFAULT_PAIR_SEPARATOR,
    reporter: IErrorReporter | None = None,
) -> str | None:
    """Return the value for ``name`` or None when it is not present."""
    return get_custom_arguments(args, prefix, pair_separator, reporter).get(name)


class CommandLineReader(ICustomArgumentParser):
    """Binds a prefix, separator and reporter to the module level functions.

    Holds no mutable state, so one instance can be shared freely.
    """

    def __init__(
        self,
        prefix: str = DEFAULT_CUSTOM_ARGS_PREFIX,
        separator: str = DEFAULT_PAIR_SEPARATOR,
        reporter: IErrorReporter | None = None,
        args: Sequence[str] | None = None,
    ) -> None:
        self.prefix = prefix
        self.separator = separator
        self.reporter = reporter or _DEFAULT_REPORTER
        # Fixed vector for hosts that do not expose sys.argv; None means live
        self._args = tuple(args) if args is not None else None

    def _resolve_args(self, args: Sequence[str] | None) -> Sequence[str]:
        if args is not None:
            return args
        if self._args is not None:
            return self._args
        return get_raw_args()

    def get_command_line_args(self) -> list[str]:
        return list(self._resolve_args(None))

    def get_command_line(self) -> str:
        return get_command_line(self._resolve_args(None), self.reporter)

    def get_custom_arguments(
        self, args: Sequence[str] | None = None
    ) -> dict[str, str]:
        return get_custom_arguments(
            self._resolve_args(args), self.prefix, self.separator, self.reporter
        )

    def get_custom_argument(
        self, name: str, args: Sequence[str] | None = None
    ) -> str | None:
        return self.get_custom_arguments(args).get(name)
