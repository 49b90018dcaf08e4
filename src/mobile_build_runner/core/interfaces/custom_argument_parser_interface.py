from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class ICustomArgumentParser(Protocol):
    """Reads prefixed key=value overrides out of a process argument vector.

    Implementations should be pure and side-effect free apart from reporting.
    """

    def get_custom_arguments(
        self, args: Sequence[str] | None = None
    ) -> dict[str, str]:
        """Return every name/value pair carried by the custom argument blob.

        Args:
            args: Argument vector to scan; the process vector when omitted

        Returns:
            A fresh dictionary. Empty when no blob is present.
        """
        ...

    def get_custom_argument(
        self, name: str, args: Sequence[str] | None = None
    ) -> str | None:
        """Return the value for ``name`` or None when it is absent."""
        ...
