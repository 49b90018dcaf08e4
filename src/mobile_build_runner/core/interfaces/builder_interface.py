from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from mobile_build_runner.core.domain.build_request import BuildTarget, SceneEntry


class IBuilder(Protocol):
    """Capability interface over the host's build pipeline.

    A host-specific adapter satisfies this outside the runner; nothing here
    knows how a player is actually packaged.
    """

    def is_building(self) -> bool:
        """Return True while the host is already producing a build."""
        ...

    def switch_active_target(self, target: BuildTarget) -> None:
        """Make ``target`` the active platform before building."""
        ...

    def build(
        self, output_path: str, scenes: Sequence[str], target: BuildTarget
    ) -> str | None:
        """Build the given scenes.

        Returns:
            None or an empty string on success, otherwise the failure message.
        """
        ...

    def set_credential(self, name: str, value: str) -> None:
        """Assign a platform signing credential (keystore name, password...)."""
        ...

    def enabled_scenes(self) -> list[SceneEntry]:
        """Return the host's scene list, in build order."""
        ...
