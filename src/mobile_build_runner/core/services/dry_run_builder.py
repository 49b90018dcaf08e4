from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from mobile_build_runner.constants import SECRET_ARGUMENT_KEYS
from mobile_build_runner.core.domain.build_request import BuildTarget, SceneEntry
from mobile_build_runner.core.interfaces.builder_interface import IBuilder

logger = logging.getLogger(__name__)


@dataclass
class RecordedBuild:
    output_path: str
    scenes: list[str]
    target: BuildTarget


@dataclass
class DryRunBuilder(IBuilder):
    """Builder that records calls and logs them instead of building.

    Used by the CLI when no host is attached, and by tests.
    """

    scenes: list[SceneEntry] = field(default_factory=list)
    failure_message: str | None = None
    building: bool = False
    active_target: BuildTarget | None = None
    credentials: dict[str, str] = field(default_factory=dict)
    builds: list[RecordedBuild] = field(default_factory=list)

    def is_building(self) -> bool:
        return self.building

    def switch_active_target(self, target: BuildTarget) -> None:
        logger.info("Switching active build target to %s", target.value)
        self.active_target = target

    def build(
        self, output_path: str, scenes: Sequence[str], target: BuildTarget
    ) -> str | None:
        logger.info(
            "Dry run build: target=%s output=%s scenes=%d",
            target.value,
            output_path,
            len(scenes),
        )
        self.builds.append(RecordedBuild(output_path, list(scenes), target))
        return self.failure_message

    def set_credential(self, name: str, value: str) -> None:
        shown = "***" if name in SECRET_ARGUMENT_KEYS else value
        logger.info("Setting credential %s=%s", name, shown)
        self.credentials[name] = value

    def enabled_scenes(self) -> list[SceneEntry]:
        return list(self.scenes)
