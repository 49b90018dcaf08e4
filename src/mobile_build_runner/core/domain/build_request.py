from __future__ import annotations

from enum import Enum

from pydantic import Field, field_validator

from mobile_build_runner.constants import ArgumentKey
from mobile_build_runner.core.interfaces.model_bases import DomainModel


class BuildTarget(str, Enum):
    """Platforms the runner knows how to request builds for."""

    ANDROID = "android"
    IOS = "ios"


class SceneEntry(DomainModel):
    """One entry of the host's scene list."""

    path: str
    enabled: bool = True


class AndroidSigning(DomainModel):
    """Keystore credentials read from the custom arguments.

    Fields left as None are not assigned, so the host keeps its own setting.
    """

    keystore_name: str | None = None
    keystore_pass: str | None = Field(default=None, repr=False)
    key_alias_name: str | None = None
    key_alias_pass: str | None = Field(default=None, repr=False)

    def credentials(self) -> list[tuple[str, str]]:
        """Return (credential name, value) pairs for the fields that are set."""
        pairs = [
            (ArgumentKey.KEYSTORE_NAME.value, self.keystore_name),
            (ArgumentKey.KEYSTORE_PASS.value, self.keystore_pass),
            (ArgumentKey.KEY_ALIAS_NAME.value, self.key_alias_name),
            (ArgumentKey.KEY_ALIAS_PASS.value, self.key_alias_pass),
        ]
        return [(name, value) for name, value in pairs if value is not None]


class BuildRequest(DomainModel):
    """A single build to hand to the host pipeline."""

    output: str
    scenes: tuple[str, ...] = ()
    target: BuildTarget

    @field_validator("output")
    @classmethod
    def _output_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("output path must not be blank")
        return value

    def describe(self) -> str:
        return (
            f"[BuildRequest: Output={self.output}, "
            f"Scenes=[{', '.join(self.scenes)}], "
            f"TargetPlatform={self.target.value}]"
        )

    def __str__(self) -> str:
        return self.describe()
