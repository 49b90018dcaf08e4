"""
Mobile build orchestration on top of the custom argument reader.

Reads the output path and Android signing credentials from the custom
argument blob, picks the scenes to build and hands a BuildRequest to the
host builder.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from mobile_build_runner.constants import (
    DEFAULT_ANDROID_APK_FILE,
    DEFAULT_BUILD_DIR,
    DEFAULT_IOS_OUTPUT_DIR,
    ArgumentKey,
)
from mobile_build_runner.core.common.exceptions import BuildError, NoScenesError
from mobile_build_runner.core.common.logging_utils import get_logger
from mobile_build_runner.core.config.app_config import SceneConfig
from mobile_build_runner.core.domain.build_request import (
    AndroidSigning,
    BuildRequest,
    BuildTarget,
)
from mobile_build_runner.core.interfaces.builder_interface import IBuilder
from mobile_build_runner.core.interfaces.custom_argument_parser_interface import (
    ICustomArgumentParser,
)

logger = logging.getLogger(__name__)
build_log = get_logger("mobile_build_runner.build")


class MobileBuildRunner:
    """Turns command line overrides into Android and iOS builds."""

    def __init__(
        self,
        reader: ICustomArgumentParser,
        builder: IBuilder,
        scene_config: SceneConfig | None = None,
        base_dir: Path | None = None,
    ) -> None:
        self.reader = reader
        self.builder = builder
        self.scene_config = scene_config or SceneConfig()
        # None keeps default outputs relative to the working directory
        self.base_dir = base_dir

    def read_target_output_path(self) -> str | None:
        return self.reader.get_custom_argument(ArgumentKey.OUTPUT_PATH.value)

    def read_keystore_name(self) -> str | None:
        return self.reader.get_custom_argument(ArgumentKey.KEYSTORE_NAME.value)

    def read_keystore_pass(self) -> str | None:
        return self.reader.get_custom_argument(ArgumentKey.KEYSTORE_PASS.value)

    def read_key_alias_name(self) -> str | None:
        return self.reader.get_custom_argument(ArgumentKey.KEY_ALIAS_NAME.value)

    def read_key_alias_pass(self) -> str | None:
        return self.reader.get_custom_argument(ArgumentKey.KEY_ALIAS_PASS.value)

    def read_android_signing(self) -> AndroidSigning:
        return AndroidSigning(
            keystore_name=self.read_keystore_name(),
            keystore_pass=self.read_keystore_pass(),
            key_alias_name=self.read_key_alias_name(),
            key_alias_pass=self.read_key_alias_pass(),
        )

    def _default_output(self, directory: str, output: str) -> str:
        """Create `directory` and return `output`, both under base_dir if set."""
        if self.base_dir is None:
            Path(directory).mkdir(parents=True, exist_ok=True)
            return output
        (self.base_dir / directory).mkdir(parents=True, exist_ok=True)
        return str(self.base_dir / output)

    def get_scenes(self, target: BuildTarget) -> tuple[str, ...]:
        common = self.scene_config.common
        platform_only = self.scene_config.platform_only(target)
        if not common and not platform_only:
            return self.discover_scenes()
        # Ordered union, duplicates dropped
        return tuple(dict.fromkeys((*common, *platform_only)))

    def discover_scenes(self) -> tuple[str, ...]:
        return tuple(
            scene.path for scene in self.builder.enabled_scenes() if scene.enabled
        )

    def perform_android_build(self) -> BuildRequest | None:
        output = self.read_target_output_path()
        if output is None:
            output = self._default_output(DEFAULT_BUILD_DIR, DEFAULT_ANDROID_APK_FILE)

        for name, value in self.read_android_signing().credentials():
            self.builder.set_credential(name, value)

        request = BuildRequest(
            output=output,
            scenes=self.get_scenes(BuildTarget.ANDROID),
            target=BuildTarget.ANDROID,
        )
        return self.run(request)

    def perform_ios_build(self) -> BuildRequest | None:
        output = self.read_target_output_path()
        if output is None:
            output = self._default_output(
                DEFAULT_IOS_OUTPUT_DIR, DEFAULT_IOS_OUTPUT_DIR
            )

        request = BuildRequest(
            output=output,
            scenes=self.get_scenes(BuildTarget.IOS),
            target=BuildTarget.IOS,
        )
        return self.run(request)

    def perform_build(self, target: BuildTarget) -> BuildRequest | None:
        if target is BuildTarget.ANDROID:
            return self.perform_android_build()
        return self.perform_ios_build()

    def run(self, request: BuildRequest) -> BuildRequest | None:
        """Hand ``request`` to the builder.

        Returns the request that was built, or None when the host was already
        building and the request was dropped.

        Raises:
            NoScenesError: If the request has no scenes
            BuildError: If the builder reports a failure message
        """
        if self.builder.is_building():
            logger.info("Builder is busy, skipping %s", request.describe())
            return None

        build_log.info(
            "Build requested",
            at=datetime.now().isoformat(timespec="seconds"),
            request=request.describe(),
        )
        self.builder.switch_active_target(request.target)

        if not request.scenes:
            raise NoScenesError(details={"target": request.target.value})

        message = self.builder.build(request.output, request.scenes, request.target)
        if message:
            raise BuildError(
                message,
                target=request.target.value,
                details={"output": request.output},
            )

        logger.info("Build for %s finished: %s", request.target.value, request.output)
        return request
