from pathlib import Path

import pytest
from mobile_build_runner.core.services.error_reporter import CollectingErrorReporter

CUSTOM_PREFIX = "-app.customargs:"


@pytest.fixture(autouse=True)
def clean_build_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of config-sensitive tests."""
    for name in (
        "MOBILE_BUILD_ARGS_PREFIX",
        "MOBILE_BUILD_ARGS_SEPARATOR",
        "MOBILE_BUILD_LOG_LEVEL",
        "MOBILE_BUILD_LOG_FILE",
        "MOBILE_BUILD_STRICT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def reporter() -> CollectingErrorReporter:
    return CollectingErrorReporter()


@pytest.fixture
def sample_vector() -> list[str]:
    return [
        "Unity",
        "-batchmode",
        f"{CUSTOM_PREFIX}outputPath=/tmp/out.apk;keystoreName=release.keystore",
        "-quit",
    ]


@pytest.fixture
def temp_config_path(tmp_path: Path) -> Path:
    """Create a minimal YAML config file and return its path."""
    import yaml

    cfg = {
        "parser": {"prefix": CUSTOM_PREFIX, "separator": "|"},
        "scenes": {"common": ["Assets/Main.unity"], "android_only": ["Assets/Ads.unity"]},
        "logging": {"level": "debug"},
        "strict": True,
    }
    p = tmp_path / "build.config.yaml"
    with p.open("w", encoding="utf-8") as f:
        yaml.safe_dump(cfg, f, sort_keys=False)
    return p
