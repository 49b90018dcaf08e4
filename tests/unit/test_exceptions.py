from mobile_build_runner.core.common.exceptions import (
    BuildError,
    BuildRunnerError,
    ConfigurationError,
    DuplicateCustomArgumentsError,
    MalformedPairError,
    NoScenesError,
)


def test_to_dict_includes_extra_attributes() -> None:
    error = BuildError("Player build failed", target="android", details={"output": "a"})
    payload = error.to_dict()["error"]
    assert payload["message"] == "Player build failed"
    assert payload["type"] == "BuildError"
    assert payload["details"] == {"output": "a"}
    assert payload["target"] == "android"


def test_default_messages() -> None:
    assert NoScenesError().message == "No scenes to build."
    assert ConfigurationError().message == "Configuration error"
    assert "[k]" in MalformedPairError("k").message
    assert "ignoring 2" in DuplicateCustomArgumentsError("-p:", 3).message


def test_hierarchy() -> None:
    for error in (NoScenesError(), BuildError(), MalformedPairError("t")):
        assert isinstance(error, BuildRunnerError)
