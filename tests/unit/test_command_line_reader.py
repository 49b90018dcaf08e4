from __future__ import annotations

import logging
import sys
from unittest.mock import patch

import pytest
from mobile_build_runner.constants import DEFAULT_CUSTOM_ARGS_PREFIX
from mobile_build_runner.core.common.exceptions import (
    DuplicateCustomArgumentsError,
    DuplicateKeyError,
    MalformedPairError,
    MissingArgumentVectorError,
)
from mobile_build_runner.core.services.command_line_reader import (
    CommandLineReader,
    find_custom_argument_blob,
    get_command_line,
    get_custom_argument,
    get_custom_arguments,
    get_raw_args,
    parse_custom_arguments,
)
from mobile_build_runner.core.services.error_reporter import CollectingErrorReporter

PREFIX = "-app.customargs:"


def test_get_raw_args_returns_process_vector() -> None:
    with patch.object(sys, "argv", ["Unity", "-batchmode"]):
        assert get_raw_args() == ["Unity", "-batchmode"]


class TestFindCustomArgumentBlob:
    def test_strips_prefix(self, reporter: CollectingErrorReporter) -> None:
        args = ["Unity", f"{PREFIX}a=1;b=2", "-quit"]
        assert find_custom_argument_blob(args, PREFIX, reporter) == "a=1;b=2"
        assert not reporter.has_problems()

    def test_not_found_is_empty_and_not_an_error(
        self, reporter: CollectingErrorReporter
    ) -> None:
        assert find_custom_argument_blob(["Unity", "-quit"], PREFIX, reporter) == ""
        assert not reporter.has_problems()

    def test_prefix_match_is_case_sensitive(
        self, reporter: CollectingErrorReporter
    ) -> None:
        assert find_custom_argument_blob(["-APP.CUSTOMARGS:a=1"], PREFIX, reporter) == ""

    def test_prefix_must_start_the_token(
        self, reporter: CollectingErrorReporter
    ) -> None:
        assert find_custom_argument_blob([f"x{PREFIX}a=1"], PREFIX, reporter) == ""

    def test_only_leading_prefix_is_removed(
        self, reporter: CollectingErrorReporter
    ) -> None:
        blob = find_custom_argument_blob([f"{PREFIX}note={PREFIX}"], PREFIX, reporter)
        assert blob == f"note={PREFIX}"

    def test_none_vector_is_reported_not_raised(
        self, reporter: CollectingErrorReporter
    ) -> None:
        assert find_custom_argument_blob(None, PREFIX, reporter) == ""
        assert len(reporter.errors) == 1
        assert isinstance(reporter.errors[0], MissingArgumentVectorError)

    def test_first_match_wins_and_duplicates_are_reported(
        self, reporter: CollectingErrorReporter
    ) -> None:
        args = [f"{PREFIX}a=first", f"{PREFIX}a=second", f"{PREFIX}a=third"]
        assert find_custom_argument_blob(args, PREFIX, reporter) == "a=first"
        assert len(reporter.warnings) == 1
        warning = reporter.warnings[0]
        assert isinstance(warning, DuplicateCustomArgumentsError)
        assert warning.count == 3


class TestParseCustomArguments:
    def test_well_formed_pairs(self, reporter: CollectingErrorReporter) -> None:
        assert parse_custom_arguments("k1=v1;k2=v2", ";", reporter) == {
            "k1": "v1",
            "k2": "v2",
        }

    def test_malformed_token_is_skipped_and_reported(
        self, reporter: CollectingErrorReporter
    ) -> None:
        result = parse_custom_arguments("k1=v1;badtoken;k2=v2", ";", reporter)
        assert result == {"k1": "v1", "k2": "v2"}
        assert len(reporter.warnings) == 1
        warning = reporter.warnings[0]
        assert isinstance(warning, MalformedPairError)
        assert warning.token == "badtoken"
        assert "[badtoken]" in warning.message

    def test_empty_blob_gives_empty_mapping(
        self, reporter: CollectingErrorReporter
    ) -> None:
        assert parse_custom_arguments("", ";", reporter) == {}
        assert not reporter.has_problems()

    def test_value_containing_equals_is_preserved(
        self, reporter: CollectingErrorReporter
    ) -> None:
        # Pairs split on the first '=' only
        assert parse_custom_arguments("path=/a=b/c", ";", reporter) == {
            "path": "/a=b/c"
        }
        assert not reporter.has_problems()

    def test_empty_value_is_allowed(self, reporter: CollectingErrorReporter) -> None:
        assert parse_custom_arguments("flag=", ";", reporter) == {"flag": ""}

    def test_empty_name_is_malformed(self, reporter: CollectingErrorReporter) -> None:
        assert parse_custom_arguments("=value;k=v", ";", reporter) == {"k": "v"}
        assert [w.token for w in reporter.warnings] == ["=value"]

    def test_trailing_separator_is_ignored(
        self, reporter: CollectingErrorReporter
    ) -> None:
        assert parse_custom_arguments("k=v;;", ";", reporter) == {"k": "v"}
        assert not reporter.has_problems()

    def test_duplicate_key_last_wins(self, reporter: CollectingErrorReporter) -> None:
        assert parse_custom_arguments("k=1;k=2", ";", reporter) == {"k": "2"}
        assert isinstance(reporter.warnings[0], DuplicateKeyError)

    def test_custom_separator(self, reporter: CollectingErrorReporter) -> None:
        assert parse_custom_arguments("a=1|b=x;y", "|", reporter) == {
            "a": "1",
            "b": "x;y",
        }

    def test_malformed_pair_logged_by_default(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            parse_custom_arguments("oops;k=v")
        assert "MalformedPairError" in caplog.text
        assert "[oops]" in caplog.text


class TestGetCustomArgument:
    def test_scenario_from_build_invocation(
        self, reporter: CollectingErrorReporter
    ) -> None:
        args = [
            f"{PREFIX}outputPath=/tmp/out.apk;keystoreName=release.keystore",
            "-batchmode",
        ]
        assert get_custom_arguments(args, PREFIX, ";", reporter) == {
            "outputPath": "/tmp/out.apk",
            "keystoreName": "release.keystore",
        }
        assert get_custom_argument("outputPath", args, PREFIX, ";", reporter) == (
            "/tmp/out.apk"
        )
        assert get_custom_argument("missingKey", args, PREFIX, ";", reporter) is None

    @pytest.mark.parametrize("name", ["outputPath", "keystoreName", "anything"])
    def test_no_blob_means_every_key_is_absent(
        self, name: str, reporter: CollectingErrorReporter
    ) -> None:
        assert get_custom_argument(name, ["Unity", "-quit"], PREFIX, ";", reporter) is None

    def test_parsing_is_idempotent(self, sample_vector: list[str]) -> None:
        first = get_custom_arguments(sample_vector, PREFIX, ";")
        second = get_custom_arguments(sample_vector, PREFIX, ";")
        assert first == second
        assert first is not second

    def test_defaults_read_process_vector(self) -> None:
        argv = ["Unity", f"{DEFAULT_CUSTOM_ARGS_PREFIX}outputPath=Build/x.apk"]
        with patch.object(sys, "argv", argv):
            assert get_custom_argument("outputPath") == "Build/x.apk"


class TestGetCommandLine:
    def test_joins_with_spaces(self) -> None:
        assert get_command_line(["Unity", "-batchmode", "-quit"]) == (
            "Unity -batchmode -quit"
        )

    def test_empty_vector_is_reported(self, reporter: CollectingErrorReporter) -> None:
        assert get_command_line([], reporter) == ""
        assert isinstance(reporter.errors[0], MissingArgumentVectorError)


class TestCommandLineReader:
    def test_uses_bound_vector(
        self, sample_vector: list[str], reporter: CollectingErrorReporter
    ) -> None:
        reader = CommandLineReader(PREFIX, ";", reporter, sample_vector)
        assert reader.get_custom_argument("keystoreName") == "release.keystore"
        assert reader.get_command_line_args() == sample_vector
        assert reader.get_command_line().startswith("Unity -batchmode")

    def test_explicit_args_override_bound_vector(
        self, sample_vector: list[str], reporter: CollectingErrorReporter
    ) -> None:
        reader = CommandLineReader(PREFIX, ";", reporter, sample_vector)
        assert reader.get_custom_arguments([f"{PREFIX}x=1"]) == {"x": "1"}

    def test_reads_live_vector_when_unbound(self) -> None:
        reader = CommandLineReader(PREFIX, ";")
        with patch.object(sys, "argv", ["Unity", f"{PREFIX}a=1"]):
            assert reader.get_custom_argument("a") == "1"
        with patch.object(sys, "argv", ["Unity", f"{PREFIX}a=2"]):
            assert reader.get_custom_argument("a") == "2"

    def test_reports_every_lookup(self, reporter: CollectingErrorReporter) -> None:
        reader = CommandLineReader(PREFIX, ";", reporter, [f"{PREFIX}bad"])
        reader.get_custom_argument("a")
        reader.get_custom_argument("b")
        assert len(reporter.warnings) == 2
