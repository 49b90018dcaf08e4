"""
Command line entry point.

The host launches the runner with its own flags mixed in, so unknown
arguments are tolerated and the custom argument blob is always read from the
full raw argument vector.
"""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from mobile_build_runner.constants import SECRET_ARGUMENT_KEYS
from mobile_build_runner.core.common.exceptions import (
    BuildRunnerError,
    StrictModeError,
)
from mobile_build_runner.core.common.logging_utils import configure_logging
from mobile_build_runner.core.config.app_config import AppConfig, load_config
from mobile_build_runner.core.domain.build_request import BuildTarget, SceneEntry
from mobile_build_runner.core.services.command_line_reader import CommandLineReader
from mobile_build_runner.core.services.dry_run_builder import DryRunBuilder
from mobile_build_runner.core.services.error_reporter import (
    CollectingErrorReporter,
    LoggingErrorReporter,
)
from mobile_build_runner.core.services.mobile_build_runner import MobileBuildRunner

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MISSING = 1
EXIT_FAILURE = 2

COMMANDS = ("args", "android", "ios")

# Options whose values normally start with "-" (e.g. -gj.mobilebuild:)
_DASH_VALUE_OPTIONS = ("--prefix", "--separator")


def build_cli_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    # No -h: host flags such as -headless would be read as -h plus a value
    parser = argparse.ArgumentParser(
        prog="mobile-build-runner",
        description=(
            "Read custom build arguments and request a mobile build. "
            "The command must come first; host flags that take values "
            "(e.g. -projectPath /p) go after it."
        ),
        add_help=False,
    )
    parser.add_argument(
        "--help", action="help", help="show this help message and exit"
    )
    parser.add_argument(
        "command",
        choices=COMMANDS,
        help="'args' prints the custom arguments, 'android'/'ios' request a build",
    )
    parser.add_argument("--config", dest="config_file", help="YAML or JSON config file")
    parser.add_argument("--prefix", help="Custom argument prefix, e.g. -gj.mobilebuild:")
    parser.add_argument("--separator", help="Pair separator inside the custom argument")
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail when the custom argument contains malformed or duplicate entries",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    parser.add_argument("--log-file", help="Also write logs to this file")

    parser.add_argument("--get", metavar="NAME", help="Print a single argument value")
    parser.add_argument(
        "--show-secrets",
        action="store_true",
        help="Print keystore passwords instead of masking them",
    )

    parser.add_argument(
        "--scene",
        dest="scenes",
        action="append",
        default=[],
        metavar="PATH",
        help="Scene enabled in the host project; can be given multiple times",
    )
    parser.add_argument(
        "--base-dir",
        type=Path,
        help="Directory default build folders are created in (defaults to cwd)",
    )
    return parser


def _join_dash_values(argv: Sequence[str]) -> list[str]:
    """Rewrite `--prefix -x:` as `--prefix=-x:` so argparse keeps the value."""
    joined: list[str] = []
    tokens = iter(argv)
    for token in tokens:
        if token in _DASH_VALUE_OPTIONS:
            value = next(tokens, None)
            if value is not None:
                joined.append(f"{token}={value}")
                continue
        joined.append(token)
    return joined


def parse_cli_args(
    argv: Sequence[str] | None = None,
) -> tuple[argparse.Namespace, list[str]]:
    parser = build_cli_parser()
    if argv is None:
        argv = sys.argv[1:]
    args, unknown = parser.parse_known_args(_join_dash_values(argv))
    return args, unknown


def apply_cli_args(args: argparse.Namespace) -> AppConfig:
    """Load configuration and apply CLI overrides on top of it."""
    cfg = load_config(args.config_file)
    parser_update: dict[str, str] = {}
    if args.prefix is not None:
        parser_update["prefix"] = args.prefix
    if args.separator is not None:
        parser_update["separator"] = args.separator

    data = cfg.model_dump(mode="json")
    data["parser"].update(parser_update)
    if args.log_level:
        data["logging"]["level"] = args.log_level
    if args.log_file:
        data["logging"]["log_file"] = args.log_file
    if args.strict is not None:
        data["strict"] = args.strict
    return AppConfig.from_dict(data)


def _mask(arguments: dict[str, str]) -> dict[str, str]:
    return {
        name: "***" if name in SECRET_ARGUMENT_KEYS else value
        for name, value in arguments.items()
    }


def _check_strict(cfg: AppConfig, reader: CommandLineReader) -> None:
    collector = CollectingErrorReporter(forward_to=LoggingErrorReporter())
    strict_reader = CommandLineReader(
        cfg.parser.prefix,
        cfg.parser.separator,
        collector,
        reader.get_command_line_args(),
    )
    strict_reader.get_custom_arguments()
    if collector.has_problems():
        raise StrictModeError(
            f"{len(collector.problems)} problem(s) in the custom argument",
            problems=collector.problems,
        )


def _run_args_command(
    args: argparse.Namespace, reader: CommandLineReader
) -> int:
    if args.get:
        value = reader.get_custom_argument(args.get)
        if value is None:
            logger.info("Custom argument %s not present", args.get)
            return EXIT_MISSING
        sys.stdout.write(value + "\n")
        return EXIT_OK

    arguments = reader.get_custom_arguments()
    shown = arguments if args.show_secrets else _mask(arguments)
    sys.stdout.write(json.dumps(shown, indent=2, sort_keys=True) + "\n")
    return EXIT_OK


def _run_build_command(
    args: argparse.Namespace, cfg: AppConfig, reader: CommandLineReader
) -> int:
    builder = DryRunBuilder(scenes=[SceneEntry(path=path) for path in args.scenes])
    runner = MobileBuildRunner(
        reader, builder, scene_config=cfg.scenes, base_dir=args.base_dir
    )
    request = runner.perform_build(BuildTarget(args.command))
    if request is not None:
        sys.stdout.write(request.describe() + "\n")
    return EXIT_OK


def main(
    argv: Sequence[str] | None = None, raw_args: Sequence[str] | None = None
) -> int:
    """Run the CLI.

    Args:
        argv: CLI arguments without the program name; defaults to sys.argv[1:]
        raw_args: Full vector to read the custom argument from; defaults to
            the program name followed by ``argv``
    """
    if argv is None:
        argv = sys.argv[1:]
    if raw_args is None:
        raw_args = [sys.argv[0] if sys.argv else "mobile-build-runner", *argv]

    args, unknown = parse_cli_args(argv)

    try:
        cfg = apply_cli_args(args)
    except BuildRunnerError as e:
        sys.stderr.write(f"ERROR: {e.message}\n")
        return EXIT_FAILURE

    redaction = configure_logging(
        cfg.logging.level.value,
        log_file=cfg.logging.log_file,
        separator=cfg.parser.separator,
    )
    if unknown:
        logger.debug("Ignoring host arguments: %s", " ".join(unknown))

    reader = CommandLineReader(
        cfg.parser.prefix, cfg.parser.separator, LoggingErrorReporter(), raw_args
    )
    quiet = CommandLineReader(
        cfg.parser.prefix, cfg.parser.separator, CollectingErrorReporter(), raw_args
    )
    for name, value in quiet.get_custom_arguments().items():
        if name in SECRET_ARGUMENT_KEYS:
            redaction.add_secret(value)

    try:
        if cfg.strict:
            _check_strict(cfg, reader)
        if args.command == "args":
            return _run_args_command(args, reader)
        return _run_build_command(args, cfg, reader)
    except BuildRunnerError as e:
        logger.error("%s: %s", type(e).__name__, e.message)
        logger.debug("Error details: %s", json.dumps(e.to_dict(), default=str))
        sys.stderr.write(f"ERROR: {e.message}\n")
        return EXIT_FAILURE


def main_entry() -> None:
    """Console script wrapper that turns the return code into an exit status."""
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
