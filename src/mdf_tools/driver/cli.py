"""Command-line entry point shared by every converter plugin."""

from __future__ import annotations

import sys
from importlib import metadata
from pathlib import Path
from typing import IO, Optional, Sequence

from rich.console import Console

from mdf_tools.core.logging import configure_logger

from .discovery import OutputLocator
from .errors import DriverError, MalformedArgumentError
from .executor import EXIT_FATAL, EXIT_OK, EXIT_UNRECOGNIZED, run_batch
from .plugin import ConverterPlugin
from .progress import ProgressReporter
from .resolver import Resolution, Schemas, build_schemas, resolve
from .status import StatusSignal

PACKAGE_NAME = "mdf-tools"


def run(
    plugin: ConverterPlugin,
    argv: Optional[Sequence[str]] = None,
    *,
    cwd: Optional[Path] = None,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> int:
    """Run ``plugin`` over the files named by ``argv`` and return an exit code.

    No exception raised by the driver or the plugin escapes this function;
    fatal conditions are logged and reported as :data:`EXIT_FATAL`.
    """

    args = list(argv if argv is not None else sys.argv[1:])
    logger_name = f"mdf_tools.{plugin.program_name}"
    logger = configure_logger(logger_name, stream=stderr)
    console = Console(file=stdout, markup=False, highlight=False, soft_wrap=True)

    reporter = ProgressReporter(stream=stdout)
    try:
        plugin.register_progress_callback(reporter)
        schemas = build_schemas(plugin)
        resolution = resolve(args, plugin, cwd=cwd, schemas=schemas)
    except MalformedArgumentError as exc:
        logger.critical(_malformed_message(exc))
        return EXIT_FATAL
    except DriverError as exc:
        logger.critical(str(exc))
        return EXIT_FATAL
    except Exception as exc:
        logger.critical(
            "Error occurred during input argument parsing: %s", exc
        )
        return EXIT_FATAL

    logger = configure_logger(
        logger_name, verbosity=resolution.verbosity, stream=stderr
    )
    for message in resolution.deferred:
        logger.log(message.level, message.message)
    reporter.common = resolution.common

    governing = resolution.status.governing
    try:
        if governing is StatusSignal.UNRECOGNIZED_OPTIONS:
            _print_unrecognized(console, plugin, resolution)
            return EXIT_UNRECOGNIZED
        if governing is StatusSignal.HELP_REQUESTED:
            _print_help(console, plugin, resolution.schemas)
            return EXIT_OK
        if governing is StatusSignal.VERSION_REQUESTED:
            _print_version(console, plugin)
            return EXIT_OK
    except Exception as exc:
        logger.critical("Error while printing program information: %s", exc)
        return EXIT_FATAL
    if governing is StatusSignal.NO_INPUT_FILES:
        logger.debug("No input files given, nothing to do.")
        return EXIT_OK

    try:
        locator = OutputLocator(
            resolution.options.get("output-directory"),
            cwd=resolution.cwd,
            logger=logger,
        )
        result = run_batch(
            resolution.inputs,
            plugin,
            locator=locator,
            logger=logger,
            cwd=resolution.cwd,
        )
    except Exception as exc:
        logger.critical("Unexpected error during conversion: %s", exc)
        return EXIT_FATAL
    return result.exit_code


def format_help(plugin: ConverterPlugin, schemas: Schemas) -> str:
    """Return the usage banner followed by the command-line option table."""

    prog = plugin.program_name
    lines = [
        "Usage:",
        f"{prog} [-short-option value --long-option value] [-i] file_a "
        "[file_b ...]:",
        "",
        'Short options start with a single "-", while long options start '
        'with "--".',
        'A value enclosed in "[]" signifies it is optional.',
        "Some options only exists in the long form, while others exist in "
        "both forms.",
        "Not all options require arguments (ARG).",
        "",
        schemas.command_line.format_help(prog),
    ]
    return "\n".join(lines)


def format_version(plugin: ConverterPlugin) -> str:
    return "\n".join(
        [
            f"Version of {plugin.program_name}: {plugin.get_version()}",
            f"Version of converter base: {driver_version()}",
        ]
    )


def driver_version() -> str:
    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return "unknown"


def _print_help(
    console: Console, plugin: ConverterPlugin, schemas: Schemas
) -> None:
    console.print(format_help(plugin, schemas))


def _print_version(console: Console, plugin: ConverterPlugin) -> None:
    console.print(format_version(plugin))


def _print_unrecognized(
    console: Console, plugin: ConverterPlugin, resolution: Resolution
) -> None:
    tokens = resolution.unrecognized
    heading = "Unrecognized options:"
    if len(tokens) == 1:
        heading = "Unrecognized option:"
    console.print(heading)
    for token in tokens:
        console.print(token)
    console.print()
    _print_help(console, plugin, resolution.schemas)


def _malformed_message(exc: MalformedArgumentError) -> str:
    if exc.option and "expected" in str(exc):
        return f"Missing argument for option '{exc.option}'"
    return f"Invalid command line: {exc}"


__all__ = [
    "PACKAGE_NAME",
    "driver_version",
    "format_help",
    "format_version",
    "run",
]
