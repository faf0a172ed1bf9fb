"""Merge command line, config file and defaults into one option set."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Mapping, MutableMapping, Optional, Sequence

from mdf_tools.core import config as core_config
from mdf_tools.core import files as core_files
from mdf_tools.core.logging import DEFAULT_VERBOSITY, level_for_verbosity

from .errors import ConfigFileError, PluginFailure
from .options import (
    CommonOptions,
    OptionSource,
    OptionValue,
    ResolvedOptions,
    TimeDisplay,
)
from .plugin import ConverterPlugin
from .schema import OptionKind, OptionSchema, register_common_options
from .status import ParseStatus, StatusSignal


@dataclass(frozen=True)
class DeferredMessage:
    """A log line produced before the logging threshold was known."""

    level: int
    message: str


@dataclass(frozen=True)
class Schemas:
    """The command-line and config-file schemas assembled for one run."""

    command_line: OptionSchema
    config_file: OptionSchema
    combined: OptionSchema


@dataclass(frozen=True)
class Resolution:
    """Everything option resolution learned about the requested run."""

    options: ResolvedOptions
    status: ParseStatus
    common: CommonOptions
    schemas: Schemas
    inputs: tuple[Path, ...] = ()
    unrecognized: tuple[str, ...] = ()
    config_path: Optional[Path] = None
    cwd: Path = field(default_factory=Path.cwd)
    deferred: tuple[DeferredMessage, ...] = ()

    @property
    def verbosity(self) -> int:
        return self.common.verbosity


def build_schemas(plugin: ConverterPlugin) -> Schemas:
    """Assemble common and plugin declarations, then freeze them."""

    command_line = register_common_options(OptionSchema("Allowed options"))
    config_file = OptionSchema("Configuration file options")
    try:
        plugin.configure_parser(command_line)
        plugin.configure_file_parser(config_file)
    except Exception as exc:
        raise PluginFailure(
            f"Error occurred while declaring converter options: {exc}"
        ) from exc
    command_line.freeze()
    config_file.freeze()
    return Schemas(
        command_line=command_line,
        config_file=config_file,
        combined=command_line.combined(config_file),
    )


def resolve(
    argv: Sequence[str],
    plugin: ConverterPlugin,
    *,
    cwd: Optional[Path] = None,
    schemas: Optional[Schemas] = None,
) -> Resolution:
    """Resolve ``argv`` for ``plugin``.

    Precedence is command line, then config file, then declared defaults.
    Malformed arguments raise :class:`~.errors.MalformedArgumentError` and an
    unreadable config file raises :class:`~.errors.ConfigFileError`; every
    other outcome is reported through the returned status.
    """

    args = list(argv)
    workdir = cwd if cwd is not None else Path.cwd()
    schemas = schemas or build_schemas(plugin)
    deferred: list[DeferredMessage] = []
    status = ParseStatus.ok()

    supplied, unrecognized = _parse_command_line(
        args, schemas.combined, plugin.program_name
    )
    entries: MutableMapping[str, OptionValue] = {
        name: OptionValue(value, OptionSource.COMMAND_LINE)
        for name, value in supplied.items()
    }

    config_path: Optional[Path] = None
    if plugin.uses_config_file():
        candidate = workdir / core_config.config_filename(plugin.program_name)
        if candidate.exists():
            config_path = candidate
            _merge_config_file(candidate, schemas.config_file, entries, deferred)
        else:
            deferred.append(
                DeferredMessage(
                    logging.INFO, "No configuration file found, skipping."
                )
            )

    for spec in schemas.combined:
        if spec.name not in entries and spec.default is not None:
            entries[spec.name] = OptionValue(spec.default, OptionSource.DEFAULT)

    options = ResolvedOptions(entries)

    if not args:
        status |= StatusSignal.HELP_REQUESTED
    if options.get("help"):
        status |= StatusSignal.HELP_REQUESTED
    if options.get("version"):
        status |= StatusSignal.VERSION_REQUESTED

    verbosity = options.get("verbose", DEFAULT_VERBOSITY)
    if not isinstance(verbosity, int) or level_for_verbosity(verbosity) is None:
        status |= StatusSignal.UNRECOGNIZED_OPTIONS
        unrecognized.append(f"--verbose={verbosity}")
        verbosity = DEFAULT_VERBOSITY

    common = CommonOptions(
        non_interactive=bool(options.get("non-interactive", False)),
        time_display=TimeDisplay.from_value(options.get("timezone")),
        verbosity=verbosity,
    )

    inputs, no_inputs = _collect_inputs(options, plugin, workdir, deferred)
    if no_inputs:
        status |= StatusSignal.NO_INPUT_FILES

    if unrecognized:
        status |= StatusSignal.UNRECOGNIZED_OPTIONS

    try:
        plugin.set_common_options(common)
        plugin_status = plugin.parse_options(options)
    except Exception as exc:
        raise PluginFailure(
            f"Error occurred during specialized input argument parsing: {exc}"
        ) from exc
    if isinstance(plugin_status, ParseStatus):
        status |= plugin_status

    return Resolution(
        options=options,
        status=status,
        common=common,
        schemas=schemas,
        inputs=tuple(inputs),
        unrecognized=tuple(unrecognized),
        config_path=config_path,
        cwd=workdir,
        deferred=tuple(deferred),
    )


class _Token(str):
    """A command-line token that remembers where it appeared."""

    position: int


def _indexed_tokens(args: Sequence[str]) -> list[str]:
    tokens: list[str] = []
    for raw in _split_attached_inputs(args):
        token = _Token(raw)
        token.position = len(tokens)
        tokens.append(token)
    return tokens


def _split_attached_inputs(args: Sequence[str]) -> Iterator[str]:
    # Attached values would lose their position when argparse splits them.
    for raw in args:
        if raw.startswith("--input-files="):
            yield "--input-files"
            yield raw.partition("=")[2]
        elif raw.startswith("-i") and len(raw) > 2:
            yield "-i"
            yield raw[2:].removeprefix("=")
        else:
            yield raw


def _position(token: str) -> int:
    return getattr(token, "position", sys.maxsize)


def _plain(value: Any) -> Any:
    if isinstance(value, str):
        return str(value)
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _is_unknown_cluster(token: str, schema: OptionSchema) -> bool:
    """Return True for ``-xyz`` tokens naming a short option nobody declared."""

    if token.startswith("--") or len(token) <= 2 or not token[1:2].isalpha():
        return False
    for letter in token[1:]:
        spec = schema.short_option(letter)
        if spec is None:
            return True
        if spec.kind is not OptionKind.FLAG:
            return False
    return False


def _parse_command_line(
    args: Sequence[str], schema: OptionSchema, prog: str
) -> tuple[dict[str, Any], list[str]]:
    tokens = _indexed_tokens(args)
    known: list[str] = []
    unknown: list[str] = []
    for token in tokens:
        if _is_unknown_cluster(token, schema):
            unknown.append(token)
        else:
            known.append(token)

    parser = schema.build_parser(prog)
    namespace, extras = parser.parse_known_args(known)
    supplied: dict[str, Any] = dict(vars(namespace))

    unrecognized: list[str] = list(unknown)
    bare: list[str] = []
    for token in extras:
        if token.startswith("-") and token != "-":
            unrecognized.append(token)
        else:
            bare.append(token)

    if bare:
        supplied["input-files"] = [*supplied.get("input-files", []), *bare]
    if "input-files" in supplied:
        supplied["input-files"] = sorted(supplied["input-files"], key=_position)
    unrecognized.sort(key=_position)
    return (
        {name: _plain(value) for name, value in supplied.items()},
        [str(token) for token in unrecognized],
    )


def _merge_config_file(
    path: Path,
    schema: OptionSchema,
    entries: MutableMapping[str, OptionValue],
    deferred: list[DeferredMessage],
) -> None:
    try:
        parser = core_config.load_ini(path)
    except core_config.IniConfigError as exc:
        raise ConfigFileError(
            f"Error during parsing of configuration file: {exc}"
        ) from exc

    for key, raw in core_config.iter_ini_entries(parser):
        spec = schema.get(key)
        if spec is None:
            deferred.append(
                DeferredMessage(
                    logging.DEBUG,
                    f"Ignoring unknown configuration key '{key}' in {path}.",
                )
            )
            continue
        existing = entries.get(key)
        if existing is not None and existing.source is OptionSource.COMMAND_LINE:
            continue
        try:
            value = spec.coerce(raw)
        except ValueError as exc:
            raise ConfigFileError(
                f"Error during parsing of configuration file: {exc}"
            ) from exc
        entries[key] = OptionValue(value, OptionSource.CONFIG_FILE)


def _collect_inputs(
    options: Mapping[str, Any],
    plugin: ConverterPlugin,
    cwd: Path,
    deferred: list[DeferredMessage],
) -> tuple[list[Path], bool]:
    if "input-directory" in options:
        directory = core_files.absolute_path(options["input-directory"], cwd=cwd)
        if not directory.exists():
            deferred.append(
                DeferredMessage(
                    logging.ERROR, f"Input directory does not exist: {directory}"
                )
            )
            return [], True
        if not directory.is_dir():
            deferred.append(
                DeferredMessage(
                    logging.ERROR, f"Input path is not a directory: {directory}"
                )
            )
            return [], True
        found = list(
            core_files.iter_directory_files(directory, plugin.input_extension)
        )
        return found, False

    files = options.get("input-files") or []
    if not files:
        return [], True
    return [Path(entry) for entry in files], False


__all__ = [
    "DeferredMessage",
    "Resolution",
    "Schemas",
    "build_schemas",
    "resolve",
]
