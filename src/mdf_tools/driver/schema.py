"""Option declarations shared by the driver and converter plugins."""

from __future__ import annotations

import argparse
import configparser
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, NoReturn, Optional

from .errors import MalformedArgumentError, SchemaError

_LIST_SEPARATOR = re.compile(r"[,\s]+")
_ARGUMENT_NAME = re.compile(r"^argument ([^:]+):")


class OptionKind(Enum):
    """Value types an option may carry."""

    FLAG = "flag"
    INT = "int"
    STR = "str"


class OptionOrigin(Enum):
    """Which party declared an option."""

    COMMON = "common"
    PLUGIN = "plugin"


@dataclass(frozen=True)
class OptionSpec:
    """Declaration for a single named option."""

    name: str
    kind: OptionKind
    default: Any = None
    short: Optional[str] = None
    help: str = ""
    origin: OptionOrigin = OptionOrigin.PLUGIN
    multiple: bool = False

    @property
    def flags(self) -> tuple[str, ...]:
        long_flag = f"--{self.name}"
        if self.short:
            return (f"-{self.short}", long_flag)
        return (long_flag,)

    def coerce(self, raw: str) -> Any:
        """Convert a raw config-file string into this option's value type."""

        if self.multiple:
            parts = [part for part in _LIST_SEPARATOR.split(raw) if part]
            return [self._coerce_scalar(part) for part in parts]
        return self._coerce_scalar(raw)

    def _coerce_scalar(self, raw: str) -> Any:
        value = raw.strip()
        if self.kind is OptionKind.FLAG:
            state = configparser.ConfigParser.BOOLEAN_STATES.get(value.lower())
            if state is None:
                raise ValueError(
                    f"Option '{self.name}' expects a boolean, got '{raw}'."
                )
            return state
        if self.kind is OptionKind.INT:
            try:
                return int(value)
            except ValueError as exc:
                raise ValueError(
                    f"Option '{self.name}' expects an integer, got '{raw}'."
                ) from exc
        return value


class OptionSchema:
    """Ordered collection of option declarations.

    A schema accepts new declarations until :meth:`freeze` is called; the
    resolver freezes both schemas before parsing so a run sees one stable set
    of options.
    """

    def __init__(self, title: str = "Allowed options") -> None:
        self.title = title
        self._specs: dict[str, OptionSpec] = {}
        self._shorts: dict[str, str] = {}
        self._frozen = False

    def add(self, spec: OptionSpec) -> OptionSpec:
        if self._frozen:
            raise SchemaError(
                f"Cannot declare '{spec.name}': the option schema is frozen."
            )
        if not spec.name or spec.name.startswith("-"):
            raise SchemaError(f"Invalid option name '{spec.name}'.")
        if spec.name in self._specs:
            raise SchemaError(f"Option '{spec.name}' is declared twice.")
        if spec.short:
            if len(spec.short) != 1:
                raise SchemaError(
                    f"Short alias for '{spec.name}' must be one character."
                )
            owner = self._shorts.get(spec.short)
            if owner is not None:
                raise SchemaError(
                    f"Short alias '-{spec.short}' is used by both "
                    f"'{owner}' and '{spec.name}'."
                )
            self._shorts[spec.short] = spec.name
        self._specs[spec.name] = spec
        return spec

    def add_option(
        self,
        name: str,
        kind: OptionKind = OptionKind.STR,
        *,
        default: Any = None,
        short: Optional[str] = None,
        help: str = "",
        multiple: bool = False,
        origin: OptionOrigin = OptionOrigin.PLUGIN,
    ) -> OptionSpec:
        """Declare an option; plugins call this from ``configure_parser``."""

        if kind is OptionKind.FLAG and default is None:
            default = False
        return self.add(
            OptionSpec(
                name=name,
                kind=kind,
                default=default,
                short=short,
                help=help,
                origin=origin,
                multiple=multiple,
            )
        )

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Optional[OptionSpec]:
        return self._specs.get(name)

    def short_option(self, letter: str) -> Optional[OptionSpec]:
        name = self._shorts.get(letter)
        return self._specs.get(name) if name is not None else None

    def names(self) -> tuple[str, ...]:
        return tuple(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __iter__(self) -> Iterator[OptionSpec]:
        return iter(tuple(self._specs.values()))

    def __len__(self) -> int:
        return len(self._specs)

    def combined(self, other: "OptionSchema") -> "OptionSchema":
        """Return a new schema holding this schema's options then ``other``'s."""

        merged = OptionSchema(title=self.title)
        for spec in (*self, *other):
            merged.add(spec)
        merged.freeze()
        return merged

    def build_parser(self, prog: str) -> argparse.ArgumentParser:
        """Render the schema into an argparse parser.

        Every option defaults to ``argparse.SUPPRESS`` so the parsed namespace
        only carries values that were actually supplied on the command line.
        """

        parser = _OptionParser(
            prog=prog,
            add_help=False,
            allow_abbrev=False,
            usage=argparse.SUPPRESS,
        )
        group = parser.add_argument_group(self.title)
        for spec in self:
            group.add_argument(*spec.flags, **_argparse_kwargs(spec))
        return parser

    def format_help(self, prog: str) -> str:
        return self.build_parser(prog).format_help().strip("\n")


class _OptionParser(argparse.ArgumentParser):
    """Argument parser that raises instead of exiting on malformed input."""

    def error(self, message: str) -> NoReturn:  # type: ignore[override]
        match = _ARGUMENT_NAME.match(message)
        option = None
        if match:
            option = match.group(1).split("/")[-1]
        raise MalformedArgumentError(message, option=option)


def _argparse_kwargs(spec: OptionSpec) -> dict[str, Any]:
    kwargs: dict[str, Any] = {
        "dest": spec.name,
        "default": argparse.SUPPRESS,
        "help": _help_text(spec),
    }
    if spec.kind is OptionKind.FLAG:
        kwargs["action"] = "store_true"
        return kwargs

    if spec.kind is OptionKind.INT:
        kwargs["type"] = int
    kwargs["metavar"] = "ARG"
    if spec.multiple:
        kwargs["action"] = "extend"
        kwargs["nargs"] = "+"
    return kwargs


def _help_text(spec: OptionSpec) -> str:
    text = spec.help.replace("%", "%%")
    if spec.kind is OptionKind.FLAG or spec.default is None:
        return text
    default = spec.default
    if isinstance(default, (list, tuple)):
        default = " ".join(str(item) for item in default)
    return f"{text} (default: {default})".strip()


def register_common_options(schema: OptionSchema) -> OptionSchema:
    """Declare the options every converter understands."""

    common = OptionOrigin.COMMON
    schema.add_option(
        "help",
        OptionKind.FLAG,
        short="h",
        help="Print this help message.",
        origin=common,
    )
    schema.add_option(
        "version",
        OptionKind.FLAG,
        short="v",
        help="Print version information.",
        origin=common,
    )
    schema.add_option(
        "verbose",
        OptionKind.INT,
        default=1,
        help="Set verbosity of output (0-5).",
        origin=common,
    )
    schema.add_option(
        "input-directory",
        OptionKind.STR,
        short="I",
        help="Input directory to convert files from.",
        origin=common,
    )
    schema.add_option(
        "output-directory",
        OptionKind.STR,
        short="O",
        help="Output directory to place converted files into.",
        origin=common,
    )
    schema.add_option(
        "non-interactive",
        OptionKind.FLAG,
        help="Run in non-interactive mode, with no progress output.",
        origin=common,
    )
    schema.add_option(
        "timezone",
        OptionKind.STR,
        default="l",
        short="t",
        help=(
            "Display times in UTC (u), logger localtime (l, default) or PC "
            "local time (p)."
        ),
        origin=common,
    )
    schema.add_option(
        "input-files",
        OptionKind.STR,
        short="i",
        multiple=True,
        help=(
            "List of files to convert, ignored if input-directory is "
            "specified. All unknown arguments will be interpreted as input "
            "files."
        ),
        origin=common,
    )
    return schema


__all__ = [
    "OptionKind",
    "OptionOrigin",
    "OptionSchema",
    "OptionSpec",
    "register_common_options",
]
