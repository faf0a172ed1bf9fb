"""Shared INI configuration helpers for mdf_tools converters."""

from __future__ import annotations

import configparser
from pathlib import Path
from typing import Iterator

__all__ = [
    "IniConfigError",
    "config_filename",
    "iter_ini_entries",
    "load_ini",
]

_ROOT_SECTION = "__root__"


class IniConfigError(RuntimeError):
    """Raised when INI config IO or parsing fails."""


def config_filename(program_name: str) -> str:
    """Return the conventional config file name for ``program_name``."""

    return f"{program_name}_config.ini"


def load_ini(path: Path) -> configparser.ConfigParser:
    """Load an INI document from ``path``.

    Keys that appear before the first section header are accepted and stored
    in a private root section. Errors are surfaced as
    :class:`IniConfigError` instances so callers can translate them into
    domain-specific exceptions.
    """

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise IniConfigError(f"Config file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise IniConfigError(f"Failed to read config file {path}: {exc}") from exc

    parser = configparser.ConfigParser(
        interpolation=None,
        default_section="__defaults__",
        strict=True,
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    try:
        parser.read_string(f"[{_ROOT_SECTION}]\n{text}", source=str(path))
    except configparser.Error as exc:
        raise IniConfigError(f"Failed to parse config INI: {exc}") from exc
    return parser


def iter_ini_entries(
    parser: configparser.ConfigParser,
) -> Iterator[tuple[str, str]]:
    """Yield ``(dotted_key, raw_value)`` pairs in file order.

    Root keys keep their bare name; keys inside ``[section]`` become
    ``section.key``.
    """

    for section in parser.sections():
        for key, value in parser.items(section, raw=True):
            if section == _ROOT_SECTION:
                yield key.strip(), value
            else:
                yield f"{section.strip()}.{key.strip()}", value
