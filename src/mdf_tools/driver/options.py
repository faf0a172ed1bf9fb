"""Resolved option values and the settings shared with converter plugins."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional


class OptionSource(Enum):
    """Where an option's final value came from, highest priority first."""

    COMMAND_LINE = "command-line"
    CONFIG_FILE = "config-file"
    DEFAULT = "default"


@dataclass(frozen=True)
class OptionValue:
    """A resolved option value together with its provenance."""

    value: Any
    source: OptionSource


class ResolvedOptions(Mapping[str, Any]):
    """Read-only ``name -> value`` mapping that remembers each value's source.

    Options that were never supplied and have no default are absent, so
    ``"output-directory" in options`` reads as "was an output directory
    given".
    """

    def __init__(self, entries: Mapping[str, OptionValue]) -> None:
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, name: str) -> Any:
        return self._entries[name].value

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResolvedOptions):
            return dict(self._entries) == dict(other._entries)
        return NotImplemented

    def __repr__(self) -> str:
        body = ", ".join(
            f"{name}={entry.value!r} ({entry.source.value})"
            for name, entry in self._entries.items()
        )
        return f"ResolvedOptions({body})"

    def entry(self, name: str) -> OptionValue:
        return self._entries[name]

    def source_of(self, name: str) -> Optional[OptionSource]:
        entry = self._entries.get(name)
        return entry.source if entry is not None else None

    def supplied(self, name: str) -> bool:
        """Return ``True`` when ``name`` came from the command line or config."""

        source = self.source_of(name)
        return source is not None and source is not OptionSource.DEFAULT


class TimeDisplay(Enum):
    """How converters should render timestamps."""

    UTC = "u"
    PC_LOCAL_TIME = "p"
    LOGGER_LOCAL_TIME = "l"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "TimeDisplay":
        """Pick a mode by the first character; anything unknown is logger time."""

        first = value[:1] if value else ""
        if first == "u":
            return cls.UTC
        if first == "p":
            return cls.PC_LOCAL_TIME
        return cls.LOGGER_LOCAL_TIME


@dataclass(frozen=True)
class CommonOptions:
    """Driver-level settings handed to the plugin before conversion."""

    non_interactive: bool = False
    time_display: TimeDisplay = TimeDisplay.LOGGER_LOCAL_TIME
    verbosity: int = 1


__all__ = [
    "CommonOptions",
    "OptionSource",
    "OptionValue",
    "ResolvedOptions",
    "TimeDisplay",
]
