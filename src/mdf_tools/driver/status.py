"""Outcome signals produced while resolving converter options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StatusSignal(Enum):
    """Independent, non-exclusive outcomes of option resolution."""

    UNRECOGNIZED_OPTIONS = "unrecognized-options"
    HELP_REQUESTED = "help-requested"
    VERSION_REQUESTED = "version-requested"
    NO_INPUT_FILES = "no-input-files"


# Highest priority first.
SIGNAL_PRECEDENCE: tuple[StatusSignal, ...] = (
    StatusSignal.UNRECOGNIZED_OPTIONS,
    StatusSignal.HELP_REQUESTED,
    StatusSignal.VERSION_REQUESTED,
    StatusSignal.NO_INPUT_FILES,
)


@dataclass(frozen=True)
class ParseStatus:
    """Set of raised signals; combine with ``|`` and read ``governing``."""

    signals: frozenset[StatusSignal] = frozenset()

    @classmethod
    def of(cls, *signals: StatusSignal) -> "ParseStatus":
        return cls(frozenset(signals))

    @classmethod
    def ok(cls) -> "ParseStatus":
        return cls()

    def __or__(self, other: object) -> "ParseStatus":
        if isinstance(other, ParseStatus):
            return ParseStatus(self.signals | other.signals)
        if isinstance(other, StatusSignal):
            return ParseStatus(self.signals | {other})
        return NotImplemented

    def __contains__(self, signal: object) -> bool:
        return signal in self.signals

    def __bool__(self) -> bool:
        return bool(self.signals)

    @property
    def governing(self) -> Optional[StatusSignal]:
        """Return the signal that decides what the caller does next."""

        for signal in SIGNAL_PRECEDENCE:
            if signal in self.signals:
                return signal
        return None

    @property
    def help_requested(self) -> bool:
        return StatusSignal.HELP_REQUESTED in self.signals

    @property
    def version_requested(self) -> bool:
        return StatusSignal.VERSION_REQUESTED in self.signals

    @property
    def unrecognized_options(self) -> bool:
        return StatusSignal.UNRECOGNIZED_OPTIONS in self.signals

    @property
    def no_input_files(self) -> bool:
        return StatusSignal.NO_INPUT_FILES in self.signals


__all__ = [
    "ParseStatus",
    "SIGNAL_PRECEDENCE",
    "StatusSignal",
]
