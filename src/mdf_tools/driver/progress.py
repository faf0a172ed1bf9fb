"""Textual progress bar handed to converter plugins as a callback."""

from __future__ import annotations

import sys
from typing import IO, Optional

from .options import CommonOptions

BAR_WIDTH = 80


class ProgressReporter:
    """Render ``current / total`` progress on a single, rewritten line.

    Each call writes one line of bounded size and keeps no history, so a
    plugin may call it as often as it likes.
    """

    def __init__(
        self,
        common: Optional[CommonOptions] = None,
        *,
        stream: Optional[IO[str]] = None,
        width: int = BAR_WIDTH,
    ) -> None:
        self.common = common or CommonOptions()
        self._stream = stream
        self.width = width

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stdout

    def __call__(self, current: int, total: int) -> None:
        self.report(current, total)

    def report(self, current: int, total: int) -> None:
        if self.common.non_interactive:
            return
        stream = self.stream
        stream.write(render_bar(current, total, width=self.width))
        stream.flush()


def render_bar(current: int, total: int, *, width: int = BAR_WIDTH) -> str:
    """Return the carriage-return prefixed bar for ``current`` of ``total``."""

    done = current == total
    if total > 0:
        fraction = current / total
    else:
        fraction = 1.0
    fill = min(max(int(fraction * width), 0), width)

    parts = ["\r", "=" * max(fill - 1, 0)]
    if not done:
        parts.append(">")
    parts.append(" " * (width - fill))
    parts.append(f" {current} / {total}")
    if done:
        parts.append("\n")
    return "".join(parts)


__all__ = ["BAR_WIDTH", "ProgressReporter", "render_bar"]
