"""Sequential batch executor for converter runs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .discovery import MissingInput, OutputLocator, iter_work
from .errors import OutputDirectoryError
from .plugin import ConverterPlugin

EXIT_OK = 0
EXIT_UNRECOGNIZED = 1
EXIT_PARTIAL = 2
EXIT_FATAL = -1


@dataclass(frozen=True)
class BatchResult:
    """Aggregated results for a converter batch."""

    converted: tuple[Path, ...] = ()
    missing: tuple[Path, ...] = ()
    aborted: bool = False
    failed_input: Optional[Path] = None
    reason: Optional[str] = None

    @property
    def success_count(self) -> int:
        return len(self.converted)

    @property
    def missing_count(self) -> int:
        return len(self.missing)

    @property
    def exit_code(self) -> int:
        if self.aborted:
            return EXIT_FATAL
        if self.missing:
            return EXIT_PARTIAL
        return EXIT_OK


def run_batch(
    candidates: Iterable[Path],
    plugin: ConverterPlugin,
    *,
    locator: OutputLocator,
    logger: logging.Logger,
    cwd: Optional[Path] = None,
) -> BatchResult:
    """Convert ``candidates`` one at a time and return an aggregated result.

    Missing inputs are counted and skipped. A plugin that returns ``False`` or
    raises, or an output directory that cannot be created, stops the batch
    on the spot.
    """

    converted: list[Path] = []
    missing: list[Path] = []

    def _abort(reason: str, failed: Optional[Path] = None) -> BatchResult:
        return BatchResult(
            converted=tuple(converted),
            missing=tuple(missing),
            aborted=True,
            failed_input=failed,
            reason=reason,
        )

    work = iter_work(candidates, locator, cwd=cwd, logger=logger)
    while True:
        try:
            item = next(work)
        except StopIteration:
            break
        except OutputDirectoryError as exc:
            logger.critical(str(exc))
            return _abort(str(exc))

        if isinstance(item, MissingInput):
            missing.append(item.input_path)
            continue

        logger.info(
            'Converting "%s"',
            item.input_path,
            extra={
                "source": str(item.input_path),
                "output_dir": str(item.output_dir),
            },
        )
        try:
            ok = plugin.convert(item.input_path, item.output_dir)
        except Exception as exc:
            logger.critical(
                'Error during conversion of "%s": %s',
                item.input_path,
                exc,
                exc_info=logger.isEnabledFor(logging.DEBUG),
            )
            return _abort(str(exc), item.input_path)

        if not ok:
            logger.critical('Error during conversion of "%s".', item.input_path)
            return _abort("converter reported failure", item.input_path)
        converted.append(item.input_path)

    result = BatchResult(converted=tuple(converted), missing=tuple(missing))
    logger.info(
        "Completed batch",
        extra={
            "success_count": result.success_count,
            "missing_count": result.missing_count,
        },
    )
    return result


__all__ = [
    "BatchResult",
    "EXIT_FATAL",
    "EXIT_OK",
    "EXIT_PARTIAL",
    "EXIT_UNRECOGNIZED",
    "run_batch",
]
