"""Turn candidate input paths into concrete conversion work items."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from mdf_tools.core import files as core_files

from .errors import OutputDirectoryError


@dataclass(frozen=True)
class WorkItem:
    """One existing input file and the directory its output goes to."""

    input_path: Path
    output_dir: Path


@dataclass(frozen=True)
class MissingInput:
    """A candidate input that did not exist when it was checked."""

    input_path: Path


PlannedItem = Union[WorkItem, MissingInput]


class OutputLocator:
    """Decide where converted files are written.

    With an explicit output directory every item shares it, and it is created
    (with parents) the first time it is needed. Otherwise each output lands
    beside its input.
    """

    def __init__(
        self,
        output_directory: Optional[str] = None,
        *,
        cwd: Optional[Path] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._override = (
            core_files.absolute_path(output_directory, cwd=cwd)
            if output_directory
            else None
        )
        self._logger = logger or logging.getLogger(__name__)
        self._ready = False

    @property
    def override(self) -> Optional[Path]:
        return self._override

    def for_input(self, input_path: Path) -> Path:
        if self._override is None:
            return input_path.parent
        if not self._ready:
            self._ensure_directory(self._override)
            self._ready = True
        return self._override

    def _ensure_directory(self, directory: Path) -> None:
        if directory.is_dir():
            return
        self._logger.info(
            'Output folder does not exist. Creating "%s"',
            directory,
            extra={"output_dir": str(directory)},
        )
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputDirectoryError(
                f'Could not create output folder "{directory}": {exc}'
            ) from exc


def absolute_candidates(
    candidates: Iterable[Path], *, cwd: Optional[Path] = None
) -> tuple[Path, ...]:
    """Make every candidate absolute and drop repeats, keeping first order."""

    resolved = (core_files.absolute_path(path, cwd=cwd) for path in candidates)
    return tuple(core_files.unique_paths(resolved))


def iter_work(
    candidates: Iterable[Path],
    locator: OutputLocator,
    *,
    cwd: Optional[Path] = None,
    logger: Optional[logging.Logger] = None,
) -> Iterator[PlannedItem]:
    """Lazily check each candidate and pair it with its output directory.

    Existence is checked when the item is reached, so a batch sees the
    filesystem as it is at that moment. Raises
    :class:`~.errors.OutputDirectoryError` if the shared output directory
    cannot be created.
    """

    log = logger or logging.getLogger(__name__)
    for input_path in absolute_candidates(candidates, cwd=cwd):
        if not input_path.exists():
            log.error(
                "File does not exist: %s",
                input_path,
                extra={"source": str(input_path)},
            )
            yield MissingInput(input_path)
            continue
        yield WorkItem(
            input_path=input_path,
            output_dir=locator.for_input(input_path),
        )


def plan_work(
    candidates: Iterable[Path],
    *,
    output_directory: Optional[str] = None,
    cwd: Optional[Path] = None,
    logger: Optional[logging.Logger] = None,
) -> tuple[PlannedItem, ...]:
    """Eagerly build the full plan; mostly useful for previews and tests."""

    locator = OutputLocator(output_directory, cwd=cwd, logger=logger)
    return tuple(iter_work(candidates, locator, cwd=cwd, logger=logger))


__all__ = [
    "MissingInput",
    "OutputLocator",
    "PlannedItem",
    "WorkItem",
    "absolute_candidates",
    "iter_work",
    "plan_work",
]
