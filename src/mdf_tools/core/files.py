"""Common file handling utilities shared across mdf_tools modules."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, Optional

__all__ = [
    "absolute_path",
    "iter_directory_files",
    "normalize_extension",
    "unique_paths",
]


def normalize_extension(value: str) -> str:
    """Return ``value`` with exactly one leading dot; case is kept."""

    candidate = value.strip().lstrip(".")
    return f".{candidate}" if candidate else ""


def absolute_path(raw: os.PathLike[str] | str, *, cwd: Optional[Path] = None) -> Path:
    """Resolve ``raw`` against ``cwd`` without requiring it to exist.

    Absolute paths pass through unchanged.
    """

    path = Path(raw).expanduser()
    if path.is_absolute():
        return path
    base = cwd if cwd is not None else Path.cwd()
    try:
        return (base / path).resolve(strict=False)
    except OSError:
        # resolve() can still fail on exotic mounts; keep the joined path.
        return base / path


def iter_directory_files(directory: Path, extension: str) -> Iterator[Path]:
    """Yield regular files directly under ``directory`` matching ``extension``.

    Entries come back in directory-iteration order; nothing is sorted. The
    suffix must match ``extension`` exactly, case included.
    """

    wanted = normalize_extension(extension)
    with os.scandir(directory) as entries:
        for entry in entries:
            if not entry.is_file():
                continue
            if Path(entry.name).suffix == wanted:
                yield directory / entry.name


def unique_paths(paths: Iterable[Path]) -> Iterator[Path]:
    """Yield ``paths`` dropping repeats while preserving first-seen order."""

    seen: set[Path] = set()
    for path in paths:
        if path in seen:
            continue
        seen.add(path)
        yield path
