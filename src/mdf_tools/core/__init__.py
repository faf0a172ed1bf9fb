"""Core shared helpers for mdf_tools converters."""

from __future__ import annotations

from .config import (
    IniConfigError,
    config_filename,
    iter_ini_entries,
    load_ini,
)
from .files import (
    absolute_path,
    iter_directory_files,
    normalize_extension,
    unique_paths,
)
from .logging import (
    DEFAULT_VERBOSITY,
    TRACE,
    configure_logger,
    level_for_verbosity,
)

__all__ = [
    "IniConfigError",
    "config_filename",
    "iter_ini_entries",
    "load_ini",
    "absolute_path",
    "iter_directory_files",
    "normalize_extension",
    "unique_paths",
    "DEFAULT_VERBOSITY",
    "TRACE",
    "configure_logger",
    "level_for_verbosity",
]
