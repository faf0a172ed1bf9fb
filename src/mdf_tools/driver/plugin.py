"""Contract between the driver and format-specific converter plugins."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Protocol, runtime_checkable

from .options import CommonOptions, ResolvedOptions
from .schema import OptionSchema
from .status import ParseStatus

ProgressCallback = Callable[[int, int], None]


@runtime_checkable
class ConverterPlugin(Protocol):
    """Protocol implemented by converter plugins.

    The driver calls the hooks in this order: ``register_progress_callback``,
    ``configure_parser``, ``configure_file_parser``, ``uses_config_file``,
    ``set_common_options``, ``parse_options`` and finally ``convert`` once per
    input file.
    """

    program_name: str
    input_extension: str

    def register_progress_callback(self, callback: ProgressCallback) -> None:
        """Store ``callback`` and call it with ``(current, total)`` while converting."""

    def configure_parser(self, schema: OptionSchema) -> None:
        """Declare plugin-specific command-line options on ``schema``."""

    def configure_file_parser(self, schema: OptionSchema) -> None:
        """Declare options that are read from the configuration file."""

    def uses_config_file(self) -> bool:
        """Return ``True`` if ``<program_name>_config.ini`` should be probed."""

    def set_common_options(self, common: CommonOptions) -> None:
        """Receive the resolved driver-level settings."""

    def parse_options(self, options: ResolvedOptions) -> ParseStatus:
        """Validate plugin options; may raise signals such as help."""

    def convert(self, input_path: Path, output_dir: Path) -> bool:
        """Convert one file into ``output_dir``; ``False`` aborts the batch."""

    def get_version(self) -> str:
        """Return the plugin's version string."""


class BaseConverterPlugin:
    """Convenience base with no-op hooks; subclasses implement ``convert``."""

    program_name = "converter"
    input_extension = ".mf4"

    def __init__(self) -> None:
        self.progress: Optional[ProgressCallback] = None
        self.common: Optional[CommonOptions] = None

    def register_progress_callback(self, callback: ProgressCallback) -> None:
        self.progress = callback

    def configure_parser(self, schema: OptionSchema) -> None:
        return None

    def configure_file_parser(self, schema: OptionSchema) -> None:
        return None

    def uses_config_file(self) -> bool:
        return False

    def set_common_options(self, common: CommonOptions) -> None:
        self.common = common

    def parse_options(self, options: ResolvedOptions) -> ParseStatus:
        return ParseStatus.ok()

    def convert(self, input_path: Path, output_dir: Path) -> bool:
        raise NotImplementedError

    def get_version(self) -> str:
        return "unknown"

    def report_progress(self, current: int, total: int) -> None:
        if self.progress is not None:
            self.progress(current, total)


__all__ = [
    "BaseConverterPlugin",
    "ConverterPlugin",
    "ProgressCallback",
]
