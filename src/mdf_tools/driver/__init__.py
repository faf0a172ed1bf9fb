"""Public APIs for the batch converter driver."""

from __future__ import annotations

from .cli import driver_version, format_help, format_version, run
from .discovery import (
    MissingInput,
    OutputLocator,
    WorkItem,
    iter_work,
    plan_work,
)
from .errors import (
    ConfigFileError,
    DriverError,
    MalformedArgumentError,
    OutputDirectoryError,
    PluginFailure,
    SchemaError,
)
from .executor import (
    EXIT_FATAL,
    EXIT_OK,
    EXIT_PARTIAL,
    EXIT_UNRECOGNIZED,
    BatchResult,
    run_batch,
)
from .options import (
    CommonOptions,
    OptionSource,
    OptionValue,
    ResolvedOptions,
    TimeDisplay,
)
from .plugin import BaseConverterPlugin, ConverterPlugin, ProgressCallback
from .progress import ProgressReporter, render_bar
from .resolver import Resolution, Schemas, build_schemas, resolve
from .schema import (
    OptionKind,
    OptionOrigin,
    OptionSchema,
    OptionSpec,
    register_common_options,
)
from .status import ParseStatus, StatusSignal

__all__ = [
    "run",
    "driver_version",
    "format_help",
    "format_version",
    "MissingInput",
    "OutputLocator",
    "WorkItem",
    "iter_work",
    "plan_work",
    "ConfigFileError",
    "DriverError",
    "MalformedArgumentError",
    "OutputDirectoryError",
    "PluginFailure",
    "SchemaError",
    "EXIT_FATAL",
    "EXIT_OK",
    "EXIT_PARTIAL",
    "EXIT_UNRECOGNIZED",
    "BatchResult",
    "run_batch",
    "CommonOptions",
    "OptionSource",
    "OptionValue",
    "ResolvedOptions",
    "TimeDisplay",
    "BaseConverterPlugin",
    "ConverterPlugin",
    "ProgressCallback",
    "ProgressReporter",
    "render_bar",
    "Resolution",
    "Schemas",
    "build_schemas",
    "resolve",
    "OptionKind",
    "OptionOrigin",
    "OptionSchema",
    "OptionSpec",
    "register_common_options",
    "ParseStatus",
    "StatusSignal",
]
