"""Exception types raised by the converter driver."""

from __future__ import annotations

__all__ = [
    "DriverError",
    "MalformedArgumentError",
    "ConfigFileError",
    "OutputDirectoryError",
    "PluginFailure",
    "SchemaError",
]


class DriverError(RuntimeError):
    """Base class for failures that abort a converter run."""


class MalformedArgumentError(DriverError):
    """Raised when a recognised option is given invalid or missing values."""

    def __init__(self, message: str, option: str | None = None) -> None:
        super().__init__(message)
        self.option = option


class ConfigFileError(DriverError):
    """Raised when the configuration file cannot be parsed."""


class OutputDirectoryError(DriverError):
    """Raised when the requested output directory cannot be created."""


class PluginFailure(DriverError):
    """Raised when the converter plugin fails outside of a conversion."""


class SchemaError(ValueError):
    """Raised when option declarations collide or are otherwise invalid."""
