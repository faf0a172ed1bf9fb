"""Shared driver for MDF batch file-format converters."""

from __future__ import annotations

from .driver import BaseConverterPlugin, ConverterPlugin, run

__all__ = ["BaseConverterPlugin", "ConverterPlugin", "run"]
