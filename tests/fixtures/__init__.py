"""Shared testing fixtures for the mdf_tools test suite."""

from .plugin import FakePlugin  # noqa: F401

__all__ = ["FakePlugin"]
