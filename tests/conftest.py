from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

# Ensure src/ is importable when the package is not installed
ROOT = TESTS_DIR.parent
for extra in (ROOT / "src",):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fixtures import FakePlugin  # noqa: E402


@pytest.fixture
def plugin() -> FakePlugin:
    """A fresh fake converter with default behaviour."""

    return FakePlugin()


@pytest.fixture
def logger() -> Iterator[logging.Logger]:
    log = logging.getLogger("mdf_tools.tests")
    log.handlers.clear()
    log.propagate = True
    log.setLevel(logging.DEBUG)
    yield log
    log.handlers.clear()


@pytest.fixture
def mdf_dir(tmp_path: Path) -> Path:
    """A directory holding two MDF logs and one unrelated text file."""

    directory = tmp_path / "logs"
    directory.mkdir()
    for name in ("a.mf4", "b.mf4", "c.txt"):
        (directory / name).write_bytes(b"MDF     4.10")
    return directory
