from __future__ import annotations

import io
import logging

import pytest

from mdf_tools.core import logging as core_logging


@pytest.fixture
def logger_name():
    name = "mdf_tools.test_logging"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.mark.parametrize(
    ("verbosity", "expected"),
    [
        (0, logging.CRITICAL),
        (1, logging.ERROR),
        (2, logging.WARNING),
        (3, logging.INFO),
        (4, logging.DEBUG),
        (5, core_logging.TRACE),
    ],
)
def test_level_for_verbosity_maps_each_step(verbosity, expected):
    assert core_logging.level_for_verbosity(verbosity) == expected


@pytest.mark.parametrize("verbosity", [-1, 6, 42])
def test_level_for_verbosity_rejects_out_of_range(verbosity):
    assert core_logging.level_for_verbosity(verbosity) is None


def test_trace_level_has_a_name():
    assert logging.getLevelName(core_logging.TRACE) == "TRACE"


def test_configure_logger_filters_by_verbosity(logger_name):
    stream = io.StringIO()
    logger = core_logging.configure_logger(
        logger_name, verbosity=2, stream=stream
    )

    logger.info("hidden")
    logger.warning("shown")

    output = stream.getvalue()
    assert "hidden" not in output
    assert "WARNING shown" in output


def test_configure_logger_reuses_console_handler(logger_name):
    first = io.StringIO()
    second = io.StringIO()
    core_logging.configure_logger(logger_name, verbosity=1, stream=first)
    logger = core_logging.configure_logger(
        logger_name, verbosity=3, stream=second
    )

    tagged = [
        handler
        for handler in logger.handlers
        if getattr(handler, "_mdf_tools_console", False)
    ]
    assert len(tagged) == 1

    logger.info("after reconfigure")
    assert "after reconfigure" in second.getvalue()
    assert first.getvalue() == ""


def test_configure_logger_falls_back_on_invalid_verbosity(logger_name):
    logger = core_logging.configure_logger(
        logger_name, verbosity=99, stream=io.StringIO()
    )
    assert logger.level == logging.ERROR
    assert logger.propagate is False
