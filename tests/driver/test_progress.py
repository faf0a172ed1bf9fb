from __future__ import annotations

import io

from mdf_tools.driver.options import CommonOptions
from mdf_tools.driver.progress import BAR_WIDTH, ProgressReporter, render_bar


def _reporter(non_interactive: bool = False):
    stream = io.StringIO()
    reporter = ProgressReporter(
        CommonOptions(non_interactive=non_interactive), stream=stream
    )
    return reporter, stream


def test_half_way_bar_has_marker_and_no_newline():
    reporter, stream = _reporter()

    reporter.report(50, 100)
    output = stream.getvalue()

    assert output.startswith("\r")
    assert output.count("=") == 39
    assert ">" in output
    assert output.endswith(" 50 / 100")
    assert "\n" not in output
    bar = output[1 : 1 + BAR_WIDTH]
    assert bar == "=" * 39 + ">" + " " * 40


def test_complete_bar_is_full_and_ends_line():
    reporter, stream = _reporter()

    reporter.report(100, 100)
    output = stream.getvalue()

    assert ">" not in output
    assert output.count("=") == BAR_WIDTH - 1
    assert output.endswith(" 100 / 100\n")


def test_non_interactive_mode_is_silent():
    reporter, stream = _reporter(non_interactive=True)

    reporter.report(10, 100)
    reporter.report(100, 100)

    assert stream.getvalue() == ""


def test_reporter_is_callable_as_plugin_callback():
    reporter, stream = _reporter()
    reporter(1, 4)
    assert stream.getvalue().endswith(" 1 / 4")


def test_each_call_rewrites_the_same_line():
    reporter, stream = _reporter()
    for current in range(1, 11):
        reporter(current, 10)

    output = stream.getvalue()
    assert output.count("\r") == 10
    assert output.count("\n") == 1


def test_bar_length_is_bounded():
    lengths = {len(render_bar(step, 1000)) for step in range(0, 1000, 37)}
    assert max(lengths) <= 1 + BAR_WIDTH + len(" 1000 / 1000") + 1


def test_degenerate_totals_do_not_crash():
    assert render_bar(0, 0).endswith(" 0 / 0\n")
    assert render_bar(5, 0).startswith("\r")
    overflow = render_bar(150, 100)
    assert overflow.count("=") == BAR_WIDTH - 1
