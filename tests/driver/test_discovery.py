from __future__ import annotations

import logging

import pytest

from mdf_tools.driver import discovery, errors


def test_explicit_files_keep_given_order(tmp_path, logger):
    for name in ("x.mf4", "y.mf4"):
        (tmp_path / name).write_bytes(b"")

    plan = discovery.plan_work(
        [tmp_path / "y.mf4", tmp_path / "x.mf4"], cwd=tmp_path, logger=logger
    )

    assert [item.input_path.name for item in plan] == ["y.mf4", "x.mf4"]
    assert all(isinstance(item, discovery.WorkItem) for item in plan)


def test_relative_inputs_are_made_absolute_and_deduplicated(tmp_path, logger):
    (tmp_path / "x.mf4").write_bytes(b"")

    plan = discovery.plan_work(
        ["x.mf4", "./x.mf4", tmp_path / "x.mf4"], cwd=tmp_path, logger=logger
    )

    assert len(plan) == 1
    assert plan[0].input_path == (tmp_path / "x.mf4").resolve()
    assert plan[0].input_path.is_absolute()


def test_output_defaults_to_input_parent(tmp_path, logger):
    nested = tmp_path / "day1"
    nested.mkdir()
    (nested / "trip.mf4").write_bytes(b"")

    (item,) = discovery.plan_work(
        [nested / "trip.mf4"], cwd=tmp_path, logger=logger
    )

    assert item.output_dir == nested


def test_output_directory_is_created_once(tmp_path, logger, caplog):
    for name in ("x.mf4", "y.mf4"):
        (tmp_path / name).write_bytes(b"")

    with caplog.at_level(logging.INFO, logger=logger.name):
        plan = discovery.plan_work(
            ["x.mf4", "y.mf4"],
            output_directory="exports/can",
            cwd=tmp_path,
            logger=logger,
        )

    target = (tmp_path / "exports" / "can").resolve()
    assert target.is_dir()
    assert {item.output_dir for item in plan} == {target}
    creating = [
        record for record in caplog.records if "Creating" in record.getMessage()
    ]
    assert len(creating) == 1


def test_missing_inputs_are_reported_not_raised(tmp_path, logger, caplog):
    (tmp_path / "here.mf4").write_bytes(b"")

    with caplog.at_level(logging.ERROR, logger=logger.name):
        plan = discovery.plan_work(
            ["gone.mf4", "here.mf4"], cwd=tmp_path, logger=logger
        )

    assert isinstance(plan[0], discovery.MissingInput)
    assert isinstance(plan[1], discovery.WorkItem)
    assert "File does not exist" in caplog.text


def test_output_directory_not_created_without_existing_inputs(tmp_path, logger):
    discovery.plan_work(
        ["gone.mf4"], output_directory="out", cwd=tmp_path, logger=logger
    )
    assert not (tmp_path / "out").exists()


def test_output_directory_creation_failure_is_fatal(tmp_path, logger):
    (tmp_path / "x.mf4").write_bytes(b"")
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(errors.OutputDirectoryError) as excinfo:
        discovery.plan_work(
            ["x.mf4"],
            output_directory=str(blocker / "out"),
            cwd=tmp_path,
            logger=logger,
        )
    assert "Could not create output folder" in str(excinfo.value)
