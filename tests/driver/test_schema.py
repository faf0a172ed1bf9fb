from __future__ import annotations

import pytest

from mdf_tools.driver import errors
from mdf_tools.driver import schema as schema_mod
from mdf_tools.driver.schema import OptionKind, OptionOrigin, OptionSchema


def _common() -> OptionSchema:
    return schema_mod.register_common_options(OptionSchema())


def test_common_options_are_declared_in_order():
    schema = _common()

    assert schema.names() == (
        "help",
        "version",
        "verbose",
        "input-directory",
        "output-directory",
        "non-interactive",
        "timezone",
        "input-files",
    )
    assert all(spec.origin is OptionOrigin.COMMON for spec in schema)


def test_common_option_defaults_and_aliases():
    schema = _common()

    assert schema.get("verbose").default == 1
    assert schema.get("timezone").default == "l"
    assert schema.get("help").default is False
    assert schema.get("input-directory").default is None
    assert schema.get("input-files").multiple is True
    assert schema.get("input-directory").flags == ("-I", "--input-directory")
    assert schema.get("non-interactive").flags == ("--non-interactive",)


def test_duplicate_names_are_rejected():
    schema = _common()
    with pytest.raises(errors.SchemaError):
        schema.add_option("verbose", OptionKind.INT)


def test_duplicate_short_aliases_are_rejected():
    schema = _common()
    with pytest.raises(errors.SchemaError) as excinfo:
        schema.add_option("trace", OptionKind.FLAG, short="t")
    assert "timezone" in str(excinfo.value)


def test_frozen_schema_refuses_new_options():
    schema = _common()
    schema.freeze()
    with pytest.raises(errors.SchemaError):
        schema.add_option("late")


def test_combined_detects_clashes_across_schemas():
    command_line = _common()
    config_file = OptionSchema()
    config_file.add_option("verbose", OptionKind.INT)

    with pytest.raises(errors.SchemaError):
        command_line.combined(config_file)


def test_coerce_config_values():
    flag = schema_mod.OptionSpec("strict", OptionKind.FLAG)
    number = schema_mod.OptionSpec("channel", OptionKind.INT)
    names = schema_mod.OptionSpec("names", OptionKind.STR, multiple=True)

    assert flag.coerce(" On ") is True
    assert flag.coerce("0") is False
    assert number.coerce(" 12 ") == 12
    assert names.coerce("CAN1, CAN2 LIN1") == ["CAN1", "CAN2", "LIN1"]

    with pytest.raises(ValueError):
        flag.coerce("maybe")
    with pytest.raises(ValueError):
        number.coerce("twelve")


def test_parser_only_reports_supplied_values():
    parser = _common().build_parser("tool")

    namespace, extras = parser.parse_known_args(
        ["--verbose", "3", "-i", "a.mf4", "b.mf4", "--bogus"]
    )

    assert vars(namespace) == {
        "verbose": 3,
        "input-files": ["a.mf4", "b.mf4"],
    }
    assert extras == ["--bogus"]


def test_parser_does_not_expand_abbreviations():
    parser = _common().build_parser("tool")
    namespace, extras = parser.parse_known_args(["--verb", "3"])
    assert "verbose" not in vars(namespace)
    assert "--verb" in extras


def test_parser_raises_on_missing_value():
    parser = _common().build_parser("tool")
    with pytest.raises(errors.MalformedArgumentError) as excinfo:
        parser.parse_known_args(["--output-directory"])
    assert excinfo.value.option == "--output-directory"


def test_parser_raises_on_bad_integer():
    parser = _common().build_parser("tool")
    with pytest.raises(errors.MalformedArgumentError) as excinfo:
        parser.parse_known_args(["--verbose", "loud"])
    assert excinfo.value.option == "--verbose"


def test_format_help_lists_options_with_defaults():
    text = _common().format_help("tool")

    assert "--input-directory" in text
    assert "--output-directory ARG" in text
    assert "(default: 1)" in text
    assert "usage:" not in text
