import copy
import json

import pytest

from config_utils import (
    DEFAULT_CONFIG,
    apply_config_overrides,
    as_column_list,
    load_config,
    parse_config_value,
)


@pytest.fixture()
def base_config():
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.mark.parametrize(
    "key,value,expected",
    [
        ("datetime_column", "ts", "ts"),
        ("name_column", "symbol", "symbol"),
        ("holiday_column", "is_gap", "is_gap"),
        ("strict_ordering", "true", True),
        ("strict_ordering", "false", False),
        ("output_suffix", ".hourly.csv", ".hourly.csv"),
        ("sentinel", "-1", "-1"),
        ("sentinel", "NaN", "NaN"),
        ("echo_columns", "mapTime,fixedTime", ["mapTime", "fixedTime"]),
        ("echo_columns", "", []),
        ("output_suffix", ".1", ".1"),
        ("datetime_column", "2023", "2023"),
        ("name_column", "true", "true"),
        ("holiday_column", "0", "0"),
        ("sentinel", "-1.5", "-1.5"),
    ],
)
def test_apply_config_overrides_updates_values(base_config, key, value, expected):
    cfg = copy.deepcopy(base_config)
    apply_config_overrides(cfg, [f"{key}={value}"], verbose=False)
    assert cfg[key] == expected


def test_apply_config_overrides_trims_whitespace(base_config):
    cfg = copy.deepcopy(base_config)
    apply_config_overrides(cfg, [" strict_ordering =  true "], verbose=False)
    assert cfg["strict_ordering"] is True


def test_apply_config_overrides_ignores_invalid_entries(base_config):
    cfg = copy.deepcopy(base_config)
    before = copy.deepcopy(cfg)
    apply_config_overrides(cfg, ["invalid-no-equals"], verbose=False)
    assert cfg == before


def test_apply_config_overrides_verbose_prints(base_config, capsys):
    apply_config_overrides(base_config, ["sentinel=X"], verbose=True)
    out = capsys.readouterr().out
    assert "Applying config overrides:" in out
    assert "sentinel: -1 -> X" in out


@pytest.mark.parametrize(
    "raw,parsed",
    [
        ("true", True),
        ("false", False),
        ("  TRUE  ", True),
        ("  false\n", False),
        ("42", 42),
        ("-7", -7),
        ("3.14", 3.14),
        ("-0.5", -0.5),
        ("text", "text"),
        ("1-2", "1-2"),
        ("1.2.3", "1.2.3"),
        ("--5", "--5"),
    ],
)
def test_parse_config_value_typing(raw, parsed):
    assert parse_config_value(raw) == parsed


def test_load_config_defaults_without_file(tmp_path):
    cfg = load_config(tmp_path / "config.json")
    assert cfg == DEFAULT_CONFIG
    assert cfg is not DEFAULT_CONFIG


def test_load_config_merges_file_over_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"strict_ordering": True, "sentinel": "NA"}))
    cfg = load_config(path)
    assert cfg["strict_ordering"] is True
    assert cfg["sentinel"] == "NA"
    assert cfg["datetime_column"] == "dateTime"


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, []),
        ("", []),
        ("mapTime", ["mapTime"]),
        ("mapTime, fixedTime", ["mapTime", "fixedTime"]),
        (["mapTime", " "], ["mapTime"]),
    ],
)
def test_as_column_list(raw, expected):
    assert as_column_list(raw) == expected


def test_load_config_accepts_single_echo_column_string(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"echo_columns": "mapTime"}))
    assert load_config(path)["echo_columns"] == ["mapTime"]
