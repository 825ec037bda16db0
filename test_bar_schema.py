import pytest

from bar_schema import BarSchema, read_schema, resolve_schema
from hour_fill_errors import (
    DuplicateColumnsError,
    EmptyInputError,
    HourFillError,
    MissingColumnsError,
)


def test_resolve_schema_indices():
    schema = resolve_schema(["open", "name", "close", "dateTime"])
    assert schema.datetime_index == 3
    assert schema.name_index == 1
    assert schema.width == 4
    assert schema.columns == ("open", "name", "close", "dateTime")


def test_output_columns_appends_holiday():
    schema = resolve_schema(["dateTime", "name", "close"])
    assert schema.output_columns() == ["dateTime", "name", "close", "holiday"]
    # Schema itself is unchanged
    assert schema.columns == ("dateTime", "name", "close")


@pytest.mark.parametrize(
    "header",
    [
        ["open", "high", "low", "close"],
        ["dateTime", "open"],
        ["name", "open"],
        ["datetime", "Name"],
        [],
    ],
)
def test_missing_required_columns(header):
    with pytest.raises(MissingColumnsError) as exc:
        resolve_schema(header)
    assert str(exc.value) == "Missing required columns: 'dateTime' or 'name'"


def test_custom_required_column_names():
    schema = resolve_schema(["ts", "symbol", "close"], datetime_column="ts", name_column="symbol")
    assert (schema.datetime_index, schema.name_index) == (0, 1)
    with pytest.raises(MissingColumnsError) as exc:
        resolve_schema(["dateTime", "name"], datetime_column="ts", name_column="symbol")
    assert str(exc.value) == "Missing required columns: 'ts' or 'symbol'"


def test_header_whitespace_and_bom_stripped():
    schema = resolve_schema(["\ufeffdateTime", " name ", "close"])
    assert schema.columns == ("dateTime", "name", "close")


def test_duplicate_columns_rejected():
    with pytest.raises(DuplicateColumnsError) as exc:
        resolve_schema(["dateTime", "name", "close", "close"])
    assert exc.value.duplicates == ["close"]


def test_read_schema_empty_input():
    with pytest.raises(EmptyInputError) as exc:
        read_schema([])
    assert str(exc.value) == "Input file is empty."


def test_read_schema_returns_remaining_rows():
    lines = [["dateTime", "name"], ["2024-01-01T00:00", "X"], ["2024-01-01T01:00", "X"]]
    schema, rest = read_schema(lines)
    assert isinstance(schema, BarSchema)
    assert list(rest) == lines[1:]


def test_errors_share_a_base_class():
    assert issubclass(EmptyInputError, HourFillError)
    assert issubclass(MissingColumnsError, ValueError)
