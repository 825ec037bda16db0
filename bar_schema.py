"""
Header resolution for hourly bar CSV files.

The header row defines the output column order. Two columns are mandatory:
the timestamp column (``dateTime``) and the instrument column (``name``).
Every other column is passed through opaquely.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

from hour_fill_errors import DuplicateColumnsError, EmptyInputError, MissingColumnsError

DATETIME_COLUMN = "dateTime"
NAME_COLUMN = "name"
HOLIDAY_COLUMN = "holiday"

_BOM = "\ufeff"


@dataclass(frozen=True)
class BarSchema:
    columns: Tuple[str, ...]
    datetime_index: int
    name_index: int

    @property
    def width(self) -> int:
        return len(self.columns)

    def output_columns(self, holiday_column: str = HOLIDAY_COLUMN) -> List[str]:
        return list(self.columns) + [holiday_column]


def resolve_schema(
    header_fields: Sequence[str],
    datetime_column: str = DATETIME_COLUMN,
    name_column: str = NAME_COLUMN,
) -> BarSchema:
    """
    Locate the mandatory columns in a parsed header row.

    Raises:
        MissingColumnsError if either mandatory column is absent
        DuplicateColumnsError if a column name appears more than once
    """
    columns = [str(c).strip() for c in header_fields]
    if columns and columns[0].startswith(_BOM):
        columns[0] = columns[0][len(_BOM) :].strip()

    if datetime_column not in columns or name_column not in columns:
        raise MissingColumnsError(datetime_column, name_column)

    duplicates = [c for c, n in Counter(columns).items() if n > 1]
    if duplicates:
        raise DuplicateColumnsError(duplicates)

    return BarSchema(
        columns=tuple(columns),
        datetime_index=columns.index(datetime_column),
        name_index=columns.index(name_column),
    )


def read_schema(
    lines: Iterable[Sequence[str]],
    datetime_column: str = DATETIME_COLUMN,
    name_column: str = NAME_COLUMN,
) -> Tuple[BarSchema, Iterator[Sequence[str]]]:
    """
    Resolve the header from the first of a sequence of split CSV rows.

    Returns the schema and an iterator positioned on the first data row.
    Raises EmptyInputError when there are no lines at all.
    """
    it = iter(lines)
    try:
        header = next(it)
    except StopIteration:
        raise EmptyInputError() from None
    return resolve_schema(header, datetime_column, name_column), it
