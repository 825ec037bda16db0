"""
Fill missing hours in an hourly bar series.

Walks consecutive rows, and for every pair whose timestamps are more than one
hour apart inserts a placeholder row for each missing hour. Placeholder rows
carry the missing hour in the dateTime column, the instrument name of the row
before the gap, and the sentinel ``-1`` in every other column. A trailing
``holiday`` column marks placeholders (1) and original rows (0).

Usage:
    from missing_hours import add_missing_hours
    result = add_missing_hours(Path("bars.csv"), Path("bars.filled.csv"))
    print(result.synthetic_rows)

Notes:
    - Input rows are expected in ascending time order. Equal or earlier
      timestamps are passed through untouched unless strict_ordering is set.
    - Original values are written back exactly as read.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from bar_schema import HOLIDAY_COLUMN, BarSchema, read_schema
from config_utils import DEFAULT_CONFIG, as_column_list
from hour_fill_errors import NonMonotonicTimestampError, SchemaMismatchError
from time_utils import format_hour, hours_between, missing_hours_between, parse_hour

logger = logging.getLogger(__name__)

SENTINEL = "-1"
ORIGINAL = 0
SYNTHETIC = 1

# First data row sits on line 2, after the header.
_FIRST_DATA_LINE = 2


@dataclass(frozen=True)
class _Cursor:
    hour: datetime
    name: str


@dataclass(frozen=True)
class FillResult:
    header: List[str]
    rows: List[List[str]]
    original_rows: int
    synthetic_rows: int
    gaps: int

    @property
    def total_rows(self) -> int:
        return len(self.rows)


def synthesize_row(
    schema: BarSchema,
    hour: datetime,
    name: str,
    sentinel: str = SENTINEL,
    echo_columns: Sequence[str] = (),
) -> List[str]:
    """Build the placeholder values for one missing hour (without the holiday flag)."""
    stamp = format_hour(hour)
    row = [sentinel] * schema.width
    for col in echo_columns:
        if col in schema.columns:
            row[schema.columns.index(col)] = stamp
    row[schema.datetime_index] = stamp
    row[schema.name_index] = name
    return row


def _advance(
    schema: BarSchema,
    cursor: Optional[_Cursor],
    values: Sequence[str],
    line_number: int,
    sentinel: str,
    echo_columns: Sequence[str],
    strict_ordering: bool,
) -> Tuple[_Cursor, List[Tuple[List[str], int]]]:
    """
    Process one original row against the previous-hour cursor.

    Returns the new cursor and the (values, holiday) pairs to emit, placeholders
    first and the original row last.
    """
    if len(values) != schema.width:
        raise SchemaMismatchError(line_number, schema.width, len(values))

    hour = parse_hour(values[schema.datetime_index], line_number)
    current = _Cursor(hour=hour, name=values[schema.name_index])
    if cursor is None:
        return current, [(list(values), ORIGINAL)]

    emitted: List[Tuple[List[str], int]] = []
    delta = hours_between(cursor.hour, hour)
    if delta > 1:
        logger.debug(
            "Gap of %d hours between %s and %s (line %d)",
            delta,
            format_hour(cursor.hour),
            format_hour(hour),
            line_number,
        )
        for missing in missing_hours_between(cursor.hour, hour):
            emitted.append(
                (synthesize_row(schema, missing, cursor.name, sentinel, echo_columns), SYNTHETIC)
            )
    elif delta < 1:
        if strict_ordering:
            raise NonMonotonicTimestampError(line_number, format_hour(cursor.hour), format_hour(hour))
        logger.debug(
            "Line %d: %s does not follow %s; passed through",
            line_number,
            format_hour(hour),
            format_hour(cursor.hour),
        )

    emitted.append((list(values), ORIGINAL))
    return current, emitted


def iter_filled_rows(
    schema: BarSchema,
    rows: Iterable[Sequence[str]],
    sentinel: str = SENTINEL,
    echo_columns: Sequence[str] = (),
    strict_ordering: bool = False,
) -> Iterator[Tuple[List[str], int]]:
    """
    Stream (values, holiday) pairs for the data rows with every gap filled.

    Blank lines are skipped. Raises SchemaMismatchError, MalformedTimestampError
    or (strict mode) NonMonotonicTimestampError at the offending row.
    """
    cursor: Optional[_Cursor] = None
    for line_number, values in enumerate(rows, start=_FIRST_DATA_LINE):
        if not values:
            continue
        cursor, emitted = _advance(
            schema, cursor, values, line_number, sentinel, echo_columns, strict_ordering
        )
        yield from emitted


def fill_missing_hours(
    schema: BarSchema,
    rows: Iterable[Sequence[str]],
    sentinel: str = SENTINEL,
    holiday_column: str = HOLIDAY_COLUMN,
    echo_columns: Sequence[str] = (),
    strict_ordering: bool = False,
) -> FillResult:
    """Return the augmented header and every output row with its holiday flag appended."""
    out: List[List[str]] = []
    synthetic = 0
    gaps = 0
    previous_flag = ORIGINAL
    for values, holiday in iter_filled_rows(
        schema, rows, sentinel, echo_columns, strict_ordering
    ):
        if holiday == SYNTHETIC:
            synthetic += 1
            if previous_flag == ORIGINAL:
                gaps += 1
        out.append(values + [str(holiday)])
        previous_flag = holiday

    return FillResult(
        header=schema.output_columns(holiday_column),
        rows=out,
        original_rows=len(out) - synthetic,
        synthetic_rows=synthetic,
        gaps=gaps,
    )


def add_missing_hours(
    input_path: Path, output_path: Path, config: Optional[Dict[str, Any]] = None
) -> FillResult:
    """
    Read an hourly bar CSV, fill every missing hour and write the result.

    The whole input is processed before the output file is opened, so a failure
    never leaves a half-written output behind.

    Args:
        input_path: Source CSV with a header row
        output_path: Destination CSV (parent directories are created)
        config: Optional overrides for DEFAULT_CONFIG keys

    Returns:
        FillResult with the written header, rows and counts
    """
    cfg = {**DEFAULT_CONFIG, **(config or {})}
    input_path = Path(input_path)
    output_path = Path(output_path)

    with open(input_path, "r", newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        schema, data_rows = read_schema(reader, cfg["datetime_column"], cfg["name_column"])
        result = fill_missing_hours(
            schema,
            data_rows,
            sentinel=str(cfg["sentinel"]),
            holiday_column=cfg["holiday_column"],
            echo_columns=as_column_list(cfg.get("echo_columns")),
            strict_ordering=bool(cfg["strict_ordering"]),
        )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(result.header)
        writer.writerows(result.rows)

    logger.info(
        "%s: %d rows in, %d placeholder rows added across %d gaps -> %s",
        input_path.name,
        result.original_rows,
        result.synthetic_rows,
        result.gaps,
        output_path,
    )
    return result
