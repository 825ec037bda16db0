"""Exceptions raised while resolving a bar file header or filling missing hours.

All of them are fatal to a single file: callers should discard any output and
treat the input as unprocessed.
"""

from __future__ import annotations


class HourFillError(ValueError):
    """Base class for every missing-hour fill failure."""


class EmptyInputError(HourFillError):
    def __init__(self, message: str = "Input file is empty."):
        super().__init__(message)


class MissingColumnsError(HourFillError):
    def __init__(self, datetime_column: str = "dateTime", name_column: str = "name"):
        super().__init__(f"Missing required columns: '{datetime_column}' or '{name_column}'")
        self.datetime_column = datetime_column
        self.name_column = name_column


class DuplicateColumnsError(HourFillError):
    def __init__(self, duplicates):
        self.duplicates = sorted(duplicates)
        super().__init__(f"Duplicate column names in header: {self.duplicates}")


class MalformedTimestampError(HourFillError):
    def __init__(self, value: str, row_number: int | None = None):
        self.value = value
        self.row_number = row_number
        where = f" at row {row_number}" if row_number is not None else ""
        super().__init__(f"Malformed dateTime value{where}: {value!r} (expected YYYY-MM-DDTHH:MM)")


class SchemaMismatchError(HourFillError):
    def __init__(self, row_number: int, expected: int, actual: int):
        self.row_number = row_number
        self.expected = expected
        self.actual = actual
        super().__init__(f"Row {row_number} has {actual} fields; header declares {expected}")


class NonMonotonicTimestampError(HourFillError):
    def __init__(self, row_number: int, previous: str, current: str):
        self.row_number = row_number
        self.previous = previous
        self.current = current
        super().__init__(
            f"Row {row_number} timestamp {current} is not after previous timestamp {previous}"
        )
