"""
Gap and cadence report for hourly bar CSVs.

Summarizes an hourly series before or after filling: row count, first and last
hour, expected rows for a contiguous series, missing hours, gap count, largest
gap, duplicate and out-of-order timestamps, and placeholder rows when a holiday
column is present. Problems are reported, never raised.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Union

import pandas as pd

from bar_schema import DATETIME_COLUMN, HOLIDAY_COLUMN
from time_utils import HOUR_FORMAT


def _load_frame(path: Path) -> pd.DataFrame:
    # Keep every field as text; only the timestamp column is interpreted.
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def integrity_check_hours(
    source: Union[Path, str, pd.DataFrame],
    datetime_column: str = DATETIME_COLUMN,
    holiday_column: str = HOLIDAY_COLUMN,
) -> Dict:
    """Validate an hourly bar series and return a report.

    Returns dict with keys: path, status, errors, warnings, stats
    """
    report = {
        "path": None if isinstance(source, pd.DataFrame) else str(source),
        "status": "ok",
        "errors": [],
        "warnings": [],
        "stats": {},
    }

    if isinstance(source, pd.DataFrame):
        df = source
    else:
        path = Path(source)
        if not path.exists():
            report["status"] = "error"
            report["errors"].append("missing-file")
            return report
        try:
            df = _load_frame(path)
        except pd.errors.EmptyDataError:
            report["status"] = "error"
            report["errors"].append("empty-file")
            return report
        except pd.errors.ParserError:
            report["status"] = "error"
            report["errors"].append("unparseable-csv")
            return report
        except UnicodeDecodeError:
            report["status"] = "error"
            report["errors"].append("undecodable-file")
            return report

    if datetime_column not in df.columns:
        report["status"] = "error"
        report["errors"].append("missing-columns")
        report["stats"]["present_cols"] = [c for c in df.columns]
        return report

    nrows = int(len(df))
    report["stats"]["rows"] = nrows
    if nrows == 0:
        report["status"] = "error"
        report["errors"].append("empty-file")
        return report

    ser = pd.to_datetime(df[datetime_column], format="ISO8601", errors="coerce")
    bad = int(ser.isna().sum())
    if bad > 0:
        report["status"] = "error"
        report["errors"].append(f"invalid-datetime:{bad}")
        report["stats"]["invalid_examples"] = df.loc[ser.isna(), datetime_column].head(5).tolist()
        return report
    ser = ser.dt.floor("h")

    dup_count = int(ser.duplicated().sum())
    report["stats"]["duplicates"] = dup_count
    if dup_count > 0:
        report["warnings"].append(f"duplicate-timestamps:{dup_count}")

    steps = ser.diff().dropna() / pd.Timedelta(hours=1)
    out_of_order = int((steps < 0).sum())
    report["stats"]["out_of_order"] = out_of_order
    if out_of_order > 0:
        report["warnings"].append("not-sorted-ascending")

    # Cadence and gap estimation on the sorted, de-duplicated hours
    hours = ser.drop_duplicates().sort_values()
    diffs = hours.diff().dropna() / pd.Timedelta(hours=1)
    gap_diffs = diffs[diffs > 1]
    missing = int((gap_diffs - 1).sum())
    first, last = hours.iloc[0], hours.iloc[-1]
    report["stats"]["first"] = first.strftime(HOUR_FORMAT)
    report["stats"]["last"] = last.strftime(HOUR_FORMAT)
    report["stats"]["expected_rows"] = int((last - first) / pd.Timedelta(hours=1)) + 1
    report["stats"]["missing_hours"] = missing
    report["stats"]["gaps"] = int(len(gap_diffs))
    report["stats"]["largest_gap_hours"] = int(gap_diffs.max()) if len(gap_diffs) else 0
    if missing > 0:
        report["warnings"].append(f"gaps:{missing}")

    if holiday_column in df.columns:
        flags = pd.to_numeric(df[holiday_column], errors="coerce")
        report["stats"]["synthetic_rows"] = int((flags == 1).sum())

    # Final status: error if any errors; warning if any warnings and not error
    if report["errors"]:
        report["status"] = "error"
    elif report["warnings"]:
        report["status"] = "warning"
    else:
        report["status"] = "ok"

    return report
