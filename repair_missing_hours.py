#!/usr/bin/env python3
"""
Repair script to insert placeholder rows for every missing hour in hourly bar CSVs.

Each output file has the input header plus a trailing `holiday` column. Missing
hours get a row with dateTime set to that hour, the instrument name of the
preceding row and -1 in every other column (holiday=1). Original rows are kept
as-is with holiday=0.

Usage examples:
  python repair_missing_hours.py --in data/EURUSD_1h.csv
  python repair_missing_hours.py --in a.csv --in b.csv --report
  python repair_missing_hours.py --in a.csv --out filled/a.csv --strict

Notes:
  - Default output is <input><output_suffix> (".filled.csv") next to the input
  - Column names, sentinel and ordering policy come from config.json
  - A failed file leaves no output behind; remaining files are still processed
"""

from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from config_utils import add_config_override_argument, apply_config_overrides, load_config
from hour_fill_errors import HourFillError
from hourly_integrity import integrity_check_hours
from missing_hours import add_missing_hours


def default_output_path(input_path: Path, suffix: str) -> Path:
    return input_path.with_name(input_path.stem + suffix)


def _print_report(label: str, report: Dict[str, Any]) -> None:
    stats = report.get("stats", {})
    print(f"[REPORT] {label} status={report['status']}")
    if "rows" in stats:
        print(f" rows={stats['rows']} expected={stats.get('expected_rows')}")
    if "first" in stats:
        print(f" first={stats['first']} last={stats['last']}")
    if "missing_hours" in stats:
        print(
            f" missing_hours={stats['missing_hours']} gaps={stats['gaps']}"
            f" largest_gap_hours={stats['largest_gap_hours']}"
        )
    if "synthetic_rows" in stats:
        print(f" synthetic_rows={stats['synthetic_rows']}")
    for err in report.get("errors", []):
        print(f" error: {err}")
    for warn in report.get("warnings", []):
        print(f" warning: {warn}")


def repair_file(
    input_path: Path, output_path: Path, config: Dict[str, Any], report: bool = False
) -> bool:
    """Fill one file. Returns True if the output was written."""
    try:
        if report:
            _print_report(
                f"{input_path} (before)",
                integrity_check_hours(
                    input_path, config["datetime_column"], config["holiday_column"]
                ),
            )
        result = add_missing_hours(input_path, output_path, config)
    except FileNotFoundError:
        print(f"[ERROR] {input_path}: file not found")
        return False
    except (HourFillError, UnicodeDecodeError, csv.Error, OSError) as e:
        print(f"[ERROR] {input_path}: {e}")
        return False

    print(f"[SAVED] {output_path} rows={result.total_rows} synthetic={result.synthetic_rows}")
    if report:
        _print_report(
            f"{output_path} (after)",
            integrity_check_hours(output_path, config["datetime_column"], config["holiday_column"]),
        )
    return True


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Insert holiday placeholder rows for missing hours in hourly bar CSVs"
    )
    parser.add_argument(
        "--in", dest="inputs", action="append", required=True, help="CSV input (repeatable)"
    )
    parser.add_argument("--out", default="", help="CSV output (single input only)")
    parser.add_argument("--config", default="", help="Path to config.json")
    parser.add_argument("--report", action="store_true", help="Print before/after gap reports")
    parser.add_argument(
        "--strict", action="store_true", help="Reject equal or decreasing timestamps"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each gap filled")
    add_config_override_argument(parser)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.out and len(args.inputs) > 1:
        parser.error("--out can only be used with a single --in")

    config = load_config(Path(args.config) if args.config else None)
    apply_config_overrides(config, args.config_override or [], verbose=args.verbose)
    if args.strict:
        config["strict_ordering"] = True

    failed = 0
    for raw in args.inputs:
        inp = Path(raw)
        out = Path(args.out) if args.out else default_output_path(inp, config["output_suffix"])
        if not repair_file(inp, out, config, report=args.report):
            failed += 1

    print(f"Done. Files written: {len(args.inputs) - failed} failed: {failed}")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
