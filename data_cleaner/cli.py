"""Command-line interface for the cleaning & exploration pipeline.

Usage (examples):
    python -m data_cleaner.cli path/to/file.csv
    python -m data_cleaner.cli path/to/file.xlsx --fill mean --export-dir out/
    python -m data_cleaner.cli path/to/file.csv --json --output result.json

The CLI prints a concise human-readable summary by default; use --json for full payload.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import run_processing_pipeline
from .config import CleaningConfig, FillStrategy
from .exceptions import IngestionError
from .pipeline import export_cleaned_csv


def _summarize(payload: Dict[str, Any]) -> str:
    dataset = payload.get("dataset", {})
    before = dataset.get("original", {})
    after = dataset.get("cleaned", {})
    cols = dataset.get("column_names", [])
    preview_cols = cols[:8]
    more = "" if len(cols) <= 8 else f" (+{len(cols)-8} more)"
    report = payload.get("cleaning_report", {})
    lines = [
        f"Rows: {before.get('totalRows')} -> {after.get('totalRows')}  Columns: {after.get('totalColumns')}",
        f"Missing values: {before.get('missingValues')} -> {after.get('missingValues')}  "
        f"Duplicate rows: {before.get('duplicateRows')} -> {after.get('duplicateRows')}",
        f"Columns: {', '.join(preview_cols)}{more}",
        f"Rows removed/modified: {report.get('rows_removed')}  Cells filled: {report.get('cells_filled')}",
    ]
    types = after.get("dataTypes", {})
    for name, col in payload.get("columns", {}).items():
        summary = col.get("summary", {})
        if summary.get("kind") == "numeric":
            outliers = col.get("outliers") or {}
            detail = (
                f"mean={summary.get('mean')} median={summary.get('median')} "
                f"std={summary.get('std')} outliers={outliers.get('count', 0)}"
            )
        else:
            detail = (
                f"unique={summary.get('uniqueCount')} "
                f"top={summary.get('mostFrequent')!r} ({summary.get('mostFrequentCount')})"
            )
        lines.append(
            f"  - {name}: type={types.get(name)} nulls={col.get('nullCount')} {detail}"
        )
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Clean, profile and explore a CSV or Excel file."
    )
    parser.add_argument("file", help="Path to input CSV or Excel file")
    parser.add_argument(
        "--no-remove-duplicates",
        action="store_true",
        help="Keep duplicate rows",
    )
    parser.add_argument(
        "--fill",
        choices=[s.value for s in FillStrategy],
        default=FillStrategy.REMOVE.value,
        help="Missing-value policy (default: remove)",
    )
    parser.add_argument(
        "--fill-value",
        default="",
        help="Replacement for missing cells when --fill custom is used",
    )
    parser.add_argument(
        "--no-trim",
        action="store_true",
        help="Do not strip leading/trailing whitespace from text cells",
    )
    parser.add_argument(
        "--keep-empty-rows",
        action="store_true",
        help="Do not drop rows whose every cell is missing",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print full JSON payload to stdout (in addition to summary)",
    )
    parser.add_argument(
        "--output",
        help="Optional path to write full JSON payload (pretty-printed)",
    )
    parser.add_argument(
        "--export-dir",
        help="Directory to write <name>_cleaned.csv into",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    path = Path(args.file)
    if not path.exists():
        raise SystemExit(f"File not found: {path}")

    config = CleaningConfig(
        remove_duplicates=not args.no_remove_duplicates,
        fill_missing_values=args.fill,
        custom_fill_value=args.fill_value,
        trim_whitespace=not args.no_trim,
        remove_empty_rows=not args.keep_empty_rows,
    )
    try:
        result = run_processing_pipeline(path, config=config)
    except IngestionError as exc:
        raise SystemExit(str(exc))
    payload = result["payload"]

    print(_summarize(payload))

    if args.json:
        print("\n=== JSON Payload ===")
        print(json.dumps(payload, indent=2, default=str))

    if args.output:
        out_path = Path(args.output)
        out_path.write_text(
            json.dumps(payload, indent=2, default=str), encoding="utf-8"
        )
        print(f"\nSaved JSON payload to {out_path}")

    if args.export_dir:
        csv_path = export_cleaned_csv(result["cleaned_df"], path.name, args.export_dir)
        print(f"Saved cleaned data to {csv_path}")


if __name__ == "__main__":  # pragma: no cover
    main()
