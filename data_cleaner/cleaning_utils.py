"""Cell-level helpers shared by the profiler, the cleaner and the analyzer.

Pieces kept here:
  - Missing detection (is_missing, missing_mask)
  - Number-like coercion (to_number, is_number_like)
  - Date-like detection (is_date_like)
  - Display stringification for frequency tables (to_display_string)
  - Canonical row keys for duplicate detection (canonical_row_key, row_keys)
  - Table construction from row mappings (table_from_records)

A cell is missing when it is None, a pandas/NumPy NA marker or the empty
string. The three are never distinguished.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence
import json
import math
import re
import numpy as np
import pandas as pd

# Radix-prefixed integer literals accepted by the number coercion
_RADIX_PATTERN = re.compile(r"^0([xX][0-9a-fA-F]+|[bB][01]+|[oO][0-7]+)$")
# Plain decimal literal: sign, digits with optional fraction, optional exponent
_DECIMAL_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_INFINITY_PATTERN = re.compile(r"^[+-]?Infinity$")


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # array-like cells are never missing
        return False


def missing_mask(df: pd.DataFrame) -> pd.DataFrame:
    """Boolean frame, True where the cell is missing."""
    if df.empty:
        return pd.DataFrame(False, index=df.index, columns=df.columns)
    return df.map(is_missing).astype(bool)


def non_missing_values(series: pd.Series) -> List[Any]:
    """Non-missing cells of a column, in row order."""
    return [v for v in series.tolist() if not is_missing(v)]


def to_number(value: Any) -> Optional[float]:
    """Convert a raw cell to a float, or None when it is not number-like.

    Integers, decimals, exponent notation, radix literals (0x/0b/0o) and
    strings with surrounding whitespace qualify. A whitespace-only string
    coerces to 0, booleans to 1/0. NaN never qualifies.
    """
    if value is None:
        return None
    if isinstance(value, (bool, np.bool_)):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float, np.integer, np.floating)):
        try:
            number = float(value)
        except OverflowError:
            return float("inf") if value > 0 else float("-inf")
        return None if math.isnan(number) else number
    if not isinstance(value, str):
        return None
    s = value.strip()
    if s == "":
        return 0.0
    if _DECIMAL_PATTERN.match(s):
        return float(s)
    if _INFINITY_PATTERN.match(s):
        return float("-inf") if s.startswith("-") else float("inf")
    m = _RADIX_PATTERN.match(s)
    if m:
        try:
            return float(int(s, 0))
        except OverflowError:
            return float("inf")
    return None


def is_number_like(value: Any) -> bool:
    return to_number(value) is not None


def is_date_like(value: Any) -> bool:
    """True when the cell parses as a calendar date.

    Parsing is delegated to pandas (dateutil underneath); ambiguous formats
    are resolved by its own rules.
    """
    if isinstance(value, (datetime, date, pd.Timestamp, np.datetime64)):
        return not is_missing(value)
    if isinstance(value, (bool, np.bool_)):
        return False
    text = str(value).strip()
    if not text:
        return False
    try:
        parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return False
    return not pd.isna(parsed)


def to_display_string(value: Any) -> str:
    """String form of a cell as shown in frequency tables."""
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return str(int(value))
    if isinstance(value, (np.generic,)):
        return str(value.item())
    return str(value)


def _json_ready(value: Any) -> Any:
    if is_missing(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value


def canonical_row_key(row: Mapping[str, Any]) -> str:
    """Deterministic content key for a row.

    Field order is sorted so that two rows holding the same values compare
    equal regardless of key insertion order; missing cells serialize as null.
    """
    normalized = {str(k): _json_ready(v) for k, v in row.items()}
    return json.dumps(normalized, sort_keys=True, default=str, ensure_ascii=False)


def row_keys(df: pd.DataFrame) -> List[str]:
    """Canonical key per row, in row order."""
    return [canonical_row_key(r) for r in df.to_dict(orient="records")]


def table_from_records(
    rows: Iterable[Mapping[str, Any]], columns: Sequence[str]
) -> pd.DataFrame:
    """Build an object-dtype table from row mappings.

    Column order follows ``columns``; keys absent from a row become missing
    cells, keys not listed in ``columns`` are dropped.
    """
    records: List[Dict[str, Any]] = [
        {c: row.get(c) for c in columns} for row in rows
    ]
    return pd.DataFrame(records, columns=list(columns), dtype=object)


def table_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Rows of a table as plain dicts, missing cells as None."""
    return [
        {k: (None if is_missing(v) else v) for k, v in r.items()}
        for r in df.to_dict(orient="records")
    ]


__all__ = [
    "is_missing",
    "missing_mask",
    "non_missing_values",
    "to_number",
    "is_number_like",
    "is_date_like",
    "to_display_string",
    "canonical_row_key",
    "row_keys",
    "table_from_records",
    "table_to_records",
]
