"""Configurable cleaning pipeline.

Steps run in a fixed order, each only when enabled:
  1. empty-row removal
  2. whitespace trimming
  3. duplicate removal (first occurrence kept)
  4. missing-value policy (custom fill, mean fill or row removal)

Every run starts from the original table and returns a new frame, so
repeated runs with different configs never accumulate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import numpy as np
import pandas as pd

from .cleaning_utils import is_missing, missing_mask, row_keys, to_number
from .config import CleaningConfig, FillStrategy

logger = logging.getLogger(__name__)


@dataclass
class CleaningReport:
    """What a cleaning run removed or filled."""
    rows_before: int
    rows_after: int = 0
    empty_rows_removed: int = 0
    duplicates_removed: int = 0
    incomplete_rows_removed: int = 0
    cells_filled: int = 0
    fill_values: Dict[str, str] = field(default_factory=dict)

    @property
    def rows_removed(self) -> int:
        return self.rows_before - self.rows_after

    def to_dict(self) -> Dict[str, object]:
        return {
            "rows_before": self.rows_before,
            "rows_after": self.rows_after,
            "rows_removed": self.rows_removed,
            "empty_rows_removed": self.empty_rows_removed,
            "duplicates_removed": self.duplicates_removed,
            "incomplete_rows_removed": self.incomplete_rows_removed,
            "cells_filled": self.cells_filled,
            "fill_values": dict(self.fill_values),
        }


def _drop_fully_blank_rows(df: pd.DataFrame) -> pd.DataFrame:
    if len(df) == 0:
        return df
    is_blank = missing_mask(df)
    keep_mask = ~is_blank.all(axis=1)
    return df.loc[keep_mask]


def _trim_whitespace(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return df
    out = df.copy()
    for column in out.columns:
        # dtype=object keeps None cells as None instead of NaN
        out[column] = pd.Series(
            [v.strip() if isinstance(v, str) else v for v in df[column].tolist()],
            index=df.index,
            dtype=object,
        )
    return out


def _drop_duplicate_rows(df: pd.DataFrame) -> pd.DataFrame:
    if len(df) == 0:
        return df
    keys = pd.Series(row_keys(df), index=df.index)
    return df.loc[~keys.duplicated(keep="first")]


def _drop_incomplete_rows(df: pd.DataFrame) -> pd.DataFrame:
    if len(df) == 0:
        return df
    keep_mask = ~missing_mask(df).any(axis=1)
    return df.loc[keep_mask]


def column_mean(series: pd.Series) -> Optional[float]:
    """Mean of the number-like, non-missing cells; None when there are none."""
    numbers = [
        n for n in (to_number(v) for v in series.tolist() if not is_missing(v))
        if n is not None
    ]
    if not numbers:
        return None
    return float(np.mean(numbers))


def _fill_missing(
    df: pd.DataFrame, config: CleaningConfig, report: CleaningReport
) -> pd.DataFrame:
    strategy = config.fill_missing_values
    if strategy not in (FillStrategy.CUSTOM, FillStrategy.MEAN):
        return df

    out = df.copy()
    for column in out.columns:
        mask = out[column].map(is_missing).astype(bool)
        if not mask.any():
            continue
        if strategy == FillStrategy.CUSTOM:
            fill_value = config.custom_fill_value
        else:
            # Mean is taken over the working set left by the earlier steps
            mean = column_mean(out[column])
            if mean is None:
                continue
            fill_value = f"{mean:.2f}"
        out.loc[mask, column] = fill_value
        report.cells_filled += int(mask.sum())
        report.fill_values[column] = fill_value
    return out


def clean_dataframe(
    original: pd.DataFrame, config: Optional[CleaningConfig] = None
) -> Tuple[pd.DataFrame, CleaningReport]:
    """Apply the enabled cleaning steps to a copy of ``original``.

    Returns the cleaned frame (fresh 0..n-1 index, same column order) and a
    report of what was removed or filled. Never raises for a parsed table.
    """
    cfg = config or CleaningConfig()
    df = original.astype(object)
    report = CleaningReport(rows_before=len(df))

    if cfg.remove_empty_rows:
        before = len(df)
        df = _drop_fully_blank_rows(df)
        report.empty_rows_removed = before - len(df)
        logger.debug("Removed %d empty rows", report.empty_rows_removed)

    if cfg.trim_whitespace:
        df = _trim_whitespace(df)

    if cfg.remove_duplicates:
        before = len(df)
        df = _drop_duplicate_rows(df)
        report.duplicates_removed = before - len(df)
        logger.debug("Removed %d duplicate rows", report.duplicates_removed)

    if cfg.fill_missing_values != FillStrategy.KEEP:
        df = _fill_missing(df, cfg, report)
        if cfg.fill_missing_values == FillStrategy.REMOVE:
            before = len(df)
            df = _drop_incomplete_rows(df)
            report.incomplete_rows_removed = before - len(df)
            logger.debug(
                "Removed %d rows with missing values", report.incomplete_rows_removed
            )
        else:
            logger.debug("Filled %d missing cells", report.cells_filled)

    df = df.reset_index(drop=True)
    report.rows_after = len(df)
    return df, report
