"""Exploratory analysis of a (cleaned) table.

Each column is summarised either as numeric or as categorical. The numeric
test here is a majority rule (more than 80% of the non-missing values must
be number-like) and is independent of the all-or-nothing rule in
type_inference; the two may disagree on the same column.

Quartiles and the median are read straight from the ascending sorted
values at index floor(n * p); no interpolation.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .cleaning_utils import is_missing, to_display_string, to_number
from .models import (
    CategoricalSummary,
    ColumnAnalysis,
    FrequencyEntry,
    HistogramBin,
    NumericSummary,
    OutlierReport,
)

logger = logging.getLogger(__name__)

NUMERIC_MAJORITY = 0.8
HISTOGRAM_BINS = 10
TOP_CATEGORIES = 10
OUTLIER_SAMPLE_SIZE = 10
TUKEY_K = 1.5
LOW_CARDINALITY_LIMIT = 10

INSIGHT_HAS_MISSING = "has_missing_values"
INSIGHT_HAS_OUTLIERS = "has_outliers"
INSIGHT_LIKELY_IDENTIFIER = "likely_identifier"
INSIGHT_LOW_CARDINALITY = "low_cardinality"


def _unique_count(values: List[Any]) -> int:
    seen = set()
    for v in values:
        try:
            seen.add(v)
        except TypeError:
            seen.add(repr(v))
    return len(seen)


def is_mostly_numeric(values: List[Any], numbers: List[float]) -> bool:
    """Strictly more than 80% of the non-missing values are number-like."""
    return len(numbers) > NUMERIC_MAJORITY * len(values)


def _quartile_index(n: int, fraction: float) -> int:
    return min(int(math.floor(n * fraction)), n - 1)


class ExploratoryAnalyzer:
    """Per-column descriptive statistics, outliers and distributions."""

    def analyze(self, df: pd.DataFrame) -> Dict[str, ColumnAnalysis]:
        """Analyze every column, keyed by column name in column order."""

        results: Dict[str, ColumnAnalysis] = {}
        for column in df.columns:
            results[column] = self.analyze_column(df[column], name=column)
        logger.debug("Analyzed %d columns", len(results))
        return results

    def analyze_column(
        self, series: pd.Series, name: Optional[str] = None
    ) -> ColumnAnalysis:
        column = name if name is not None else str(series.name)
        raw = series.tolist()
        values = [v for v in raw if not is_missing(v)]
        null_count = len(raw) - len(values)
        unique_count = _unique_count(values)

        numbers = [n for n in (to_number(v) for v in values) if n is not None]

        if is_mostly_numeric(values, numbers):
            summary = self.numeric_summary(numbers)
            outliers = self.detect_outliers(numbers)
            distribution = self.histogram(numbers, summary.min, summary.max)
        else:
            summary, distribution = self.categorical_summary(values)
            outliers = None

        analysis = ColumnAnalysis(
            column=column,
            summary=summary,
            distribution=distribution,
            null_count=null_count,
            unique_count=unique_count,
            outliers=outliers,
        )
        analysis.insights = self.insights(analysis)
        return analysis

    def numeric_summary(self, numbers: List[float]) -> NumericSummary:
        """Summary over the number-like values of a column (n >= 1)."""

        ordered = sorted(numbers)
        n = len(ordered)
        arr = np.asarray(ordered, dtype=float)
        mean = float(arr.mean())
        std = float(arr.std(ddof=0))
        q1 = ordered[_quartile_index(n, 0.25)]
        q3 = ordered[_quartile_index(n, 0.75)]

        return NumericSummary(
            count=n,
            mean=round(mean, 2),
            median=round(ordered[n // 2], 2),
            std=round(std, 2),
            min=ordered[0],
            max=ordered[-1],
            q1=round(q1, 2),
            q3=round(q3, 2),
            iqr=round(q3 - q1, 2),
        )

    def _fences(self, numbers: List[float]) -> Tuple[float, float]:
        ordered = sorted(numbers)
        n = len(ordered)
        q1 = ordered[_quartile_index(n, 0.25)]
        q3 = ordered[_quartile_index(n, 0.75)]
        iqr = q3 - q1
        return q1 - TUKEY_K * iqr, q3 + TUKEY_K * iqr

    def detect_outliers(self, numbers: List[float]) -> OutlierReport:
        """Tukey fences; sample values are the first outliers in scan order."""

        if not numbers:
            return OutlierReport(count=0, percentage=0.0)
        # Fences use the unrounded quartiles
        lower, upper = self._fences(numbers)
        found = [v for v in numbers if v < lower or v > upper]
        return OutlierReport(
            count=len(found),
            percentage=round(len(found) / len(numbers) * 100, 1),
            sample_values=found[:OUTLIER_SAMPLE_SIZE],
        )

    def histogram(
        self, numbers: List[float], minimum: float, maximum: float
    ) -> List[HistogramBin]:
        """Ten equal-width bins over [min, max]; the last bin is closed."""

        bin_size = (maximum - minimum) / HISTOGRAM_BINS
        counts = [0] * HISTOGRAM_BINS
        for v in numbers:
            if bin_size > 0 and math.isfinite(bin_size):
                index = min(int(math.floor((v - minimum) / bin_size)), HISTOGRAM_BINS - 1)
            else:
                # zero-width range: everything lands in the first bin
                index = 0
            counts[index] += 1

        bins: List[HistogramBin] = []
        for i, count in enumerate(counts):
            start = minimum + i * bin_size
            end = minimum + (i + 1) * bin_size
            closing = "]" if i == HISTOGRAM_BINS - 1 else ")"
            bins.append(
                HistogramBin(
                    label=f"[{start:.1f}, {end:.1f}{closing}",
                    start=start,
                    end=end,
                    count=count,
                )
            )
        return bins

    def frequency_table(self, values: List[Any]) -> Counter:
        """Counts keyed by display string, in first-seen order."""

        return Counter(to_display_string(v) for v in values)

    def categorical_summary(
        self, values: List[Any]
    ) -> Tuple[CategoricalSummary, List[FrequencyEntry]]:
        freq = self.frequency_table(values)
        total = len(values)
        # most_common is stable, so ties keep first-seen order
        ranked = freq.most_common()
        most_frequent, most_frequent_count = ranked[0] if ranked else (None, 0)

        summary = CategoricalSummary(
            count=total,
            unique_count=len(freq),
            most_frequent=most_frequent,
            most_frequent_count=most_frequent_count,
        )
        distribution = [
            FrequencyEntry(
                value=value,
                count=count,
                percentage=round(count / total * 100, 1),
            )
            for value, count in ranked[:TOP_CATEGORIES]
        ]
        return summary, distribution

    def insights(self, analysis: ColumnAnalysis) -> List[str]:
        """Display flags derived from the statistics."""

        flags: List[str] = []
        if analysis.null_count > 0:
            flags.append(INSIGHT_HAS_MISSING)
        if analysis.is_numeric:
            if analysis.outliers is not None and analysis.outliers.count > 0:
                flags.append(INSIGHT_HAS_OUTLIERS)
        else:
            summary = analysis.summary
            if summary.count > 0 and summary.unique_count == summary.count:
                flags.append(INSIGHT_LIKELY_IDENTIFIER)
            if summary.unique_count < LOW_CARDINALITY_LIMIT:
                flags.append(INSIGHT_LOW_CARDINALITY)
        return flags
