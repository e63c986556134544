"""
Result models returned by the profiler and the exploratory analyzer.

All models are plain dataclasses; ``to_dict`` gives the JSON-ready payload
handed to the presentation shell.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class DatasetStats:
    """Table-level counts plus the inferred type of every column."""
    total_rows: int
    total_columns: int
    missing_values: int
    duplicate_rows: int
    data_types: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRows": self.total_rows,
            "totalColumns": self.total_columns,
            "missingValues": self.missing_values,
            "duplicateRows": self.duplicate_rows,
            "dataTypes": dict(self.data_types),
        }


@dataclass
class NumericSummary:
    """
    Summary of a numeric column.

    Every field except min and max is rounded to 2 decimals.
    """
    count: int
    mean: float
    median: float
    std: float
    min: float
    max: float
    q1: float
    q3: float
    iqr: float
    kind: str = "numeric"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "count": self.count,
            "mean": self.mean,
            "median": self.median,
            "std": self.std,
            "min": self.min,
            "max": self.max,
            "q1": self.q1,
            "q3": self.q3,
            "iqr": self.iqr,
        }


@dataclass
class CategoricalSummary:
    """Summary of a categorical column."""
    count: int
    unique_count: int
    most_frequent: Optional[str]
    most_frequent_count: int
    kind: str = "categorical"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "count": self.count,
            "uniqueCount": self.unique_count,
            "mostFrequent": self.most_frequent,
            "mostFrequentCount": self.most_frequent_count,
        }


@dataclass
class OutlierReport:
    """Values outside the Tukey fences of a numeric column."""
    count: int
    percentage: float
    sample_values: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "percentage": self.percentage,
            "sampleValues": list(self.sample_values),
        }


@dataclass
class HistogramBin:
    """One fixed-width bin of a numeric distribution."""
    label: str
    start: float
    end: float
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "start": self.start,
            "end": self.end,
            "count": self.count,
        }


@dataclass
class FrequencyEntry:
    """One value of a categorical frequency table."""
    value: str
    count: int
    percentage: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "count": self.count,
            "percentage": self.percentage,
        }


@dataclass
class ColumnAnalysis:
    """Exploratory result for one column."""
    column: str
    summary: Union[NumericSummary, CategoricalSummary]
    distribution: List[Union[HistogramBin, FrequencyEntry]]
    null_count: int
    unique_count: int
    outliers: Optional[OutlierReport] = None
    insights: List[str] = field(default_factory=list)

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.summary, NumericSummary)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "column": self.column,
            "summary": self.summary.to_dict(),
            "outliers": self.outliers.to_dict() if self.outliers else None,
            "distribution": [entry.to_dict() for entry in self.distribution],
            "nullCount": self.null_count,
            "uniqueCount": self.unique_count,
            "insights": list(self.insights),
        }
