import logging
from typing import Dict, Optional

import pandas as pd

from .cleaning_utils import missing_mask, row_keys
from .models import DatasetStats
from .type_inference import TypeInferencer

logger = logging.getLogger(__name__)


class DataProfiler:
    """Profiling engine producing table-level counts and column types."""

    def __init__(self, type_inferencer: Optional[TypeInferencer] = None):
        self.type_inferencer = type_inferencer or TypeInferencer()

    def profile_dataframe(self, df: pd.DataFrame) -> DatasetStats:
        """Generate the dataset profile. The input frame is not modified."""

        stats = DatasetStats(
            total_rows=len(df),
            total_columns=len(df.columns),
            missing_values=self._count_missing(df),
            duplicate_rows=self._count_duplicates(df),
            data_types=self.type_inferencer.infer_types(df),
        )
        logger.debug(
            "Profiled %d rows x %d columns: %d missing, %d duplicates",
            stats.total_rows,
            stats.total_columns,
            stats.missing_values,
            stats.duplicate_rows,
        )
        return stats

    def _count_missing(self, df: pd.DataFrame) -> int:
        """Count missing cells over every (row, column) pair."""

        return int(missing_mask(df).to_numpy().sum())

    def _count_duplicates(self, df: pd.DataFrame) -> int:
        """Rows whose canonical key already appeared earlier in the table."""

        keys = row_keys(df)
        return len(keys) - len(set(keys))

    def type_distribution(self, stats: DatasetStats) -> Dict[str, int]:
        """Number of columns per inferred type, in first-seen order."""

        counts: Dict[str, int] = {}
        for detected_type in stats.data_types.values():
            counts[detected_type] = counts.get(detected_type, 0) + 1
        return counts
