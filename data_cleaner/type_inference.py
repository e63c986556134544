from __future__ import annotations

import logging
from typing import Any, Dict, Sequence

import pandas as pd

from .cleaning_utils import is_date_like, is_number_like, non_missing_values

logger = logging.getLogger(__name__)

NUMERIC = "numeric"
DATE = "date"
TEXT = "text"
EMPTY = "empty"

COLUMN_TYPES = (NUMERIC, DATE, TEXT, EMPTY)


class TypeInferencer:
    """All-or-nothing column classifier used by the dataset profile.

    A column is numeric only when every non-missing value is number-like,
    date only when every value parses as a date. There is no majority
    threshold here; the exploratory analyzer applies its own looser rule.
    """

    def infer_type(self, values: Sequence[Any]) -> str:
        """Classify values that the caller has already stripped of missing cells."""

        if len(values) == 0:
            return EMPTY
        if all(is_number_like(v) for v in values):
            return NUMERIC
        if all(is_date_like(v) for v in values):
            return DATE
        return TEXT

    def infer_types(self, df: pd.DataFrame) -> Dict[str, str]:
        """Infer the type of every column independently, in column order."""

        types: Dict[str, str] = {}
        for column in df.columns:
            types[column] = self.infer_type(non_missing_values(df[column]))
        logger.debug("Inferred column types: %s", types)
        return types
