"""Tabular data cleaning package: type inference, profiling, a configurable cleaning pipeline and exploratory analysis.

Public entry points:
    run_processing_pipeline(file_path, *, config=None)   load a CSV/Excel file and run everything
    process_table(df, config=None)                       same, for an already parsed table
    clean_dataframe(df, config)                          cleaning only
    DataProfiler().profile_dataframe(df)                 dataset stats
    ExploratoryAnalyzer().analyze(df)                    per-column exploration
"""

from .cleaner import CleaningReport, clean_dataframe  # noqa: F401
from .cleaning_utils import table_from_records, table_to_records  # noqa: F401
from .config import CleaningConfig, FillStrategy  # noqa: F401
from .data_profiler import DataProfiler  # noqa: F401
from .explorer import ExploratoryAnalyzer  # noqa: F401
from .pipeline import (  # noqa: F401
    export_cleaned_csv,
    load_table,
    process_table,
    run_processing_pipeline,
)
from .type_inference import TypeInferencer  # noqa: F401

__all__ = [
    "run_processing_pipeline",
    "process_table",
    "load_table",
    "export_cleaned_csv",
    "clean_dataframe",
    "CleaningReport",
    "CleaningConfig",
    "FillStrategy",
    "DataProfiler",
    "ExploratoryAnalyzer",
    "TypeInferencer",
    "table_from_records",
    "table_to_records",
]
