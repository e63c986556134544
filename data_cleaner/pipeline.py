import logging
import zipfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd

from .cleaner import clean_dataframe
from .cleaning_utils import is_missing, table_from_records
from .config import CleaningConfig
from .data_profiler import DataProfiler
from .exceptions import IngestionError, UnsupportedFileError
from .explorer import ExploratoryAnalyzer

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = (".csv",)
EXCEL_EXTENSIONS = (".xlsx", ".xls")

# ---------------------------------------------------------------------------
# Ingestion: map the external parser's output onto the table contract
# ---------------------------------------------------------------------------


def _file_kind(file_path: Union[str, Path]) -> str:
    ext = Path(file_path).suffix.lower()
    if ext in CSV_EXTENSIONS:
        return "csv"
    if ext in EXCEL_EXTENSIONS:
        return "excel"
    raise UnsupportedFileError(ext)


def _read_csv(file_path: Union[str, Path]) -> pd.DataFrame:
    # Every cell stays raw text; only empty fields are missing
    df = pd.read_csv(
        file_path,
        dtype=object,
        keep_default_na=False,
        skip_blank_lines=True,
    )
    df.columns = [str(c).strip() for c in df.columns]
    return df


def _dedupe_headers(headers: List[str]) -> List[str]:
    seen: Dict[str, int] = {}
    out: List[str] = []
    for h in headers:
        name = h
        while name in seen:
            seen[h] = seen.get(h, 0) + 1
            name = f"{h}_{seen[h]}"
        seen[name] = 0
        out.append(name)
    return out


def _read_excel(file_path: Union[str, Path]) -> pd.DataFrame:
    # Only first sheet; first row is the header
    raw = pd.read_excel(file_path, sheet_name=0, header=None, dtype=object)
    if raw.empty:
        raise IngestionError("Excel file is empty or could not be read.")
    headers = _dedupe_headers(
        ["" if is_missing(h) else str(h) for h in raw.iloc[0].tolist()]
    )
    # Cells past a row's last value come back as NaN and stay missing
    records = [
        {h: (None if is_missing(v) else v) for h, v in zip(headers, row)}
        for row in raw.iloc[1:].itertuples(index=False)
    ]
    return table_from_records(records, headers)


def load_table(file_path: Union[str, Path]) -> Tuple[pd.DataFrame, str]:
    """Read a CSV or Excel file into an object-dtype table.

    Returns the table and the file kind ('csv' or 'excel'). Parser failures
    surface as a single IngestionError message.
    """
    kind = _file_kind(file_path)
    try:
        if kind == "csv":
            df = _read_csv(file_path)
        else:
            df = _read_excel(file_path)
    except IngestionError:
        raise
    except FileNotFoundError as exc:
        raise IngestionError(f"File not found: {file_path}") from exc
    except (ValueError, OSError, zipfile.BadZipFile, pd.errors.ParserError) as exc:
        label = "CSV" if kind == "csv" else "Excel"
        raise IngestionError(f"Failed to parse {label}: {exc}") from exc
    except ImportError as exc:
        # pandas reports a missing reader engine (openpyxl, xlrd) this way
        raise IngestionError(f"No reader available for {file_path}: {exc}") from exc
    logger.info("Loaded %s with %d rows and %d columns", file_path, len(df), df.shape[1])
    return df, kind


# ---------------------------------------------------------------------------
# Export & preview
# ---------------------------------------------------------------------------


def cleaned_file_name(source_name: Union[str, Path]) -> str:
    """'<base>_cleaned.csv', base being the name up to its first dot."""
    base = Path(source_name).name.split(".")[0]
    return f"{base}_cleaned.csv"


def export_cleaned_csv(
    df: pd.DataFrame, source_name: Union[str, Path], out_dir: Union[str, Path]
) -> Path:
    """Write the table as CSV in header order, missing cells as empty fields."""
    out_path = Path(out_dir) / cleaned_file_name(source_name)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_path, index=False, na_rep="")
    logger.info("Saved cleaned table to %s", out_path)
    return out_path


def preview(df: pd.DataFrame, rows: int = 5, columns: int = 6) -> Dict[str, Any]:
    """First rows x first columns of the table, missing cells as None."""
    shown_cols = list(df.columns[:columns])
    head = df.loc[:, shown_cols].head(rows)
    records: List[Dict[str, Any]] = [
        {c: (None if is_missing(v) else v) for c, v in r.items()}
        for r in head.to_dict(orient="records")
    ]
    return {
        "columns": shown_cols,
        "rows": records,
        "more_columns": len(df.columns) > columns,
        "total_rows": len(df),
    }


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


def process_table(
    original: pd.DataFrame, config: Optional[Union[CleaningConfig, Dict[str, Any]]] = None
) -> Dict[str, Any]:
    """Profile -> clean -> re-profile -> analyze an already parsed table.

    The original frame is never modified; every call cleans from it afresh.
    """
    cfg = config if isinstance(config, CleaningConfig) else CleaningConfig.from_dict(config)

    profiler = DataProfiler()
    original_stats = profiler.profile_dataframe(original)
    logger.info(
        "Original table: %d rows, %d missing cells, %d duplicate rows",
        original_stats.total_rows,
        original_stats.missing_values,
        original_stats.duplicate_rows,
    )

    cleaned_df, report = clean_dataframe(original, cfg)
    logger.info(
        "Cleaning removed or modified %d rows (%d cells filled)",
        report.rows_removed,
        report.cells_filled,
    )

    cleaned_stats = profiler.profile_dataframe(cleaned_df)
    analysis = ExploratoryAnalyzer().analyze(cleaned_df)

    return {
        "original_df": original,
        "cleaned_df": cleaned_df,
        "config": cfg,
        "original_stats": original_stats,
        "cleaned_stats": cleaned_stats,
        "type_distribution": profiler.type_distribution(cleaned_stats),
        "cleaning_report": report,
        "analysis": analysis,
    }


def build_payload(result: Dict[str, Any]) -> Dict[str, Any]:
    """JSON-ready view of a process_table result."""
    cleaned_df = result["cleaned_df"]
    return {
        "dataset": {
            "column_names": list(cleaned_df.columns),
            "original": result["original_stats"].to_dict(),
            "cleaned": result["cleaned_stats"].to_dict(),
            "type_distribution": result["type_distribution"],
        },
        "config": result["config"].to_dict(),
        "cleaning_report": result["cleaning_report"].to_dict(),
        "columns": {c: a.to_dict() for c, a in result["analysis"].items()},
        "preview": preview(cleaned_df),
    }


def run_processing_pipeline(
    file_path: Union[str, Path],
    *,
    config: Optional[Union[CleaningConfig, Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    """Primary orchestrator: load -> profile -> clean -> re-profile -> analyze.

    Parameters
    ----------
    file_path : str or Path
        Path to a CSV or Excel file (first sheet only for Excel).
    config : CleaningConfig or dict, optional
        Cleaning options; a dict may use camelCase or snake_case keys.

    Returns
    -------
    dict with keys: original_df, cleaned_df, config, original_stats,
    cleaned_stats, type_distribution, cleaning_report, analysis, file_kind,
    payload
    """
    original, file_kind = load_table(file_path)
    result = process_table(original, config)
    result["file_kind"] = file_kind
    result["payload"] = build_payload(result)
    return result
