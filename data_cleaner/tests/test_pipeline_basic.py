import json
from pathlib import Path

import pandas as pd
import pytest

from data_cleaner import (
    CleaningConfig,
    FillStrategy,
    export_cleaned_csv,
    load_table,
    process_table,
    run_processing_pipeline,
)
from data_cleaner.cli import main
from data_cleaner.exceptions import IngestionError, UnsupportedFileError
from data_cleaner.pipeline import cleaned_file_name, preview


CSV_TEXT = (
    " name , age ,joined\n"
    "Ana,30,2024-01-01\n"
    "Ana ,30,2024-01-01\n"
    "\n"
    "Bea,,2024-02-15\n"
    "Caio,41,2024-03-10\n"
    ",,\n"
)


def _write_csv(tmp_path: Path, name: str = "people.csv") -> Path:
    path = tmp_path / name
    path.write_text(CSV_TEXT, encoding="utf-8")
    return path


def test_load_csv_keeps_raw_text_and_trims_headers(tmp_path: Path):
    df, kind = load_table(_write_csv(tmp_path))

    assert kind == "csv"
    assert list(df.columns) == ["name", "age", "joined"]
    # blank line skipped, the ",," row kept as an all-missing row
    assert len(df) == 5
    assert df.loc[1, "name"] == "Ana "
    assert df.loc[2, "age"] == ""
    assert df.loc[0, "age"] == "30"


def test_load_csv_does_not_convert_na_tokens(tmp_path: Path):
    path = tmp_path / "tokens.csv"
    path.write_text("code\nNA\nnull\n", encoding="utf-8")
    df, _ = load_table(path)

    assert df["code"].tolist() == ["NA", "null"]


def test_load_excel_maps_first_row_to_header(tmp_path: Path):
    path = tmp_path / "sheet.xlsx"
    pd.DataFrame(
        {"city": ["Lisbon", "Porto", "Faro"], "pop": [545, 232, None]}
    ).to_excel(path, index=False)

    df, kind = load_table(path)

    assert kind == "excel"
    assert list(df.columns) == ["city", "pop"]
    assert len(df) == 3
    assert df.loc[2, "pop"] is None


def test_load_excel_names_blank_headers_uniquely(tmp_path: Path):
    path = tmp_path / "unnamed.xlsx"
    pd.DataFrame([["a", None, None], [1, "x", "y"], [2, "z", "w"]]).to_excel(
        path, index=False, header=False
    )

    df, _ = load_table(path)
    assert list(df.columns) == ["a", "", "_1"]

    result = run_processing_pipeline(path)
    assert result["cleaned_stats"].total_columns == 3
    assert result["cleaned_stats"].total_rows == 2
    assert list(result["analysis"]) == ["a", "", "_1"]


def test_missing_excel_engine_reports_ingestion_error(tmp_path: Path, monkeypatch):
    def _no_engine(*args, **kwargs):
        raise ImportError("Missing optional dependency 'xlrd'.")

    monkeypatch.setattr(pd, "read_excel", _no_engine)

    with pytest.raises(IngestionError, match="xlrd"):
        load_table(tmp_path / "legacy.xls")


def test_unsupported_extension(tmp_path: Path):
    path = tmp_path / "notes.txt"
    path.write_text("a,b\n1,2\n", encoding="utf-8")

    with pytest.raises(UnsupportedFileError):
        load_table(path)


def test_empty_csv_reports_single_ingestion_error(tmp_path: Path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    with pytest.raises(IngestionError, match="Failed to parse CSV"):
        load_table(path)


def test_run_pipeline_with_default_config(tmp_path: Path):
    result = run_processing_pipeline(_write_csv(tmp_path))

    before = result["original_stats"]
    after = result["cleaned_stats"]
    assert before.total_rows == 5
    assert before.missing_values == 4
    assert after.missing_values == 0
    assert after.duplicate_rows == 0
    assert result["cleaned_df"]["name"].tolist() == ["Ana", "Caio"]
    assert after.data_types == {"name": "text", "age": "numeric", "joined": "date"}
    assert result["cleaning_report"].rows_removed == 3

    payload = result["payload"]
    assert payload["dataset"]["cleaned"]["totalRows"] == 2
    assert payload["columns"]["age"]["summary"]["mean"] == 35.5
    assert payload["config"]["fillMissingValues"] == "remove"
    json.dumps(payload, default=str)


def test_process_table_accepts_camel_case_config(tmp_path: Path):
    original, _ = load_table(_write_csv(tmp_path))
    result = process_table(
        original,
        {
            "removeDuplicates": False,
            "fillMissingValues": "custom",
            "customFillValue": "?",
            "trimWhitespace": False,
            "removeEmptyRows": True,
        },
    )

    cleaned = result["cleaned_df"]
    assert len(cleaned) == 4
    assert cleaned.loc[2, "age"] == "?"
    # original untouched
    assert original.loc[2, "age"] == ""


def test_config_from_dict_and_fallback():
    cfg = CleaningConfig.from_dict(
        {"fill_missing_values": "mean", "trimWhitespace": False, "unknown": 1}
    )
    assert cfg.fill_missing_values == FillStrategy.MEAN
    assert cfg.trim_whitespace is False
    assert cfg.remove_duplicates is True

    assert CleaningConfig.from_dict({"fillMissingValues": "median"}).fill_missing_values == FillStrategy.KEEP
    assert CleaningConfig.from_dict(None) == CleaningConfig()


@pytest.mark.parametrize("literal", ["MEAN", " remove ", "Custom", None])
def test_fill_option_must_match_exactly(literal):
    cfg = CleaningConfig(fill_missing_values=literal)
    assert cfg.fill_missing_values == FillStrategy.KEEP


def test_export_uses_cleaned_suffix_and_header_order(tmp_path: Path):
    result = run_processing_pipeline(_write_csv(tmp_path, "people.v2.csv"))
    out = export_cleaned_csv(result["cleaned_df"], "people.v2.csv", tmp_path / "out")

    assert out.name == "people_cleaned.csv"
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "name,age,joined"
    assert lines[1] == "Ana,30,2024-01-01"


def test_cleaned_file_name():
    assert cleaned_file_name("sales.xlsx") == "sales_cleaned.csv"
    assert cleaned_file_name(Path("/tmp/data/report.csv")) == "report_cleaned.csv"


def test_preview_truncates_rows_and_columns():
    df = pd.DataFrame(
        {f"c{i}": [str(r) for r in range(8)] for i in range(8)}, dtype=object
    )
    view = preview(df)

    assert view["columns"] == [f"c{i}" for i in range(6)]
    assert len(view["rows"]) == 5
    assert view["more_columns"] is True
    assert view["total_rows"] == 8


def test_cli_summary_export_and_json(tmp_path: Path, capsys):
    path = _write_csv(tmp_path)
    out_json = tmp_path / "result.json"

    main(
        [
            str(path),
            "--fill",
            "keep",
            "--export-dir",
            str(tmp_path / "export"),
            "--output",
            str(out_json),
        ]
    )
    captured = capsys.readouterr().out

    assert "Rows: 5 -> 3" in captured
    assert (tmp_path / "export" / "people_cleaned.csv").exists()
    payload = json.loads(out_json.read_text(encoding="utf-8"))
    assert payload["dataset"]["cleaned"]["missingValues"] == 1


def test_cli_missing_file(tmp_path: Path):
    with pytest.raises(SystemExit):
        main([str(tmp_path / "nope.csv")])
