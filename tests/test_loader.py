"""Tests for reading the PROJECTS sheet."""

from __future__ import annotations

import math
from pathlib import Path

import pandas as pd
import pytest
from pydantic import ValidationError

from offset_charts import settings
from offset_charts.errors import LoaderError, SchemaMismatch, SheetNotFound, SourceNotFound
from offset_charts.loader import load_projects, to_records
from offset_charts.utils import clean_column_name

from conftest import HEADER, ROWS, write_workbook


def test_load_projects_renames_and_coerces(workbook_path: Path) -> None:
    df = load_projects(workbook_path, sheet="PROJECTS", skiprows=3)

    assert len(df) == 5
    for column in ("project_id", "region", "country", "issued", "remaining"):
        assert column in df.columns
    assert df["issued"].tolist()[:3] == [100, 200, 300]
    # Blank and text cells both become NaN
    assert math.isnan(df.loc[3, "issued"])
    assert math.isnan(df.loc[4, "issued"])


def test_load_projects_cleans_headers(workbook_path: Path) -> None:
    df = load_projects(workbook_path)
    assert "Total Credits Retired" in df.columns


def test_load_projects_keeps_leading_columns_only(workbook_path: Path) -> None:
    df = load_projects(workbook_path, n_columns=23)
    assert len(df.columns) == 23
    assert "Filler 23" not in df.columns
    assert "Filler 22" in df.columns


def test_load_projects_project_ids_are_strings(workbook_path: Path) -> None:
    df = load_projects(workbook_path)
    assert df["project_id"].tolist() == ["P1", "P2", "3", "P4", "P5"]


def test_missing_file_raises_source_not_found(tmp_path: Path) -> None:
    with pytest.raises(SourceNotFound):
        load_projects(tmp_path / "nope.xlsx")


def test_unreadable_file_raises_source_not_found(tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.xlsx"
    bogus.write_text("this is not a workbook", encoding="utf-8")
    with pytest.raises(SourceNotFound):
        load_projects(bogus)


def test_missing_sheet_raises_sheet_not_found(workbook_path: Path) -> None:
    with pytest.raises(SheetNotFound):
        load_projects(workbook_path, sheet="CREDITS")


def test_sheet_index_out_of_range(workbook_path: Path) -> None:
    with pytest.raises(SheetNotFound):
        load_projects(workbook_path, sheet=7)


def test_truncated_columns_raise_schema_mismatch(workbook_path: Path) -> None:
    with pytest.raises(SchemaMismatch) as excinfo:
        load_projects(workbook_path, n_columns=4)
    assert "Country" in excinfo.value.missing
    assert "Total Credits Remaining" in excinfo.value.missing
    assert isinstance(excinfo.value, LoaderError)


def test_missing_header_raises_schema_mismatch(tmp_path: Path) -> None:
    header = [h if h != "Region" else "Area" for h in HEADER]
    path = write_workbook(tmp_path / "renamed.xlsx", header=header)
    with pytest.raises(SchemaMismatch) as excinfo:
        load_projects(path)
    assert excinfo.value.missing == ["Region"]


def test_header_only_sheet_loads_empty(tmp_path: Path) -> None:
    path = write_workbook(tmp_path / "empty.xlsx", rows=[])
    df = load_projects(path)
    assert df.empty
    assert "issued" in df.columns


def test_to_records_validates_rows(workbook_path: Path) -> None:
    records = to_records(load_projects(workbook_path))
    assert len(records) == len(ROWS)
    assert records[0].region == "Africa"
    assert records[0].issued == 100
    assert records[3].issued is None
    assert records[2].project_id == "3"


def test_to_records_rejects_negative_issued(workbook_path: Path) -> None:
    df = load_projects(workbook_path)
    df.loc[0, "issued"] = -5
    with pytest.raises(ValidationError):
        to_records(df)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Total Credits\r\nIssued", "Total Credits Issued"),
        ("  Region\t", "Region"),
        ("Country", "Country"),
        (2021, "2021"),
    ],
)
def test_clean_column_name(raw, expected) -> None:
    assert clean_column_name(raw) == expected


def test_numeric_ids_with_blanks_keep_integer_form(tmp_path: Path) -> None:
    rows = [
        [1001, "Cookstoves", "VCS", "Africa", "Kenya", 100, 50, 50],
        [None, "Hydro", "GS", "Africa", "Uganda", 200, 200, 0],
    ]
    df = load_projects(write_workbook(tmp_path / "ids.xlsx", rows=rows))
    assert df.loc[0, "project_id"] == "1001"
    assert pd.isna(df.loc[1, "project_id"])


def test_numeric_region_codes_become_strings(tmp_path: Path) -> None:
    rows = [
        ["P1", "Cookstoves", "VCS", 1, 404, 100, 50, 50],
        ["P2", "Hydro", "GS", 2, 800, 200, 200, 0],
    ]
    df = load_projects(write_workbook(tmp_path / "codes.xlsx", rows=rows))

    assert df["region"].tolist() == ["1", "2"]
    assert df["country"].tolist() == ["404", "800"]
    assert [r.region for r in to_records(df)] == ["1", "2"]


def test_defaults_follow_current_settings(workbook_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "SHEET_NAME", "CREDITS")
    with pytest.raises(SheetNotFound):
        load_projects(workbook_path)

    monkeypatch.setattr(settings, "SHEET_NAME", "PROJECTS")
    monkeypatch.setattr(settings, "N_COLUMNS", 4)
    with pytest.raises(SchemaMismatch):
        load_projects(workbook_path)
