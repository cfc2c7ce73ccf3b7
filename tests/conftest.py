"""Shared fixtures: a small offsets workbook laid out like the registry export."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import pytest
from openpyxl import Workbook

HEADER = [
    "Project ID",
    "Project Name",
    "Voluntary Registry",
    "Region",
    "Country",
    "Total Credits\nIssued",
    " Total Credits Retired ",
    "Total Credits\nRemaining",
]
# Pad out past the 23 columns the loader keeps.
HEADER += [f"Filler {i}" for i in range(len(HEADER), 25)]

ROWS = [
    ["P1", "Cookstoves", "VCS", "Africa", "Kenya", 100, 50, 50],
    ["P2", "Hydro", "GS", "Africa", "Uganda", 200, 200, 0],
    [3, "Solar", "VCS", "Asia", "India", 300, 200, 100],
    ["P4", "Landfill", "CAR", "Asia", "China", None, 0, 40],
    ["P5", "Forestry", "ACR", "Europe", "Germany", "n/a", 5, 10],
]


def write_workbook(path: Path, header: list = HEADER, rows: list = ROWS, sheet: str = "PROJECTS") -> Path:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet
    ws.append(["Voluntary Registry Offsets Database"])
    ws.append(["Berkeley Carbon Trading Project"])
    ws.append(["Release: test fixture"])
    ws.append(header)
    for row in rows:
        ws.append(row + [None] * (len(header) - len(row)))
    wb.create_sheet("README").append(["notes"])
    wb.save(path)
    return path


@pytest.fixture
def workbook_path(tmp_path: Path) -> Path:
    return write_workbook(tmp_path / "offsets.xlsx")


@pytest.fixture
def records() -> pd.DataFrame:
    """Already-loaded rows, in the loader's internal column names."""
    return pd.DataFrame(
        {
            "region": ["Africa", "Africa", "Asia", "Asia", "Europe"],
            "country": ["Kenya", "Uganda", "India", "China", "Germany"],
            "issued": [100.0, 200.0, 300.0, None, None],
            "remaining": [50.0, 0.0, 100.0, 40.0, 10.0],
        }
    )


@pytest.fixture
def empty_records() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "region": pd.Series(dtype=object),
            "country": pd.Series(dtype=object),
            "issued": pd.Series(dtype=float),
            "remaining": pd.Series(dtype=float),
        }
    )


def _drop_app_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, "_offset_charts_handler", False):
            logger.removeHandler(handler)
            handler.close()


@pytest.fixture
def clean_root_logger():
    """Detaches the console/file handlers setup_logger adds to the root logger."""
    root = logging.getLogger()
    level = root.level
    yield
    _drop_app_handlers(root)
    root.setLevel(level)
