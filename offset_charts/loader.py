import logging
import zipfile
from pathlib import Path

import pandas as pd

from . import settings
from .errors import SchemaMismatch, SheetNotFound, SourceNotFound
from .schemas import OffsetRecord
from .utils import clean_column_name

logger = logging.getLogger(__name__)


def _open_workbook(path: Path) -> pd.ExcelFile:
    """Opens the workbook once, translating read failures into SourceNotFound."""
    if not path.exists():
        raise SourceNotFound(f"Workbook not found at {path}")
    try:
        return pd.ExcelFile(path)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise SourceNotFound(f"Could not read {path.name}: {e}") from e


def _check_sheet(xls: pd.ExcelFile, sheet: str | int, path: Path) -> None:
    names = xls.sheet_names
    if isinstance(sheet, int):
        if not 0 <= sheet < len(names):
            raise SheetNotFound(
                f"Sheet index {sheet} out of range for {path.name} ({len(names)} sheets)"
            )
    elif sheet not in names:
        raise SheetNotFound(
            f"Sheet '{sheet}' not found in {path.name}. Available: {', '.join(map(str, names))}"
        )


def _to_text(value) -> str | None:
    """Stringifies an identifier cell; 1001.0 (an int column with blanks) becomes '1001'."""
    if pd.isna(value):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def load_projects(
    path: Path | str,
    sheet: str | int | None = None,
    skiprows: int | None = None,
    n_columns: int | None = None,
) -> pd.DataFrame:
    """
    Reads the project sheet of the offsets workbook.
    - Skips the metadata rows above the header.
    - Keeps the first `n_columns` columns by position.
    - Cleans header names, then renames the required ones to the internal schema.
    - Coerces the credit totals to numbers; blanks and text become NaN.
    Unset arguments fall back to the current values in `settings`.
    """
    sheet = settings.SHEET_NAME if sheet is None else sheet
    skiprows = settings.SKIP_ROWS if skiprows is None else skiprows
    n_columns = settings.N_COLUMNS if n_columns is None else n_columns

    path = Path(path)
    with _open_workbook(path) as xls:
        _check_sheet(xls, sheet, path)
        df = xls.parse(sheet, skiprows=skiprows)

    df = df.iloc[:, :n_columns]
    df.columns = [clean_column_name(col) for col in df.columns]

    missing = [col for col in settings.COLUMN_MAP if col not in df.columns]
    if missing:
        raise SchemaMismatch(missing)

    df = df.rename(columns=settings.COLUMN_MAP)
    df = df.dropna(how="all").reset_index(drop=True)

    for field in settings.NUMERIC_FIELDS:
        df[field] = pd.to_numeric(df[field], errors="coerce")

    # Excel hands back IDs and coded keys as ints, floats or strings depending on the registry
    for column in ("project_id", "region", "country"):
        df[column] = df[column].map(_to_text)

    logger.info(f"✅ Loaded {len(df)} project rows from {path.name} [{sheet}].")
    return df


def to_records(df: pd.DataFrame) -> list[OffsetRecord]:
    """Validates the loaded rows against the OffsetRecord schema."""
    columns = list(settings.COLUMN_MAP.values())
    subset = df[columns].astype(object)
    subset = subset.where(subset.notna(), None)
    return [OffsetRecord(**row) for row in subset.to_dict("records")]
