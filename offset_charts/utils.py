import re
from datetime import datetime

import pandas as pd

# C0/C1 control characters, including tabs and CR/LF.
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]+")


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def clean_column_name(name) -> str:
    """
    Normalizes a raw spreadsheet header.
    Excel headers often carry line breaks or stray tabs ("Total Credits\\r\\nIssued"),
    so control characters become single spaces and runs of whitespace collapse.
    """
    text = _CONTROL_CHARS.sub(" ", str(name))
    return " ".join(text.split())


def format_credits(value) -> str:
    """Formats a credit total with thousands separators, e.g. 1234567.0 -> '1,234,567'."""
    if value is None or pd.isna(value):
        return "n/a"
    return f"{value:,.0f}"
