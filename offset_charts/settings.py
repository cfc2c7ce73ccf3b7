import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "input")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")

# --- Source Workbook ---
DATA_FILENAME = os.getenv("DATA_FILENAME", "VROD-registry-files.xlsx")
SHEET_NAME = os.getenv("SHEET_NAME", "PROJECTS")
# The PROJECTS sheet opens with title/notes rows before the real header.
SKIP_ROWS = int(os.getenv("SKIP_ROWS", "3"))
N_COLUMNS = int(os.getenv("N_COLUMNS", "23"))

# --- Outputs ---
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "false").lower() in ("1", "true", "yes")
SUMMARY_FILENAME_BASE = os.getenv("SUMMARY_FILENAME", "region_summary")

# --- Shared Business Logic ---
# Cleaned source header -> internal column name.
COLUMN_MAP = {
    "Project ID": "project_id",
    "Region": "region",
    "Country": "country",
    "Total Credits Issued": "issued",
    "Total Credits Remaining": "remaining",
}

NUMERIC_FIELDS = ["issued", "remaining"]

# How many countries to list per region in the hover text.
TOP_N = int(os.getenv("TOP_N", "3"))

# Field -> display name used as the metric axis of the long table.
METRIC_LABELS = {
    "issued": "Credits Issued",
    "remaining": "Credits Remaining",
}

# Keys must match METRIC_LABELS values.
METRIC_COLORS = {
    "Credits Issued": "#2563eb",
    "Credits Remaining": "#f97316",
}

# --- Chart Defaults ---
CHART_TITLE = "Carbon Credits Issued and Remaining by Region"
X_AXIS_TITLE = "Region"
Y_AXIS_TITLE = "Credits (tCO2e)"

HOVER_BGCOLOR = os.getenv("HOVER_BGCOLOR", "white")
HOVER_FONT_SIZE = int(os.getenv("HOVER_FONT_SIZE", "13"))
HOVER_FONT_COLOR = os.getenv("HOVER_FONT_COLOR", "#1a2744")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")
LOG_FILENAME = os.getenv("LOG_FILENAME", "offset_charts.log")
