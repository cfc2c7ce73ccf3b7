import json
import logging
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go

from . import settings
from . import utils
from .charts import save_figure
from .schemas import RegionSummary

logger = logging.getLogger(__name__)


def save_outputs(validated_data: list[RegionSummary], report_name: str) -> Path:
    """Saves the region summaries to CSV and conditionally to JSON, with dated filenames."""
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()

    csv_path = settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.csv"
    json_path = settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.json"

    # Aliases double as the CSV headers
    csv_columns = [info.alias for info in RegionSummary.model_fields.values()]
    df = pd.DataFrame(
        [item.model_dump(by_alias=True) for item in validated_data], columns=csv_columns
    )
    df.to_csv(csv_path, index=False)
    logger.info(f"✅ Region summary saved to: {csv_path}")

    if settings.SAVE_JSON_OUTPUT:
        with open(json_path, "w", encoding="utf-8") as f:
            json_data = [item.model_dump(mode="json", by_alias=True) for item in validated_data]
            json.dump(json_data, f, indent=2)
        logger.info(f"✅ JSON output saved to: {json_path}")
    else:
        logger.info("INFO: Skipping JSON file save as per configuration.")

    return csv_path


def save_chart(fig: go.Figure, report_name: str) -> Path:
    """Writes the interactive chart as a standalone HTML page."""
    date_suffix = utils.get_date_suffix_for_filename()
    html_path = save_figure(fig, settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.html")
    logger.info(f"📊 Chart saved to: {html_path}")
    return html_path
