import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from .. import aggregator, charts, settings
from ..pipeline import DataPipeline
from ..schemas import ChartSpec, RegionSummary

logger = logging.getLogger(__name__)


class RegionTotalsPipeline(DataPipeline):
    """Grouped bars of issued vs. remaining credits per region, with plotly's default hover."""

    def __init__(
        self,
        source_path: Optional[Path] = None,
        sheet: Optional[str | int] = None,
        test_mode: bool = False,
    ):
        super().__init__("region_totals", source_path=source_path, sheet=sheet, test_mode=test_mode)

    def transform(self, df: pd.DataFrame) -> tuple[list[RegionSummary], ChartSpec]:
        logger.info("--- Summing Credits by Region ---")
        summary = aggregator.summarize_by_region(df)
        dropped = len(df) - len(aggregator.drop_incomplete(df))
        if dropped:
            logger.info(f"  > Excluded {dropped} rows missing issued or remaining totals.")

        long_df = aggregator.to_long(summary, settings.METRIC_LABELS)
        spec = charts.build_chart_spec(long_df, color_map=settings.METRIC_COLORS)
        return aggregator.to_summaries(summary), spec
