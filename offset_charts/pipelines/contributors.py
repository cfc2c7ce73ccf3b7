import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from .. import aggregator, charts, enricher, settings
from ..pipeline import DataPipeline
from ..schemas import ChartSpec, HoverLabelStyle, RegionSummary

logger = logging.getLogger(__name__)


class RegionContributorsPipeline(DataPipeline):
    """
    Same grouped bars as the totals chart, but each bar's hover names the region's
    top countries for that metric.
    """

    def __init__(
        self,
        source_path: Optional[Path] = None,
        sheet: Optional[str | int] = None,
        test_mode: bool = False,
        top_n: int = settings.TOP_N,
    ):
        super().__init__("region_contributors", source_path=source_path, sheet=sheet, test_mode=test_mode)
        self.top_n = top_n

    def transform(self, df: pd.DataFrame) -> tuple[list[RegionSummary], ChartSpec]:
        logger.info("--- Summing Credits by Region ---")
        summary = aggregator.summarize_by_region(df)

        logger.info(f"--- Ranking Top {self.top_n} Countries per Region ---")
        enriched = enricher.enrich(summary, df, n=self.top_n)

        long_df = aggregator.to_long(enriched, settings.METRIC_LABELS)
        hover_text = charts.build_hover_text(enriched, long_df, settings.METRIC_LABELS)
        hover_label = HoverLabelStyle(
            bgcolor=settings.HOVER_BGCOLOR,
            font_size=settings.HOVER_FONT_SIZE,
            font_color=settings.HOVER_FONT_COLOR,
        )
        spec = charts.build_chart_spec(
            long_df,
            color_map=settings.METRIC_COLORS,
            title=f"{settings.CHART_TITLE} (Top {self.top_n} Countries)",
            hover_text=hover_text,
            hover_label=hover_label,
        )
        return aggregator.to_summaries(enriched), spec
