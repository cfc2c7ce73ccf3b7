import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import pandas as pd
import plotly.graph_objects as go
from pydantic import ValidationError

from . import settings, data_handler
from .charts import render
from .errors import LoaderError
from .loader import load_projects
from .schemas import ChartSpec, RegionSummary

logger = logging.getLogger(__name__)


class DataPipeline(ABC):
    """
    Abstract base class for the chart pipelines.
    Follows an Extract -> Transform -> Load pattern: read the workbook, build the
    summaries and chart spec, then render and save.
    """

    def __init__(
        self,
        report_type: str,
        source_path: Optional[Path] = None,
        sheet: Optional[str | int] = None,
        test_mode: bool = False,
    ):
        self.report_type = report_type
        self.source_path = Path(source_path) if source_path else settings.INPUT_DIR / settings.DATA_FILENAME
        self.sheet = sheet if sheet is not None else settings.SHEET_NAME
        self.test_mode = test_mode
        self.summaries: list[RegionSummary] = []
        self.figure: Optional[go.Figure] = None

    def run(self) -> go.Figure:
        """
        Orchestrates the pipeline execution and returns the rendered figure.
        Loader and validation errors are logged and re-raised.
        """
        logger.info(f"🚀 STEP: {self.report_type.upper()} CHART")
        logger.info("-" * 30)

        # --- 1. EXTRACT ---
        raw_data = self.extract()
        if raw_data.empty:
            logger.warning(f"⚠️ No project rows extracted for {self.report_type}. Chart will be empty.")

        # --- 2. TRANSFORM ---
        try:
            summaries, spec = self.transform(raw_data)
        except ValidationError as e:
            logger.error(f"❌ Region summary validation failed for {self.report_type}.")
            logger.error(e)
            raise

        # --- 3. LOAD ---
        self.load(summaries, spec)

        logger.info(f"✅ {self.report_type.replace('_', ' ').capitalize()} Pipeline Finished.\n")
        logger.info("=" * 60)
        return self.figure

    def extract(self) -> pd.DataFrame:
        """Reads the project sheet. Any LoaderError is fatal."""
        logger.info(f"--- Reading {self.source_path.name} ---")
        try:
            return load_projects(self.source_path, sheet=self.sheet)
        except LoaderError as e:
            logger.error(f"❌ {type(e).__name__}: {e}")
            raise

    @abstractmethod
    def transform(self, df: pd.DataFrame) -> tuple[list[RegionSummary], ChartSpec]:
        """
        Responsible for aggregation and chart description.
        Returns the validated region summaries and the ChartSpec to render.
        """
        pass

    def load(self, summaries: list[RegionSummary], spec: ChartSpec):
        """Renders the chart and saves the summary and HTML to disk."""
        self.summaries = summaries
        self.figure = render(spec)

        logger.info("\n--- Region Totals ---")
        if summaries:
            for s in summaries:
                logger.info(f"{s.region}: issued={s.issued:,.0f} remaining={s.remaining:,.0f}")
        else:
            logger.info("No regions with complete credit totals.")

        if self.test_mode:
            logger.info("🧪 Test Mode: Skipping file outputs.")
            return

        data_handler.save_outputs(summaries, f"{self.report_type}_{settings.SUMMARY_FILENAME_BASE}")
        data_handler.save_chart(self.figure, f"{self.report_type}_chart")
