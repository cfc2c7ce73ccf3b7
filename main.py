import logging
import sys

from offset_charts import settings
from offset_charts.errors import LoaderError
from offset_charts.logger import setup_logger
from offset_charts.pipelines.contributors import RegionContributorsPipeline
from offset_charts.pipelines.totals import RegionTotalsPipeline

logger = logging.getLogger(__name__)

# --- Pipeline Registry ---
# Each entry renders one chart from the same workbook.
PIPELINE_REGISTRY = [
    RegionTotalsPipeline,
    RegionContributorsPipeline,
]


def run_process(test_mode: bool = False) -> int:
    """Main orchestration function: builds every registered chart from the source workbook."""
    setup_logger(
        log_level=settings.LOG_LEVEL,
        log_file=settings.LOG_DIR / settings.LOG_FILENAME,
    )
    source = settings.INPUT_DIR / settings.DATA_FILENAME
    logger.info("--- Starting Offset Region Charts ---")
    logger.info(f"Source workbook: {source} [{settings.SHEET_NAME}]")

    for pipeline_cls in PIPELINE_REGISTRY:
        pipeline = pipeline_cls(source_path=source, test_mode=test_mode)
        try:
            pipeline.run()
        except LoaderError:
            logger.error("❌ Aborting: the source workbook could not be loaded.")
            return 1

    logger.info("\n--- Process Finished Successfully ---")
    return 0


if __name__ == "__main__":
    sys.exit(run_process())
