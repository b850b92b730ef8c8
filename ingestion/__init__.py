"""Source and sink adapters for flow design tables."""

import logging
from dataclasses import dataclass, field
from typing import Dict

logger = logging.getLogger("ingestion")
if not logger.handlers:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@dataclass
class RunMetrics:
    """Track row statistics for a single report run."""

    rows_read: int = 0
    rows_processed: int = 0
    rows_skipped: int = 0
    extra: Dict[str, int] = field(default_factory=dict)

    def add_rows(self, count: int) -> None:
        self.rows_read += count
        logger.debug("Added %s source rows; total=%s", count, self.rows_read)

    def add_processed(self, count: int) -> None:
        self.rows_processed += count
        logger.debug("Added %s result rows; total=%s", count, self.rows_processed)

    def add_skipped(self, count: int) -> None:
        self.rows_skipped += count
        logger.debug("Added %s skipped rows; total=%s", count, self.rows_skipped)

    def increment_extra(self, key: str, count: int = 1) -> None:
        self.extra[key] = self.extra.get(key, 0) + count
        logger.debug("Incremented %s metric by %s; total=%s", key, count, self.extra[key])


__all__ = ["RunMetrics", "logger"]
