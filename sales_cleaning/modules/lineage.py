# -*- coding: utf-8 -*-
"""Audit trail of what cleaning did to each raw sales row.

One entry per data row: kept (with its position in the cleaned set), dropped as
a duplicate of an earlier row, or rejected with the first rule it failed.
"""

import csv
import logging
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

STATUS_SUCCESS = "success"
STATUS_DUPLICATE = "duplicate"
REJECTED_PREFIX = "rejected"

LINEAGE_FIELDS = [
    "source_file",
    "source_row",
    "output_row",
    "operation",
    "status",
    "timestamp",
]


def rejected_status(reason: str) -> str:
    """Build the status string for a rejected row."""
    return f"{REJECTED_PREFIX}: {reason}"


class DataLineage:
    """Collects per-row outcomes and writes them to lineage_<timestamp>.csv."""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.entries: List[Dict] = []
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    def track(
        self,
        source_file: str,
        source_row: int,
        output_row: Optional[int],
        operation: str,
        status: str,
    ) -> None:
        """Record the outcome of raw row ``source_row``.

        ``output_row`` is None for rejected and duplicate rows and is written
        as REJECTED. ``status`` is one of STATUS_SUCCESS, STATUS_DUPLICATE or
        a rejected_status() string.
        """
        self.entries.append(
            {
                "source_file": source_file,
                "source_row": source_row,
                "output_row": output_row if output_row is not None else "REJECTED",
                "operation": operation,
                "status": status,
                "timestamp": datetime.now().isoformat(),
            }
        )

    def save(self) -> Optional[Path]:
        """Write the entries as CSV; returns the path, or None if empty."""
        if not self.entries:
            logger.warning("Lineage is empty, nothing written")
            return None

        path = self.output_dir / f"lineage_{self.timestamp}.csv"

        try:
            with open(path, "w", newline="", encoding="utf-8") as f:
                writer = csv.DictWriter(f, fieldnames=LINEAGE_FIELDS)
                writer.writeheader()
                writer.writerows(self.entries)
        except OSError as e:
            logger.error(f"Could not write lineage file {path}: {e}")
            raise

        logger.info(f"Lineage: {len(self.entries)} rows -> {path}")
        return path

    def summary(self) -> Dict:
        """Counts per outcome plus the percentage of rows kept."""
        statuses = Counter(entry["status"] for entry in self.entries)
        total = len(self.entries)
        success = statuses[STATUS_SUCCESS]
        duplicate = statuses[STATUS_DUPLICATE]

        return {
            "total": total,
            "success": success,
            "rejected": total - success - duplicate,
            "duplicate": duplicate,
            "success_rate": (success / total * 100) if total > 0 else 0,
        }
