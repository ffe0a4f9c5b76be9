# -*- coding: utf-8 -*-
"""Render a cleaned record set back to comma-separated text.

The output has the same shape the parser reads, so a cleaned export can be
cleaned again. No quoting is applied: values containing commas break the
round trip, same as on input.
"""

import logging
from pathlib import Path
from typing import Sequence

from sales_cleaning.modules.sales.records import EXPORT_COLUMNS, SaleRecord

logger = logging.getLogger(__name__)


def serialize_records(records: Sequence[SaleRecord]) -> str:
    """Join a header line and one line per record.

    Returns an empty string for an empty set.
    """
    if not records:
        return ""

    lines = [",".join(EXPORT_COLUMNS)]
    lines.extend(",".join(record.to_export_values()) for record in records)
    return "\n".join(lines)


def write_cleaned_csv(records: Sequence[SaleRecord], output_path: Path) -> Path:
    """Write the serialized records to a UTF-8 file.

    Args:
        records: Cleaned records
        output_path: Destination file (parent directories are created)

    Returns:
        Path: output_path
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(serialize_records(records), encoding="utf-8")
    logger.info(f"Saved {len(records)} cleaned rows to: {output_path}")
    return output_path
