# -*- coding: utf-8 -*-
"""Split raw comma-separated sales text into a header and raw rows.

Splitting is purely comma-delimited: quoted fields and escaped commas are NOT
supported. A product name such as "arroz, pollo" is split into two fields.
The cleaned export uses the same format, so values containing commas do not
round-trip either.
"""

import logging
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

RawRow = Dict[str, Optional[str]]


def split_fields(line: str) -> List[str]:
    """Split one line on commas and trim each value."""
    return [value.strip() for value in line.split(",")]


def parse_lines(raw_text: str) -> Tuple[List[str], List[RawRow]]:
    """Parse raw text into header names and one raw row per data line.

    The whole text is trimmed before splitting, so trailing blank lines never
    produce rows. Lines shorter than the header map the missing names to None;
    extra values beyond the header are ignored.

    Args:
        raw_text: Comma-separated text, first line is the header

    Returns:
        Tuple of (header names, raw rows)
    """
    text = raw_text.strip()
    if not text:
        return [], []

    lines = text.split("\n")
    header = split_fields(lines[0])

    rows: List[RawRow] = []
    for line in lines[1:]:
        values = split_fields(line)
        rows.append(
            {
                name: values[i] if i < len(values) else None
                for i, name in enumerate(header)
            }
        )

    logger.debug(f"Parsed {len(rows)} rows with {len(header)} columns")
    return header, rows
