# -*- coding: utf-8 -*-
"""Clean raw sales rows into a deduplicated set of records.

Module: sales
Input: raw comma-separated text (fecha, producto, franja, familia, unidades,
precio_unitario[, importe])
Output: ordered list of SaleRecord plus before/after row counts

This module:
1. Parses the raw text into one mapping per line
2. Validates and normalizes each row (date, product, slot, family, numbers)
3. Recomputes the amount from units and unit price (importe is never trusted)
4. Drops exact duplicates, keeping the first occurrence

Bad rows are dropped, never repaired, and never raise: the only visible
signal is the difference between the before and after counts.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from sales_cleaning.modules.lineage import (
    STATUS_DUPLICATE,
    STATUS_SUCCESS,
    DataLineage,
    rejected_status,
)
from sales_cleaning.modules.sales.parse_lines import RawRow, parse_lines
from sales_cleaning.modules.sales.records import (
    COL_DATE,
    COL_FAMILY,
    COL_PRODUCT,
    COL_TIME_SLOT,
    COL_UNIT_PRICE,
    COL_UNITS,
    Family,
    NormalizeOutcome,
    Rejection,
    RejectionReason,
    SaleRecord,
    TimeSlot,
)
from sales_cleaning.utils.data_cleaning import (
    clean_text,
    coerce_number,
    is_positive_number,
    parse_date,
    round_half_up,
)

logger = logging.getLogger(__name__)

OPERATION_NAME = "clean_sales"

BREAKFAST_MARKER = "desa"

# Checked in order; the first marker found in the lowercased value wins.
FAMILY_MARKERS = [
    ("beb", Family.DRINK),
    ("entra", Family.STARTER),
    ("prin", Family.MAIN),
    ("post", Family.DESSERT),
]


@dataclass
class CleaningResult:
    """Cleaned set plus the counts a report needs."""

    records: List[SaleRecord]
    count_before: int
    rejections: Counter = field(default_factory=Counter)
    duplicates_removed: int = 0

    @property
    def count_after(self) -> int:
        return len(self.records)


def classify_time_slot(raw_value: Optional[str]) -> TimeSlot:
    """Map a raw franja value to a time slot.

    Anything without the breakfast marker (including empty or garbage
    values) falls into LUNCH. There is no rejection path for this field.
    """
    if BREAKFAST_MARKER in clean_text(raw_value).lower():
        return TimeSlot.BREAKFAST
    return TimeSlot.LUNCH


def classify_family(raw_value: Optional[str]) -> Optional[Family]:
    """Map a raw familia value to a family, or None if no marker matches."""
    lowered = clean_text(raw_value).lower()
    for marker, family in FAMILY_MARKERS:
        if marker in lowered:
            return family
    return None


def normalize_row(raw: RawRow) -> NormalizeOutcome:
    """Validate one raw row and build a record from it.

    Rules run in order and the first failure rejects the row:
    date, product, time slot (never fails), family, units, unit price.
    The input mapping is not modified.

    Args:
        raw: Mapping of header name to raw cell value

    Returns:
        SaleRecord on success, Rejection otherwise
    """
    sale_date = parse_date(raw.get(COL_DATE))
    if sale_date is None:
        return Rejection(RejectionReason.INVALID_DATE, f"{raw.get(COL_DATE)!r}")

    product = clean_text(raw.get(COL_PRODUCT)).lower()
    if not product:
        return Rejection(RejectionReason.MISSING_PRODUCT)

    time_slot = classify_time_slot(raw.get(COL_TIME_SLOT))

    family = classify_family(raw.get(COL_FAMILY))
    if family is None:
        return Rejection(RejectionReason.UNKNOWN_FAMILY, f"{raw.get(COL_FAMILY)!r}")

    units = coerce_number(raw.get(COL_UNITS))
    if not is_positive_number(units):
        return Rejection(RejectionReason.INVALID_UNITS, f"{raw.get(COL_UNITS)!r}")

    unit_price = coerce_number(raw.get(COL_UNIT_PRICE))
    if not is_positive_number(unit_price):
        return Rejection(
            RejectionReason.INVALID_PRICE, f"{raw.get(COL_UNIT_PRICE)!r}"
        )

    amount = units * unit_price
    if not math.isfinite(amount):
        return Rejection(
            RejectionReason.INVALID_PRICE,
            f"amount overflow: {units!r} x {unit_price!r}",
        )

    return SaleRecord(
        date=sale_date,
        product=product,
        time_slot=time_slot,
        family=family,
        units=units,
        unit_price=unit_price,
        amount=round_half_up(amount, 2),
    )


def deduplicate(records: Iterable[SaleRecord]) -> List[SaleRecord]:
    """Drop exact duplicates, keeping the first occurrence in order.

    Two records are duplicates only when all seven fields match, including
    the rounded amount.
    """
    seen = set()
    unique = []
    for record in records:
        key = record.canonical_key()
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique


def clean_rows(
    rows: List[RawRow],
    lineage: Optional[DataLineage] = None,
    source_file: str = "<text>",
) -> CleaningResult:
    """Normalize and deduplicate parsed rows.

    Args:
        rows: Raw rows from parse_lines
        lineage: Optional tracker; receives one entry per raw row
        source_file: Name recorded in lineage entries

    Returns:
        CleaningResult with the cleaned set and rejection counts
    """
    result = CleaningResult(records=[], count_before=len(rows))
    seen = set()

    for row_index, raw in enumerate(rows):
        outcome = normalize_row(raw)

        if isinstance(outcome, Rejection):
            result.rejections[outcome.reason] += 1
            logger.debug(
                f"Row {row_index} rejected: {outcome.reason.value} {outcome.detail}"
            )
            if lineage is not None:
                lineage.track(
                    source_file,
                    row_index,
                    None,
                    OPERATION_NAME,
                    rejected_status(outcome.reason.value),
                )
            continue

        key = outcome.canonical_key()
        if key in seen:
            result.duplicates_removed += 1
            logger.debug(f"Row {row_index} is a duplicate")
            if lineage is not None:
                lineage.track(
                    source_file, row_index, None, OPERATION_NAME, STATUS_DUPLICATE
                )
            continue

        seen.add(key)
        if lineage is not None:
            lineage.track(
                source_file,
                row_index,
                len(result.records),
                OPERATION_NAME,
                STATUS_SUCCESS,
            )
        result.records.append(outcome)

    logger.info(
        f"Cleaned {result.count_before} rows -> {result.count_after} "
        f"({sum(result.rejections.values())} rejected, "
        f"{result.duplicates_removed} duplicates)"
    )
    return result


def clean_with_report(
    raw_text: str,
    lineage: Optional[DataLineage] = None,
    source_file: str = "<text>",
) -> CleaningResult:
    """Parse and clean raw text, keeping rejection details."""
    _, rows = parse_lines(raw_text)
    return clean_rows(rows, lineage=lineage, source_file=source_file)


def clean(raw_text: str) -> Tuple[List[SaleRecord], int, int]:
    """Clean raw sales text.

    Args:
        raw_text: Comma-separated text, first line is the header

    Returns:
        Tuple of (cleaned records, rows before cleaning, rows after cleaning)
    """
    result = clean_with_report(raw_text)
    return result.records, result.count_before, result.count_after
