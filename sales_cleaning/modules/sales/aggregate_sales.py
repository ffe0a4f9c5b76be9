# -*- coding: utf-8 -*-
"""Summary metrics over a cleaned set of sales records.

Aggregates are recomputed from the records on every call; nothing is cached.
Category mappings keep categories in first-appearance order.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from sales_cleaning.modules.sales.records import (
    COL_AMOUNT,
    COL_FAMILY,
    COL_PRODUCT,
    COL_TIME_SLOT,
    COL_UNITS,
    Family,
    SaleRecord,
    TimeSlot,
)

logger = logging.getLogger(__name__)

TOP_PRODUCTS_LIMIT = 5


@dataclass(frozen=True)
class Aggregates:
    """Totals and per-category amount sums for a cleaned set."""

    total_revenue: float = 0.0
    total_units: float = 0.0
    by_product: Dict[str, float] = field(default_factory=dict)
    by_time_slot: Dict[TimeSlot, float] = field(default_factory=dict)
    by_family: Dict[Family, float] = field(default_factory=dict)
    top_products: List[Tuple[str, float]] = field(default_factory=list)


def records_to_dataframe(records: Sequence[SaleRecord]) -> pd.DataFrame:
    """Build a DataFrame with one row per record, enums as their labels."""
    return pd.DataFrame(
        {
            COL_PRODUCT: [r.product for r in records],
            COL_TIME_SLOT: [r.time_slot.value for r in records],
            COL_FAMILY: [r.family.value for r in records],
            COL_UNITS: [r.units for r in records],
            COL_AMOUNT: [r.amount for r in records],
        }
    )


def _sum_amount_by(df: pd.DataFrame, column: str) -> Dict[str, float]:
    """Sum amounts per category, categories in first-appearance order."""
    grouped = df.groupby(column, sort=False)[COL_AMOUNT].sum()
    return {key: float(value) for key, value in grouped.items()}


def top_products(
    by_product: Dict[str, float], limit: int = TOP_PRODUCTS_LIMIT
) -> List[Tuple[str, float]]:
    """Rank products by summed amount, descending.

    The sort is stable, so equal amounts keep first-appearance order.
    """
    ranked = sorted(by_product.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


def aggregate(
    records: Sequence[SaleRecord], top_n: int = TOP_PRODUCTS_LIMIT
) -> Aggregates:
    """Compute totals and groupings for a cleaned set.

    Args:
        records: Cleaned, deduplicated records
        top_n: Number of products to keep in top_products

    Returns:
        Aggregates (all zeros and empty mappings for an empty set)
    """
    if not records:
        return Aggregates()

    df = records_to_dataframe(records)
    by_product = _sum_amount_by(df, COL_PRODUCT)

    aggregates = Aggregates(
        total_revenue=float(df[COL_AMOUNT].sum()),
        total_units=float(df[COL_UNITS].sum()),
        by_product=by_product,
        by_time_slot={
            TimeSlot(label): total
            for label, total in _sum_amount_by(df, COL_TIME_SLOT).items()
        },
        by_family={
            Family(label): total
            for label, total in _sum_amount_by(df, COL_FAMILY).items()
        },
        top_products=top_products(by_product, top_n),
    )

    logger.debug(
        f"Aggregated {len(records)} records: revenue {aggregates.total_revenue:.2f}, "
        f"units {aggregates.total_units:g}"
    )
    return aggregates
