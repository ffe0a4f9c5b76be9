# -*- coding: utf-8 -*-
"""Sales record types.

Defines the normalized record produced by the cleaner, the two categorical
enums it carries, and the rejection value returned for rows that fail a rule.
"""

import json
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, List, Union

from sales_cleaning.utils.data_cleaning import format_number

# Source column names (input header and cleaned export header)
COL_DATE = "fecha"
COL_PRODUCT = "producto"
COL_TIME_SLOT = "franja"
COL_FAMILY = "familia"
COL_UNITS = "unidades"
COL_UNIT_PRICE = "precio_unitario"
COL_AMOUNT = "importe"

EXPORT_COLUMNS: List[str] = [
    COL_DATE,
    COL_PRODUCT,
    COL_TIME_SLOT,
    COL_FAMILY,
    COL_UNITS,
    COL_UNIT_PRICE,
    COL_AMOUNT,
]


class TimeSlot(str, Enum):
    """Service slot a sale belongs to."""

    BREAKFAST = "Desayuno"
    LUNCH = "Comida"


class Family(str, Enum):
    """Menu family of the product sold."""

    DRINK = "Bebida"
    STARTER = "Entrante"
    MAIN = "Principal"
    DESSERT = "Postre"


class RejectionReason(str, Enum):
    """Why a raw row did not become a record."""

    INVALID_DATE = "InvalidDate"
    MISSING_PRODUCT = "MissingProduct"
    UNKNOWN_FAMILY = "UnknownFamily"
    INVALID_UNITS = "InvalidUnits"
    INVALID_PRICE = "InvalidPrice"


@dataclass(frozen=True)
class SaleRecord:
    """A single normalized, validated sales line."""

    date: date
    product: str  # lowercase, never empty
    time_slot: TimeSlot
    family: Family
    units: float  # > 0
    unit_price: float  # > 0
    amount: float  # units * unit_price, rounded to 2 decimals

    def to_export_values(self) -> List[str]:
        """Render fields as text, in EXPORT_COLUMNS order."""
        return [
            self.date.isoformat(),
            self.product,
            self.time_slot.value,
            self.family.value,
            format_number(self.units),
            format_number(self.unit_price),
            format_number(self.amount),
        ]

    def to_dict(self) -> Dict[str, str]:
        """Map export column names to rendered field values."""
        return dict(zip(EXPORT_COLUMNS, self.to_export_values()))

    def canonical_key(self) -> str:
        """Exact-match key over all seven fields, used for deduplication."""
        return json.dumps(
            [
                self.date.isoformat(),
                self.product,
                self.time_slot.value,
                self.family.value,
                self.units,
                self.unit_price,
                self.amount,
            ],
            ensure_ascii=False,
        )


@dataclass(frozen=True)
class Rejection:
    """A raw row that failed one of the normalization rules."""

    reason: RejectionReason
    detail: str = ""


NormalizeOutcome = Union[SaleRecord, Rejection]
