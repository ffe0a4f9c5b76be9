"""Sales record cleaning, deduplication and aggregation."""

from sales_cleaning.modules.sales.aggregate_sales import Aggregates, aggregate
from sales_cleaning.modules.sales.clean_records import (
    CleaningResult,
    clean,
    clean_rows,
    clean_with_report,
    deduplicate,
    normalize_row,
)
from sales_cleaning.modules.sales.export_cleaned import (
    serialize_records,
    write_cleaned_csv,
)
from sales_cleaning.modules.sales.parse_lines import parse_lines
from sales_cleaning.modules.sales.records import (
    Family,
    Rejection,
    RejectionReason,
    SaleRecord,
    TimeSlot,
)

__all__ = [
    "Aggregates",
    "CleaningResult",
    "Family",
    "Rejection",
    "RejectionReason",
    "SaleRecord",
    "TimeSlot",
    "aggregate",
    "clean",
    "clean_rows",
    "clean_with_report",
    "deduplicate",
    "normalize_row",
    "parse_lines",
    "serialize_records",
    "write_cleaned_csv",
]
