# -*- coding: utf-8 -*-
"""Header validation for raw sales CSV text.

Checks the parsed header against the expected column set before cleaning.
A missing column is logged, never fatal: the cleaner will simply reject the
affected rows.

Usage:
    from sales_cleaning.pipeline.validation import validate_header

    missing = validate_header(header)
"""

import logging
from typing import Dict, List

from sales_cleaning.modules.sales.records import (
    COL_AMOUNT,
    COL_DATE,
    COL_FAMILY,
    COL_PRODUCT,
    COL_TIME_SLOT,
    COL_UNIT_PRICE,
    COL_UNITS,
)

logger = logging.getLogger(__name__)


EXPECTED_SCHEMAS: Dict[str, Dict[str, List[str]]] = {
    "ventas": {
        "required_columns": [
            COL_DATE,
            COL_PRODUCT,
            COL_TIME_SLOT,
            COL_FAMILY,
            COL_UNITS,
            COL_UNIT_PRICE,
        ],
        "optional_columns": [COL_AMOUNT],
    },
}


def validate_header(header: List[str], schema_name: str = "ventas") -> List[str]:
    """Compare a parsed header against the expected schema.

    Args:
        header: Column names from the first line of the raw text.
        schema_name: Key into EXPECTED_SCHEMAS.

    Returns:
        Missing required columns (empty list if the header is complete).

    Raises:
        ValueError: If schema_name is not a recognized schema.
    """
    if schema_name not in EXPECTED_SCHEMAS:
        raise ValueError(f"Unknown schema: {schema_name}")

    schema = EXPECTED_SCHEMAS[schema_name]
    missing = [col for col in schema["required_columns"] if col not in header]

    if missing:
        logger.warning(f"Header missing required columns: {missing}")

    known = set(schema["required_columns"]) | set(schema.get("optional_columns", []))
    extra = [col for col in header if col and col not in known]
    if extra:
        logger.info(f"Ignoring unrecognized columns: {extra}")

    return missing
