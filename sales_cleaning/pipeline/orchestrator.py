#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Sales Pipeline Orchestrator

Workflow:
1. Clean: Read the raw sales CSV from data/00-raw/, clean it and write the
   cleaned export to data/01-staging/sales/
2. Summary: Aggregate the cleaned set, log KPIs and write one summary CSV per
   grouping plus a JSON cleaning report

Each step can be run independently with --step, or the full pipeline by
default. Paths come from pipeline.toml unless overridden on the command line.
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

from sales_cleaning.modules.lineage import DataLineage
from sales_cleaning.modules.sales.aggregate_sales import (
    TOP_PRODUCTS_LIMIT,
    Aggregates,
    aggregate,
)
from sales_cleaning.modules.sales.clean_records import (
    CleaningResult,
    clean,
    clean_rows,
)
from sales_cleaning.modules.sales.export_cleaned import write_cleaned_csv
from sales_cleaning.modules.sales.parse_lines import parse_lines
from sales_cleaning.modules.sales.records import (
    COL_AMOUNT,
    COL_FAMILY,
    COL_PRODUCT,
    COL_TIME_SLOT,
    SaleRecord,
)
from sales_cleaning.pipeline.validation import validate_header
from sales_cleaning.utils import ensure_dir
from sales_cleaning.utils.path_config import PathConfig

SOURCE_KEY = "sales"
PREVIEW_ROWS = 10
DROPOUT_ALERT_PCT = 5

TOP_PRODUCTS_FILENAME = "top_productos.csv"
BY_TIME_SLOT_FILENAME = "ventas_por_franja.csv"
BY_FAMILY_FILENAME = "ventas_por_familia.csv"
REPORT_FILENAME = "cleaning_report.json"

logger = logging.getLogger(__name__)


# === HELPER FUNCTIONS ===


def read_raw_text(filepath: Path) -> Optional[str]:
    """Read a raw CSV file with encoding fallback (utf-8, then latin1)."""
    if not filepath.exists():
        logger.error(f"Input file not found: {filepath}")
        return None

    for encoding in ["utf-8", "latin1"]:
        try:
            return filepath.read_text(encoding=encoding)
        except UnicodeDecodeError:
            logger.warning(f"Could not decode {filepath.name} as {encoding}")
            continue

    logger.error(f"Failed to read {filepath.name} with all encodings")
    return None


def log_preview(rows: List[Dict], title: str, limit: int = PREVIEW_ROWS) -> None:
    """Log the first rows of a table."""
    if not rows:
        logger.info(f"{title}: (empty)")
        return
    preview_df = pd.DataFrame(rows[:limit])
    logger.info(f"{title} (first {len(preview_df)} rows):\n{preview_df.to_string()}")


def log_kpis(aggregates: Aggregates) -> None:
    """Log the headline KPIs."""
    logger.info(f"Total sales: € {aggregates.total_revenue:.2f}")
    logger.info(f"Total units: {aggregates.total_units:g}")


def write_summary_csvs(aggregates: Aggregates, output_dir: Path) -> Dict[str, Path]:
    """Write one CSV per grouping (top products, time slot, family).

    Returns:
        Dict mapping summary name to written file path
    """
    ensure_dir(output_dir)

    tables = {
        "top_products": (
            TOP_PRODUCTS_FILENAME,
            pd.DataFrame(
                [
                    (product, round(total, 2))
                    for product, total in aggregates.top_products
                ],
                columns=[COL_PRODUCT, COL_AMOUNT],
            ),
        ),
        "by_time_slot": (
            BY_TIME_SLOT_FILENAME,
            pd.DataFrame(
                [
                    (slot.value, round(total, 2))
                    for slot, total in aggregates.by_time_slot.items()
                ],
                columns=[COL_TIME_SLOT, COL_AMOUNT],
            ),
        ),
        "by_family": (
            BY_FAMILY_FILENAME,
            pd.DataFrame(
                [
                    (family.value, round(total, 2))
                    for family, total in aggregates.by_family.items()
                ],
                columns=[COL_FAMILY, COL_AMOUNT],
            ),
        ),
    }

    paths = {}
    for name, (filename, df) in tables.items():
        filepath = output_dir / filename
        df.to_csv(filepath, index=False, encoding="utf-8")
        logger.info(f"Saved {name} summary to: {filepath} ({len(df)} rows)")
        paths[name] = filepath

    return paths


def create_cleaning_report(
    result: CleaningResult,
    aggregates: Aggregates,
    input_path: Path,
    output_dir: Path,
) -> Tuple[Dict, Path]:
    """Build and save the cleaning report (counts, rejections, KPIs).

    Returns:
        Tuple of (report dict, report file path)
    """
    dropped = result.count_before - result.count_after
    dropout_pct = dropped / result.count_before * 100 if result.count_before else 0

    report = {
        "timestamp": datetime.now().isoformat(),
        "input_file": str(input_path),
        "rows": {
            "before": result.count_before,
            "after": result.count_after,
            "dropped": dropped,
            "duplicates_removed": result.duplicates_removed,
            "dropout_pct": dropout_pct,
        },
        "rejections": {
            reason.value: count for reason, count in result.rejections.items()
        },
        "kpis": {
            "total_revenue": round(aggregates.total_revenue, 2),
            "total_units": aggregates.total_units,
        },
        "alerts": [],
    }

    if dropout_pct > DROPOUT_ALERT_PCT:
        report["alerts"].append(
            f"WARNING: {dropout_pct:.1f}% of rows dropped "
            f"({result.count_before} → {result.count_after})"
        )

    ensure_dir(output_dir)
    report_path = output_dir / REPORT_FILENAME
    with open(report_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False)

    logger.info(f"Report saved to: {report_path}")
    for alert in report["alerts"]:
        logger.warning(alert)

    return report, report_path


def _records_as_rows(records: List[SaleRecord]) -> List[Dict]:
    return [record.to_dict() for record in records]


# === PIPELINE STEPS ===


def step_clean(
    input_path: Path,
    output_path: Path,
    lineage: Optional[DataLineage] = None,
) -> Optional[CleaningResult]:
    """Clean the raw sales file and write the cleaned export.

    Returns:
        CleaningResult, or None if the input could not be read
    """
    logger.info("=" * 70)
    logger.info(f"STEP: Clean {input_path}")
    logger.info("=" * 70)

    raw_text = read_raw_text(input_path)
    if raw_text is None:
        return None

    header, rows = parse_lines(raw_text)
    validate_header(header)
    log_preview(rows, "Raw data")

    result = clean_rows(rows, lineage=lineage, source_file=input_path.name)
    logger.info(
        f"Rows before cleaning: {result.count_before} | "
        f"Rows after cleaning: {result.count_after}"
    )
    for reason, count in result.rejections.items():
        logger.info(f"  Rejected ({reason.value}): {count}")

    log_preview(_records_as_rows(result.records), "Cleaned data")
    write_cleaned_csv(result.records, output_path)
    return result


def step_summary(
    records: List[SaleRecord],
    output_dir: Path,
    top_n: int = TOP_PRODUCTS_LIMIT,
) -> Tuple[Aggregates, Dict[str, Path]]:
    """Aggregate cleaned records, log KPIs and write summary CSVs."""
    logger.info("=" * 70)
    logger.info("STEP: Summary")
    logger.info("=" * 70)

    aggregates = aggregate(records, top_n=top_n)
    log_kpis(aggregates)
    paths = write_summary_csvs(aggregates, output_dir)
    return aggregates, paths


def step_summary_from_export(
    cleaned_path: Path,
    output_dir: Path,
    top_n: int = TOP_PRODUCTS_LIMIT,
) -> bool:
    """Re-read a cleaned export and run the summary step on it."""
    raw_text = read_raw_text(cleaned_path)
    if raw_text is None:
        return False

    records, _, _ = clean(raw_text)
    step_summary(records, output_dir, top_n)
    return True


def run_pipeline(
    input_path: Path,
    output_dir: Path,
    output_filename: str = "ventas_clean.csv",
    top_n: int = TOP_PRODUCTS_LIMIT,
    track_lineage: bool = False,
) -> Optional[Dict[str, Path]]:
    """Run clean → summary → report.

    Args:
        input_path: Raw sales CSV
        output_dir: Directory for cleaned export, summaries and report
        output_filename: Name of the cleaned export file
        top_n: Number of products in the top-products summary
        track_lineage: Save a row-level lineage CSV next to the outputs

    Returns:
        Dict mapping output name to path, or None if the input was unreadable
    """
    logger.info("\n" + "=" * 70)
    logger.info("STARTING SALES PIPELINE")
    logger.info("=" * 70 + "\n")

    lineage = DataLineage(output_dir) if track_lineage else None
    cleaned_path = output_dir / output_filename

    result = step_clean(input_path, cleaned_path, lineage)
    if result is None:
        logger.error("Clean failed, aborting pipeline")
        return None

    aggregates, outputs = step_summary(result.records, output_dir, top_n)
    outputs["cleaned"] = cleaned_path

    _, outputs["report"] = create_cleaning_report(
        result, aggregates, input_path, output_dir
    )

    if lineage is not None:
        lineage_path = lineage.save()
        if lineage_path is not None:
            outputs["lineage"] = lineage_path
        logger.info(f"Lineage summary: {lineage.summary()}")

    logger.info("\n" + "=" * 70)
    logger.info("PIPELINE COMPLETED SUCCESSFULLY")
    logger.info("=" * 70 + "\n")
    return outputs


# === MAIN ===


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Sales Pipeline: Clean → Summary",
        epilog=(
            "Examples:\n"
            "  python -m sales_cleaning.pipeline.orchestrator\n"
            "  python -m sales_cleaning.pipeline.orchestrator "
            "--input ventas_raw.csv --output-dir out --lineage\n"
            "  python -m sales_cleaning.pipeline.orchestrator --step summary"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--step",
        choices=["clean", "summary"],
        help="Run a specific step only (summary reads the cleaned export)",
    )
    parser.add_argument("--input", type=Path, help="Raw sales CSV file")
    parser.add_argument(
        "--output-dir", type=Path, help="Directory for cleaned outputs"
    )
    parser.add_argument(
        "--top-n", type=int, help="Number of products in the top-products summary"
    )
    parser.add_argument(
        "--lineage",
        action="store_true",
        default=False,
        help="Save a row-level lineage CSV",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)-8s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    args = build_parser().parse_args(argv)

    output_filename = "ventas_clean.csv"
    top_n = TOP_PRODUCTS_LIMIT
    input_path = args.input
    output_dir = args.output_dir

    if input_path is None or output_dir is None or args.top_n is None:
        try:
            path_config = PathConfig()
        except FileNotFoundError as e:
            if input_path is None or output_dir is None:
                logger.error(f"{e}. Pass --input and --output-dir instead.")
                return 1
            path_config = None

        if path_config is not None:
            input_path = input_path or path_config.get_input_file(SOURCE_KEY)
            output_dir = output_dir or path_config.get_staging_output_dir(SOURCE_KEY)
            output_filename = path_config.get_output_filename(SOURCE_KEY)
            top_n = path_config.top_n

    if args.top_n is not None:
        top_n = args.top_n

    if args.step == "clean":
        lineage = DataLineage(output_dir) if args.lineage else None
        success = (
            step_clean(input_path, output_dir / output_filename, lineage) is not None
        )
        if success and lineage is not None:
            lineage.save()
    elif args.step == "summary":
        success = step_summary_from_export(
            output_dir / output_filename, output_dir, top_n
        )
    else:
        success = (
            run_pipeline(
                input_path,
                output_dir,
                output_filename=output_filename,
                top_n=top_n,
                track_lineage=args.lineage,
            )
            is not None
        )

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
