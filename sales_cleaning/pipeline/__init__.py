"""Pipeline orchestration module."""

from sales_cleaning.pipeline.orchestrator import (
    run_pipeline,
    step_clean,
    step_summary,
)

__all__ = [
    "run_pipeline",
    "step_clean",
    "step_summary",
]
