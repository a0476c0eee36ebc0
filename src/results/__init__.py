"""Run summary validation, writing, and run ID generation."""

from src.results.schema import (
    build_summary,
    load_summary,
    validate_summary,
    write_results,
)
from src.results.run_id import generate_run_id

__all__ = [
    "build_summary",
    "generate_run_id",
    "load_summary",
    "validate_summary",
    "write_results",
]
