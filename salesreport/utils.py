"""Shared constants and small helpers for the sales report service."""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"

CSV_PATH = "internal/content/input_csv/*.csv"
ERROR_PATH = "internal/content/error_csv"
SUCCESS_PATH = "internal/content/processed_csv"
LOGS_PATH = "internal/logs"

CRON_JOB_SCHEDULER = "* * * * *"
REFRESH_INTERVAL_SECONDS = 60

_DATE_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}")


def total_amount(
    quantity_sold: int,
    unit_price: float,
    shipping_cost: float,
    discount: float,
) -> float:
    """Order total with each money value truncated toward zero to a whole unit."""
    return float(quantity_sold * int(unit_price) - int(discount) + int(shipping_cost))


def move_file(file_path: str | os.PathLike[str], target_dir: str | os.PathLike[str]) -> Path:
    """Move a file into ``target_dir``, keeping its name; return the new path."""
    source = Path(file_path)
    destination = Path(target_dir) / source.name
    try:
        os.rename(source, destination)
    except OSError as exc:
        logger.error("error moving file %s to %s: %s", source, target_dir, exc)
        raise
    logger.info("moved file %s to %s", source, target_dir)
    return destination


def parse_date(value: str) -> datetime:
    """Parse a strict ``YYYY-MM-DD`` date into a midnight datetime."""
    if not isinstance(value, str) or not _DATE_SHAPE.fullmatch(value):
        raise ValueError(f"cannot parse {value!r} as a date in YYYY-MM-DD form")
    try:
        return datetime.strptime(value, DATE_FORMAT)
    except ValueError as exc:
        raise ValueError(f"cannot parse {value!r} as a date: {exc}") from exc