"""
Utility functions for SplitLedger application
"""
from __future__ import annotations
import calendar
import os
from datetime import date, datetime
from typing import Tuple

from errors import DataError


def parse_date(s: str, record_id: str = "") -> date:
    """Parse YYYY-MM-DD date string, raising DataError if it is not one"""
    try:
        return datetime.strptime(str(s).strip(), "%Y-%m-%d").date()
    except ValueError as ex:
        raise DataError(f"Invalid date {s!r}: expected YYYY-MM-DD", record_id) from ex


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move (year, month) by delta months, rolling over year boundaries"""
    idx = year * 12 + (month - 1) + delta
    return idx // 12, idx % 12 + 1


def month_end(year: int, month: int) -> date:
    """Last calendar day of the month"""
    return date(year, month, calendar.monthrange(year, month)[1])


def app_dir() -> str:
    """
    Get application data directory: ~/Library/Application Support/SplitLedger
    Creates directory if it doesn't exist.
    """
    base = os.path.expanduser("~/Library/Application Support")
    path = os.path.join(base, "SplitLedger")
    os.makedirs(path, exist_ok=True)
    return path
