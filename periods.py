"""
Settlement period resolution for SplitLedger

A period is either the calendar month containing a date, or, with a custom
cutoff day, the span from the day after the cutoff in one month to the
cutoff in the next. Cutoff days are limited to 1..28 so every month has one.
"""
from __future__ import annotations
from datetime import date, timedelta
from typing import Union

from models import ExpenseRecord, Period, SettlementPeriodConfig
from utils import month_end, parse_date, shift_month


def resolve_period(reference: date, config: SettlementPeriodConfig) -> Period:
    """Return the settlement period that contains `reference`"""
    y, m = reference.year, reference.month
    if not config.use_custom_cutoff:
        return Period(date(y, m, 1), month_end(y, m))

    cutoff = config.cutoff_day
    if reference.day <= cutoff:
        py, pm = shift_month(y, m, -1)
        end = date(y, m, cutoff)
    else:
        py, pm = y, m
        ny, nm = shift_month(y, m, 1)
        end = date(ny, nm, cutoff)
    # day after the previous cutoff; Feb 28 + 1 is Mar 1 in common years
    start = date(py, pm, cutoff) + timedelta(days=1)
    return Period(start, end)


def current_period(today: Union[date, str], config: SettlementPeriodConfig) -> Period:
    """Period for the injected current date (a date or YYYY-MM-DD string)"""
    if isinstance(today, str):
        today = parse_date(today)
    return resolve_period(today, config)


def period_of_expense(e: ExpenseRecord, config: SettlementPeriodConfig) -> Period:
    """Period an expense belongs to, by its own date"""
    return resolve_period(parse_date(e.date, e.id), config)


def period_key(reference: date, config: SettlementPeriodConfig) -> str:
    return resolve_period(reference, config).key
