"""
Shared fixtures for SplitLedger tests.
"""

import pytest

from models import ExpenseRecord, Ledger, SettlementPeriodConfig


def _rec(rid, day, payer, amount, category="食費"):
    return ExpenseRecord(id=rid, date=day, payer=payer, amount=amount, category=category)


@pytest.fixture
def rec():
    """Factory for expense records: rec(id, date, payer, amount, category)."""
    return _rec


@pytest.fixture
def people():
    return ["A", "B", "C"]


@pytest.fixture
def ledger(people):
    """Expenses spread over February to April 2024, calendar-month periods."""
    return Ledger(
        participants=people,
        categories=["食費", "日用品", "光熱費"],
        expenses=[
            _rec("1", "2024-03-02", "A", 300.0),
            _rec("2", "2024-03-15", "B", 90.0, "日用品"),
            _rec("3", "2024-03-25", "C", 30.0, "光熱費"),
            _rec("4", "2024-02-10", "A", 60.0),
            _rec("5", "2024-04-01", "B", 45.0, "日用品"),
        ],
        period_config=SettlementPeriodConfig(),
    )
