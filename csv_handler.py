"""
CSV export and import functionality for SplitLedger
"""
from __future__ import annotations
import csv
import logging
from typing import List

from errors import DataError
from models import ExpenseRecord
from utils import parse_date

logger = logging.getLogger(__name__)

CSV_COLUMNS = ['id', 'date', 'payer', 'amount', 'category']


def export_expenses_to_csv(expenses: List[ExpenseRecord], filepath: str) -> None:
    """
    Export expenses list to CSV file
    CSV columns: id, date, payer, amount, category
    """
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow(CSV_COLUMNS)
        for e in expenses:
            writer.writerow([e.id, e.date, e.payer, e.amount, e.category])
    logger.info("Exported %d expenses to %s", len(expenses), filepath)


def import_expenses_from_csv(filepath: str) -> List[ExpenseRecord]:
    """
    Import expenses list from CSV file
    Rows with a missing column, a bad amount or a bad date raise DataError.
    """
    expenses = []

    with open(filepath, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        missing = [c for c in CSV_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise DataError(f"CSV {filepath} is missing columns: {', '.join(missing)}")

        for line_no, row in enumerate(reader, start=2):
            rid = (row['id'] or '').strip()
            try:
                amount = float(row['amount'])
            except (TypeError, ValueError) as ex:
                raise DataError(f"Line {line_no}: invalid amount {row['amount']!r}", rid) from ex
            # dates are kept as text but must parse
            parse_date(row['date'], rid)

            expenses.append(ExpenseRecord(
                id=rid,
                date=row['date'].strip(),
                payer=row['payer'].strip(),
                amount=amount,
                category=(row['category'] or '').strip(),
            ))

    logger.info("Imported %d expenses from %s", len(expenses), filepath)
    return expenses
