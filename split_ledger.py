"""
SplitLedger command line
- Record shared household expenses in a JSON ledger and settle them so that
  every participant ends up paying an equal share.
- Settlement periods are calendar months, or run from the day after a custom
  cutoff day to the cutoff day of the next month.

Run:
  split-ledger add --payer A --amount 1200 --category 食費
  split-ledger settle
  split-ledger settle --date 2024-03-15
  split-ledger analysis
  split-ledger export-excel report.xlsx

Dependencies:
  pip install openpyxl
"""
from __future__ import annotations

import argparse
import logging
import sys
import uuid
from dataclasses import replace
from datetime import date
from typing import List, Optional

from computations import compute_period_analysis, settle_period, sort_history
from config import default_ledger_path, load_ledger, save_ledger, validate_period_config
from csv_handler import export_expenses_to_csv, import_expenses_from_csv
from errors import DataError, LedgerError
from excel_export import export_excel
from models import ExpenseRecord, Ledger, SettlementPeriodConfig
from periods import current_period
from utils import parse_date

logger = logging.getLogger(__name__)


def _today(args) -> date:
    return parse_date(args.date) if args.date else date.today()


def _warn_unknown_categories(ledger: Ledger) -> None:
    known = set(ledger.categories)
    unknown = sorted({e.category for e in ledger.expenses if e.category not in known})
    if unknown:
        logger.warning("Expenses use categories outside the configured list: %s", ", ".join(unknown))


def cmd_settle(ledger: Ledger, args) -> int:
    res = settle_period(ledger, _today(args))
    print(f"Period: {res.period.key}")
    print(f"Total: {res.total:.2f}  Equal share: {res.equal_share:.2f}")
    for p in ledger.participants:
        print(f"  {p}: {res.balances[p]:+.2f}")
    if not res.transfers:
        print("No transfers needed.")
    for t in res.transfers:
        print(f"{t.from_person} -> {t.to_person}: {t.amount:.2f}")
    return 0


def cmd_analysis(ledger: Ledger, args) -> int:
    _warn_unknown_categories(ledger)
    for pa in compute_period_analysis(ledger.expenses, ledger.period_config):
        print(f"{pa.period_key}  total {pa.total_amount:.2f}")
        for cat, amt in pa.category_totals.items():
            print(f"  [{cat}] {amt:.2f} ({pa.category_share(cat):.1%})")
        for person, amt in pa.participant_totals.items():
            print(f"  {person}: {amt:.2f} ({pa.participant_share(person):.1%})")
    return 0


def cmd_history(ledger: Ledger, args) -> int:
    exps = ledger.expenses
    if not args.all:
        period = current_period(_today(args), ledger.period_config)
        exps = [e for e in exps if period.contains(parse_date(e.date, e.id))]
    for e in sort_history(exps):
        print(f"{e.date}  {e.payer}  {e.amount:.2f}  {e.category}  ({e.id})")
    return 0


def cmd_export_excel(ledger: Ledger, args) -> int:
    export_excel(ledger, args.path, _today(args))
    print(f"Exported: {args.path}")
    return 0


def _check_record(ledger: Ledger, e: ExpenseRecord) -> ExpenseRecord:
    """Reject dates, payers and categories the ledger cannot settle"""
    parse_date(e.date, e.id)
    if e.payer not in ledger.participants:
        raise DataError(f"Unknown payer {e.payer!r}, expected one of: {', '.join(ledger.participants)}", e.id)
    if e.category not in ledger.categories:
        raise DataError(f"Unknown category {e.category!r}, expected one of: {', '.join(ledger.categories)}", e.id)
    if e.amount <= 0:
        raise DataError(f"Amount must be positive, got {e.amount!r}", e.id)
    return e


def _find(ledger: Ledger, eid: str) -> int:
    for i, e in enumerate(ledger.expenses):
        if e.id == eid:
            return i
    raise DataError("No such expense", eid)


def cmd_add(ledger: Ledger, args) -> int:
    e = _check_record(ledger, ExpenseRecord(
        id=str(uuid.uuid4()),
        date=(args.date or date.today().isoformat()).strip(),
        payer=args.payer.strip(),
        amount=args.amount,
        category=args.category.strip(),
    ))
    ledger.expenses.append(e)
    save_ledger(ledger, args.ledger)
    print(f"Added {e.id}")
    return 0


def cmd_edit(ledger: Ledger, args) -> int:
    i = _find(ledger, args.id)
    changes = {k: getattr(args, k) for k in ("date", "payer", "amount", "category") if getattr(args, k) is not None}
    ledger.expenses[i] = _check_record(ledger, replace(ledger.expenses[i], **changes))
    save_ledger(ledger, args.ledger)
    print(f"Updated {args.id}")
    return 0


def cmd_delete(ledger: Ledger, args) -> int:
    del ledger.expenses[_find(ledger, args.id)]
    save_ledger(ledger, args.ledger)
    print(f"Deleted {args.id}")
    return 0


def cmd_export_csv(ledger: Ledger, args) -> int:
    export_expenses_to_csv(ledger.expenses, args.path)
    print(f"Exported {len(ledger.expenses)} expenses to {args.path}")
    return 0


def cmd_import_csv(ledger: Ledger, args) -> int:
    imported = import_expenses_from_csv(args.path)
    if args.replace:
        ledger.expenses = imported
    else:
        seen = {e.id for e in ledger.expenses}
        for e in imported:
            if e.id not in seen:
                seen.add(e.id)
                ledger.expenses.append(e)
    save_ledger(ledger, args.ledger)
    print(f"Ledger now holds {len(ledger.expenses)} expenses")
    return 0


def cmd_set_period(ledger: Ledger, args) -> int:
    if args.calendar:
        cfg = SettlementPeriodConfig(False, ledger.period_config.cutoff_day)
    else:
        cfg = SettlementPeriodConfig(True, args.cutoff)
    ledger.period_config = validate_period_config(cfg)
    save_ledger(ledger, args.ledger)
    print("Calendar months" if args.calendar else f"Custom periods, cutoff day {args.cutoff}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="split-ledger", description="Shared expense ledger")
    parser.add_argument("--ledger", default=None, help="ledger JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("settle", help="who pays whom for a period")
    p.add_argument("--date", help="any date inside the period (default: today)")
    p.set_defaults(func=cmd_settle)

    p = sub.add_parser("analysis", help="totals per period by category and payer")
    p.set_defaults(func=cmd_analysis)

    p = sub.add_parser("history", help="expenses, newest first")
    p.add_argument("--date", help="any date inside the period (default: today)")
    p.add_argument("--all", action="store_true", help="every period")
    p.set_defaults(func=cmd_history)

    p = sub.add_parser("add", help="record an expense")
    p.add_argument("--date", help="YYYY-MM-DD (default: today)")
    p.add_argument("--payer", required=True)
    p.add_argument("--amount", type=float, required=True)
    p.add_argument("--category", required=True)
    p.set_defaults(func=cmd_add)

    p = sub.add_parser("edit", help="change fields of an expense")
    p.add_argument("id")
    p.add_argument("--date")
    p.add_argument("--payer")
    p.add_argument("--amount", type=float)
    p.add_argument("--category")
    p.set_defaults(func=cmd_edit)

    p = sub.add_parser("delete", help="remove an expense")
    p.add_argument("id")
    p.set_defaults(func=cmd_delete)

    p = sub.add_parser("export-excel", help="write an Excel report")
    p.add_argument("path")
    p.add_argument("--date", help="any date inside the period (default: today)")
    p.set_defaults(func=cmd_export_excel)

    p = sub.add_parser("export-csv", help="write all expenses to CSV")
    p.add_argument("path")
    p.set_defaults(func=cmd_export_csv)

    p = sub.add_parser("import-csv", help="add expenses from CSV")
    p.add_argument("path")
    p.add_argument("--replace", action="store_true", help="replace instead of merge")
    p.set_defaults(func=cmd_import_csv)

    p = sub.add_parser("set-period", help="choose calendar months or a cutoff day")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--calendar", action="store_true")
    g.add_argument("--cutoff", type=int, metavar="DAY")
    p.set_defaults(func=cmd_set_period)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application"""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.ledger = args.ledger or default_ledger_path()
    try:
        ledger = load_ledger(args.ledger)
        return args.func(ledger, args)
    except (LedgerError, OSError) as ex:
        logger.error("%s", ex)
        return 1


if __name__ == "__main__":
    sys.exit(main())
