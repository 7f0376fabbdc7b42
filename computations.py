"""
Business logic and computations for SplitLedger
"""
from __future__ import annotations
from datetime import date
from typing import Dict, Iterable, List, Optional, Union

from errors import ConfigError, DataError, InvariantError
from models import (
    ExpenseRecord,
    Ledger,
    Period,
    PeriodAnalysis,
    SettlementPeriodConfig,
    SettlementResult,
    Transfer,
)
from periods import current_period, period_of_expense
from utils import parse_date

EPS = 1e-6


def _tolerance(n: int, magnitude: float, eps: float) -> float:
    """Residue allowed after summing n values of the given magnitude"""
    return eps * max(1, n) * max(1.0, magnitude)


def filter_expenses_by_period(expenses: Iterable[ExpenseRecord], period: Period) -> List[ExpenseRecord]:
    """Filter expenses to those dated inside the period"""
    return [e for e in expenses if period.contains(parse_date(e.date, e.id))]


def sort_history(expenses: Iterable[ExpenseRecord]) -> List[ExpenseRecord]:
    """Newest first; records sharing a date keep their input order"""
    keyed = [(parse_date(e.date, e.id), e) for e in expenses]
    keyed.sort(key=lambda x: x[0], reverse=True)
    return [e for _, e in keyed]


def compute_balances(
    expenses: Iterable[ExpenseRecord],
    participants: List[str],
    eps: float = EPS,
) -> Dict[str, float]:
    """
    Compute each participant's surplus over an equal share.
    Positive -> should receive; negative -> should pay.
    """
    if not participants:
        raise ConfigError("At least one participant is required to split expenses")

    exps = list(expenses)
    total = sum(float(e.amount) for e in exps)
    equal_share = total / len(participants)

    paid = {p: 0.0 for p in participants}
    for e in exps:
        if e.payer not in paid:
            raise DataError(f"Payer {e.payer!r} must be a configured participant", e.id)
        paid[e.payer] += float(e.amount)

    balances = {p: paid[p] - equal_share for p in participants}
    residue = sum(balances.values())
    if abs(residue) > _tolerance(len(participants), total, eps):
        raise InvariantError(f"Balances sum to {residue!r}, expected 0")
    return balances


def compute_transfers(
    balances: Dict[str, float],
    participants: List[str],
    eps: float = EPS,
) -> List[Transfer]:
    """
    Compute transfers to settle debts.
    Single pass in participant order: each debtor pays every creditor it
    meets, in list order, until its deficit or their surplus runs out.
    The breakdown depends on participant order and is reproducible for it.
    """
    remaining = {p: float(balances.get(p, 0.0)) for p in participants}
    transfers = []
    for debtor in participants:
        for creditor in participants:
            if debtor == creditor:
                continue
            if remaining[debtor] < -eps and remaining[creditor] > eps:
                amt = min(-remaining[debtor], remaining[creditor])
                if amt > eps:
                    transfers.append(Transfer(debtor, creditor, amt))
                    remaining[debtor] += amt
                    remaining[creditor] -= amt

    magnitude = sum(abs(v) for v in balances.values())
    tol = _tolerance(len(participants), magnitude, eps)
    leftover = {p: v for p, v in remaining.items() if abs(v) > tol}
    if leftover:
        raise InvariantError(f"Settlement left unbalanced participants: {leftover!r}")
    return transfers


def apply_transfers(balances: Dict[str, float], transfers: Iterable[Transfer]) -> Dict[str, float]:
    """Balances after every transfer is paid; the input mapping is not modified"""
    out = dict(balances)
    for t in transfers:
        out[t.from_person] = out.get(t.from_person, 0.0) + t.amount
        out[t.to_person] = out.get(t.to_person, 0.0) - t.amount
    return out


def compute_period_analysis(
    expenses: Iterable[ExpenseRecord],
    config: SettlementPeriodConfig,
) -> List[PeriodAnalysis]:
    """
    Group every expense by its settlement period and total it by category
    and by payer. Newest period first.
    """
    by_period: Dict[str, PeriodAnalysis] = {}
    for e in expenses:
        key = period_of_expense(e, config).key
        pa = by_period.setdefault(key, PeriodAnalysis(period_key=key))
        amount = float(e.amount)
        pa.total_amount += amount
        pa.category_totals[e.category] = pa.category_totals.get(e.category, 0.0) + amount
        pa.participant_totals[e.payer] = pa.participant_totals.get(e.payer, 0.0) + amount

    return [by_period[k] for k in sorted(by_period, reverse=True)]


def settle_period(
    ledger: Ledger,
    today: Union[date, str],
    period: Optional[Period] = None,
    eps: float = EPS,
) -> SettlementResult:
    """
    Settle one period: `period` when given, otherwise the period containing
    `today`. The current date is injected, never read from a clock.
    """
    if period is None:
        period = current_period(today, ledger.period_config)
    exps = filter_expenses_by_period(ledger.expenses, period)
    balances = compute_balances(exps, ledger.participants, eps)
    transfers = compute_transfers(balances, ledger.participants, eps)
    total = sum(float(e.amount) for e in exps)
    return SettlementResult(
        period=period,
        expenses=exps,
        total=total,
        equal_share=total / len(ledger.participants),
        balances=balances,
        transfers=transfers,
    )
