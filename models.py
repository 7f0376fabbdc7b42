"""
Data models for SplitLedger application
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List


@dataclass(frozen=True)
class ExpenseRecord:
    """Single expense paid by one participant"""
    id: str
    date: str  # YYYY-MM-DD
    payer: str
    amount: float
    category: str


@dataclass(frozen=True)
class SettlementPeriodConfig:
    """How records are bucketed into settlement periods"""
    use_custom_cutoff: bool = False
    cutoff_day: int = 1  # 1..28, last day of a custom period


@dataclass(frozen=True)
class Period:
    """Settlement period with inclusive bounds"""
    start: date
    end: date

    @property
    def key(self) -> str:
        """Stable grouping key, sorts chronologically as a string"""
        return f"{self.start.isoformat()} ~ {self.end.isoformat()}"

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class Transfer:
    """Payment instruction from a debtor to a creditor"""
    from_person: str
    to_person: str
    amount: float


@dataclass
class PeriodAnalysis:
    """Spending breakdown for one settlement period"""
    period_key: str
    total_amount: float = 0.0
    category_totals: Dict[str, float] = field(default_factory=dict)
    participant_totals: Dict[str, float] = field(default_factory=dict)

    def category_share(self, category: str) -> float:
        return share_of_total(self.category_totals.get(category, 0.0), self.total_amount)

    def participant_share(self, person: str) -> float:
        return share_of_total(self.participant_totals.get(person, 0.0), self.total_amount)


@dataclass
class Ledger:
    """Complete ledger containing all data"""
    participants: List[str]
    categories: List[str]
    expenses: List[ExpenseRecord]
    period_config: SettlementPeriodConfig = field(default_factory=SettlementPeriodConfig)
    version: int = 1


def share_of_total(amount: float, total: float) -> float:
    """Fraction of total, 0.0 for an empty period"""
    if total == 0:
        return 0.0
    return amount / total


@dataclass
class SettlementResult:
    """Balances and transfers for one settlement period"""
    period: Period
    expenses: List[ExpenseRecord]
    total: float
    equal_share: float
    balances: Dict[str, float]
    transfers: List[Transfer]
