"""
Configuration and data loading/saving for SplitLedger
"""
from __future__ import annotations
import json
import logging
import os
from typing import List, Optional
from dataclasses import asdict

from errors import ConfigError, DataError
from models import ExpenseRecord, Ledger, SettlementPeriodConfig
from utils import app_dir

logger = logging.getLogger(__name__)

DEFAULT_PARTICIPANTS = ["のり", "ばん", "きお"]
DEFAULT_CATEGORIES = ["食費", "日用品", "洗濯", "光熱費", "その他"]
MIN_CUTOFF_DAY = 1
MAX_CUTOFF_DAY = 28


def load_people(path: str) -> List[str]:
    """Load people list from JSON file"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return list(data.get("people", []))
    except FileNotFoundError:
        return []


def load_categories(path: str) -> List[str]:
    """Load category list from JSON file"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return list(data.get("categories", []))
    except FileNotFoundError:
        return []


def validate_participants(participants: List[str]) -> List[str]:
    """Participants must be a non-empty list of distinct names"""
    if not participants:
        raise ConfigError("Participant list is empty")
    seen = set()
    for p in participants:
        if not isinstance(p, str) or not p.strip():
            raise ConfigError(f"Invalid participant name: {p!r}")
        if p in seen:
            raise ConfigError(f"Duplicate participant: {p!r}")
        seen.add(p)
    return list(participants)


def validate_period_config(cfg: SettlementPeriodConfig) -> SettlementPeriodConfig:
    """Reject cutoff days that some month does not have"""
    if not isinstance(cfg.use_custom_cutoff, bool):
        raise ConfigError(f"use_custom_cutoff must be true or false, got {cfg.use_custom_cutoff!r}")
    day = cfg.cutoff_day
    if isinstance(day, bool) or not isinstance(day, int) or not MIN_CUTOFF_DAY <= day <= MAX_CUTOFF_DAY:
        raise ConfigError(f"cutoff_day must be an integer in {MIN_CUTOFF_DAY}..{MAX_CUTOFF_DAY}, got {day!r}")
    return cfg


def get_default_ledger(base: Optional[str] = None) -> Ledger:
    """Create default ledger with loaded people and categories"""
    base = base or app_dir()
    people = load_people(os.path.join(base, "people.json"))
    categories = load_categories(os.path.join(base, "categories.json"))

    if not people:
        people = list(DEFAULT_PARTICIPANTS)
    if not categories:
        categories = list(DEFAULT_CATEGORIES)

    return Ledger(
        participants=validate_participants(people),
        categories=categories,
        expenses=[],
    )


def default_ledger_path() -> str:
    return os.path.join(app_dir(), "ledger.json")


def ledger_to_dict(ledger: Ledger) -> dict:
    """Convert Ledger object to dictionary for JSON serialization"""
    return {
        "version": ledger.version,
        "participants": ledger.participants,
        "categories": ledger.categories,
        "period_config": asdict(ledger.period_config),
        "expenses": [asdict(e) for e in ledger.expenses],
    }


def dict_to_ledger(d: dict) -> Ledger:
    """Convert dictionary from JSON to Ledger object"""
    pc = d.get("period_config", {}) or {}
    period_config = validate_period_config(SettlementPeriodConfig(
        use_custom_cutoff=pc.get("use_custom_cutoff", False),
        cutoff_day=pc.get("cutoff_day", 1),
    ))

    exps = []
    for i, e in enumerate(d.get("expenses", [])):
        try:
            exps.append(ExpenseRecord(
                id=str(e["id"]),
                date=e["date"],
                payer=e["payer"],
                amount=float(e["amount"]),
                category=e.get("category", ""),
            ))
        except (KeyError, TypeError, ValueError) as ex:
            rid = str(e.get("id", "")) if isinstance(e, dict) else ""
            raise DataError(f"Malformed expense entry #{i}: {ex}", rid) from ex

    return Ledger(
        version=d.get("version", 1),
        participants=validate_participants(list(d.get("participants", []))),
        categories=list(d.get("categories", [])) or list(DEFAULT_CATEGORIES),
        expenses=exps,
        period_config=period_config,
    )


def load_ledger(path: str) -> Ledger:
    """Open ledger JSON, or a default ledger if the file does not exist yet"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            d = json.load(f)
    except FileNotFoundError:
        logger.info("No ledger at %s, starting a new one", path)
        return get_default_ledger(os.path.dirname(path) or ".")
    except json.JSONDecodeError as ex:
        raise DataError(f"Ledger {path} is not valid JSON: {ex}") from ex
    if not isinstance(d, dict):
        raise DataError(f"Ledger {path} must hold a JSON object, got {type(d).__name__}")
    ledger = dict_to_ledger(d)
    logger.debug("Loaded %d expenses from %s", len(ledger.expenses), path)
    return ledger


def save_ledger(ledger: Ledger, path: str) -> None:
    """Save ledger to JSON file"""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(ledger_to_dict(ledger), f, ensure_ascii=False, indent=2)
    logger.info("Saved %d expenses to %s", len(ledger.expenses), path)
