"""
Tests for ledger configuration, validation and JSON persistence.
"""

import json

import pytest

from config import (
    DEFAULT_CATEGORIES,
    DEFAULT_PARTICIPANTS,
    dict_to_ledger,
    get_default_ledger,
    ledger_to_dict,
    load_ledger,
    save_ledger,
    validate_participants,
    validate_period_config,
)
from errors import ConfigError, DataError
from models import SettlementPeriodConfig


class TestValidation:
    """Configuration is rejected when loaded, not when used."""

    @pytest.mark.parametrize("day", [1, 15, 28])
    def test_cutoff_in_range(self, day):
        cfg = SettlementPeriodConfig(True, day)
        assert validate_period_config(cfg) is cfg

    @pytest.mark.parametrize("day", [0, 29, 31, -1, "5", 2.5, True])
    def test_cutoff_out_of_range(self, day):
        with pytest.raises(ConfigError):
            validate_period_config(SettlementPeriodConfig(True, day))

    def test_flag_must_be_bool(self):
        with pytest.raises(ConfigError):
            validate_period_config(SettlementPeriodConfig("yes", 5))

    def test_participants(self):
        assert validate_participants(["A", "B"]) == ["A", "B"]

    @pytest.mark.parametrize("people", [[], ["A", "A"], ["A", ""], ["A", None]])
    def test_bad_participants(self, people):
        with pytest.raises(ConfigError):
            validate_participants(people)


class TestDefaults:
    def test_builtin_defaults(self, tmp_path):
        ledger = get_default_ledger(str(tmp_path))
        assert ledger.participants == DEFAULT_PARTICIPANTS
        assert ledger.categories == DEFAULT_CATEGORIES
        assert ledger.expenses == []
        assert ledger.period_config == SettlementPeriodConfig()

    def test_people_and_categories_files(self, tmp_path):
        (tmp_path / "people.json").write_text(json.dumps({"people": ["X", "Y"]}), encoding="utf-8")
        (tmp_path / "categories.json").write_text(json.dumps({"categories": ["rent"]}), encoding="utf-8")
        ledger = get_default_ledger(str(tmp_path))
        assert ledger.participants == ["X", "Y"]
        assert ledger.categories == ["rent"]


class TestSerialization:
    """Ledger <-> JSON document."""

    def test_round_trip_through_file(self, ledger, tmp_path):
        ledger.period_config = SettlementPeriodConfig(True, 20)
        path = str(tmp_path / "ledger.json")
        save_ledger(ledger, path)
        loaded = load_ledger(path)
        assert loaded == ledger

    def test_document_shape(self, ledger):
        d = ledger_to_dict(ledger)
        assert d["participants"] == ["A", "B", "C"]
        assert d["period_config"] == {"use_custom_cutoff": False, "cutoff_day": 1}
        assert d["expenses"][0] == {"id": "1", "date": "2024-03-02", "payer": "A", "amount": 300.0, "category": "食費"}

    def test_non_ascii_kept_readable(self, ledger, tmp_path):
        path = tmp_path / "ledger.json"
        save_ledger(ledger, str(path))
        assert "食費" in path.read_text(encoding="utf-8")

    def test_missing_file_gives_default(self, tmp_path):
        ledger = load_ledger(str(tmp_path / "nope.json"))
        assert ledger.participants == DEFAULT_PARTICIPANTS

    def test_bad_cutoff_rejected_on_load(self):
        with pytest.raises(ConfigError):
            dict_to_ledger({"participants": ["A"], "period_config": {"use_custom_cutoff": True, "cutoff_day": 30}})

    def test_empty_participants_rejected_on_load(self):
        with pytest.raises(ConfigError):
            dict_to_ledger({"participants": []})

    def test_malformed_expense(self):
        with pytest.raises(DataError) as excinfo:
            dict_to_ledger({"participants": ["A"], "expenses": [{"id": 7, "date": "2024-01-01", "payer": "A"}]})
        assert excinfo.value.record_id == "7"

    def test_numeric_ids_become_strings(self):
        ledger = dict_to_ledger({
            "participants": ["A"],
            "expenses": [{"id": 3, "date": "2024-01-01", "payer": "A", "amount": "12.5", "category": "x"}],
        })
        assert ledger.expenses[0].id == "3"
        assert ledger.expenses[0].amount == 12.5

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DataError, match="not valid JSON"):
            load_ledger(str(path))

    def test_document_must_be_object(self, tmp_path):
        path = tmp_path / "ledger.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(DataError, match="JSON object"):
            load_ledger(str(path))
