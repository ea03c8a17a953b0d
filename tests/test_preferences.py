"""Tests for lotcalc.prefs — JSON preference store."""

import json

import pytest

from lotcalc.prefs.store import (
    ACCOUNT_BALANCE_KEY,
    RISK_PERCENTAGE_KEY,
    PreferenceStore,
)


@pytest.fixture
def store(tmp_path):
    return PreferenceStore(tmp_path / "nested" / "preferences.json")


class TestPreferenceStore:
    def test_load_missing_file(self, store):
        assert store.load() == {ACCOUNT_BALANCE_KEY: None, RISK_PERCENTAGE_KEY: None}

    def test_save_creates_file(self, store):
        store.save(RISK_PERCENTAGE_KEY, "1.5")
        assert store.path.exists()
        assert store.load()[RISK_PERCENTAGE_KEY] == "1.5"

    def test_save_keeps_other_slot(self, store):
        store.save(ACCOUNT_BALANCE_KEY, "1000 USD")
        store.save(RISK_PERCENTAGE_KEY, "2")
        assert store.load() == {ACCOUNT_BALANCE_KEY: "1000 USD", RISK_PERCENTAGE_KEY: "2"}

    def test_unknown_key_rejected(self, store):
        with pytest.raises(ValueError, match="theme"):
            store.save("theme", "dark")

    def test_clear_removes_file(self, store):
        store.save(RISK_PERCENTAGE_KEY, "2")
        store.clear()
        assert not store.path.exists()
        assert store.load()[RISK_PERCENTAGE_KEY] is None

    def test_clear_keeps_foreign_keys(self, tmp_path):
        path = tmp_path / "preferences.json"
        path.write_text(json.dumps({"riskPercentage": "2", "other": 1}), encoding="utf-8")
        PreferenceStore(path).clear()
        assert json.loads(path.read_text(encoding="utf-8")) == {"other": 1}

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "preferences.json"
        path.write_text("{not json", encoding="utf-8")
        assert PreferenceStore(path).load()[ACCOUNT_BALANCE_KEY] is None

    def test_empty_string_treated_as_missing(self, tmp_path):
        path = tmp_path / "preferences.json"
        path.write_text(json.dumps({"accountBalance": ""}), encoding="utf-8")
        assert PreferenceStore(path).load()[ACCOUNT_BALANCE_KEY] is None
