"""Tests for the command-line entry point and result panel."""

import pytest

from lotcalc import main as main_module
from lotcalc.calc.models import CalculationResult, Instrument, TradeSignal
from lotcalc.cli.result_panel import print_result
from lotcalc.errors import RateLookupFailed
from lotcalc.prefs.store import PreferenceStore


# ── Helpers ──────────────────────────────────────────────────────────────


class _FakeLookup:
    def __init__(self, rates=None, error=None):
        self._rates = rates or {}
        self._error = error
        self.calls: list[str] = []

    async def get_rates(self, currency):
        self.calls.append(currency)
        if self._error:
            raise self._error
        return self._rates


@pytest.fixture
def prefs_path(monkeypatch, tmp_path):
    path = tmp_path / "preferences.json"
    monkeypatch.setenv("PREFS_PATH", str(path))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    return path


@pytest.fixture
def fake_lookup(monkeypatch):
    lookup = _FakeLookup({"USD": 0.62})
    monkeypatch.setattr(main_module, "CoinbaseRateClient", lambda config: lookup)
    return lookup


# ── Result panel ─────────────────────────────────────────────────────────


class TestResultPanel:
    def test_print_result(self, capsys):
        result = CalculationResult(
            lot_size=0.5, amount_at_risk=100.0, position_size_units=50_000.0,
            standard_lots=0.5, mini_lots=5.0, micro_lots=50.0,
            account_currency="USD", pips=20.0,
        )
        signal = TradeSignal(Instrument("EUR", "USD"), 1.05, 1.048)
        output = print_result(result, signal)

        assert "EURUSD 1.05 → SL 1.048 (20 pips)" in output
        assert "Lot Size:        0.5" in output
        assert "Amount at Risk:  100 USD" in output
        assert "Position Units:  50,000" in output
        assert capsys.readouterr().out.strip() == output.strip()


# ── CLI ──────────────────────────────────────────────────────────────────


class TestRunCli:
    def test_one_shot_calculation(self, prefs_path, fake_lookup, capsys):
        code = main_module.run_cli([
            "--balance", "5000 USD",
            "--risk", "2",
            "--signal", "Buy NZDCAD 0.81250, SL 0.81050",
        ])
        assert code == 0
        out = capsys.readouterr().out
        assert "Lot Size:        0.8065" in out
        assert fake_lookup.calls == ["CAD"]
        # Risk is persisted on change, balance is not.
        stored = PreferenceStore(prefs_path).load()
        assert stored == {"accountBalance": None, "riskPercentage": "2"}

    def test_falls_back_to_stored_preferences(self, prefs_path, fake_lookup, capsys):
        store = PreferenceStore(prefs_path)
        store.save("accountBalance", "10000 USD")
        store.save("riskPercentage", "1")

        code = main_module.run_cli(["--signal", "Buy EURUSD 1.05000, SL 1.04800"])

        assert code == 0
        assert "Lot Size:        0.5" in capsys.readouterr().out
        assert fake_lookup.calls == []

    def test_parse_error_exit_code(self, prefs_path, fake_lookup, capsys):
        code = main_module.run_cli([
            "--balance", "5000", "--risk", "2", "--signal", "Buy NZDCAD 0.81250",
        ])
        assert code == 2
        assert "stop loss" in capsys.readouterr().err

    def test_rate_failure_exit_code(self, prefs_path, monkeypatch, capsys):
        lookup = _FakeLookup(error=RateLookupFailed())
        monkeypatch.setattr(main_module, "CoinbaseRateClient", lambda config: lookup)
        code = main_module.run_cli([
            "--balance", "5000 USD", "--risk", "2",
            "--signal", "Buy NZDCAD 0.81250, SL 0.81050",
        ])
        assert code == 1
        assert "conversion rates" in capsys.readouterr().err

    def test_reset_clears_preferences(self, prefs_path, fake_lookup):
        PreferenceStore(prefs_path).save("riskPercentage", "2")
        assert main_module.run_cli(["--reset"]) == 0
        assert not prefs_path.exists()

    def test_signal_required(self, prefs_path, fake_lookup):
        with pytest.raises(SystemExit) as excinfo:
            main_module.run_cli([])
        assert excinfo.value.code == 2

    def test_lowercase_log_level_accepted(self, prefs_path, fake_lookup, monkeypatch, capsys):
        monkeypatch.setenv("LOG_LEVEL", "info")
        code = main_module.run_cli([
            "--balance", "10000 USD", "--risk", "1",
            "--signal", "Buy EURUSD 1.05000, SL 1.04800",
        ])
        assert code == 0
        assert "Lot Size:        0.5" in capsys.readouterr().out
