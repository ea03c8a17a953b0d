"""LotCalc — calculation session.

Holds the three user inputs, the single displayed result, and the wiring to
the preference store.  Parsing runs synchronously first; the only await is
the conversion-rate lookup inside ``size_position``.
"""

import logging
from typing import Optional

from lotcalc.calc.balance_parser import parse_account_balance
from lotcalc.calc.formatting import format_result
from lotcalc.calc.models import CalculationResult, RiskParameters, TradeSignal
from lotcalc.calc.pips import resolve_pips
from lotcalc.calc.position_sizer import size_position
from lotcalc.calc.signal_parser import parse_signal
from lotcalc.errors import InvalidRiskPercentage, RateLookupFailed
from lotcalc.prefs.store import (
    ACCOUNT_BALANCE_KEY,
    RISK_PERCENTAGE_KEY,
    PreferenceStore,
)
from lotcalc.rates.coinbase_client import RateLookup

logger = logging.getLogger("lotcalc")


def parse_risk_percentage(text: str) -> float:
    """Parse the risk field; must be a number in (0, 100]."""
    try:
        value = float(str(text).strip())
    except ValueError:
        raise InvalidRiskPercentage() from None
    if not 0 < value <= 100:
        raise InvalidRiskPercentage()
    return value


class Calculator:
    """One user's calculator state.

    Args:
        rate_lookup: Source of conversion rates (``CoinbaseRateClient`` or
            a test double).
        prefs: Optional preference store.  Without one nothing persists.
    """

    def __init__(
        self,
        rate_lookup: RateLookup,
        prefs: Optional[PreferenceStore] = None,
    ) -> None:
        self._rate_lookup = rate_lookup
        self._prefs = prefs
        self.account_balance_input: str = ""
        self.risk_percentage_input: str = ""
        self.signal_input: str = ""
        self.result: Optional[CalculationResult] = None
        self.last_signal: Optional[TradeSignal] = None

    # ── Preferences ──────────────────────────────────────────────────────

    def load_preferences(self) -> None:
        """Restore stored balance and risk inputs, if any."""
        if self._prefs is None:
            return
        stored = self._prefs.load()
        if stored[ACCOUNT_BALANCE_KEY]:
            self.account_balance_input = stored[ACCOUNT_BALANCE_KEY]
        if stored[RISK_PERCENTAGE_KEY]:
            self.risk_percentage_input = stored[RISK_PERCENTAGE_KEY]

    def set_account_balance(self, text: str) -> None:
        # Only read and cleared from the store, never written.
        self.account_balance_input = text

    def set_risk_percentage(self, text: str) -> None:
        self.risk_percentage_input = text
        if self._prefs is not None:
            self._prefs.save(RISK_PERCENTAGE_KEY, text)

    def set_signal(self, text: str) -> None:
        self.signal_input = text

    # ── Calculation ──────────────────────────────────────────────────────

    async def calculate(self, signal_text: Optional[str] = None) -> CalculationResult:
        """Parse the current inputs and size the position.

        On success the result replaces the previous one.  On any failure
        the previous result is left untouched.

        Raises:
            CalculatorError: Any parse, validation or rate-lookup failure.
        """
        if signal_text is not None:
            self.signal_input = signal_text

        signal = parse_signal(self.signal_input)
        pips = resolve_pips(signal)
        balance = parse_account_balance(self.account_balance_input)
        risk_pct = parse_risk_percentage(self.risk_percentage_input)

        try:
            result = await size_position(
                RiskParameters(account_balance=balance, risk_percent=risk_pct),
                signal.instrument,
                pips,
                self._rate_lookup,
            )
        except RateLookupFailed as exc:
            logger.error("Error fetching currency data: %s", exc)
            raise

        self.result = result
        self.last_signal = signal
        logger.info(
            "Sized %s: %.1f pips, risk %.2f %s → %.4f lots",
            signal.instrument.symbol, pips, result.amount_at_risk,
            result.account_currency, result.lot_size,
        )
        return result

    def reset(self) -> None:
        """Clear inputs, the displayed result, and stored preferences."""
        self.account_balance_input = ""
        self.risk_percentage_input = ""
        self.signal_input = ""
        self.result = None
        self.last_signal = None
        if self._prefs is not None:
            self._prefs.clear()

    def snapshot(self) -> dict:
        """Return inputs plus the display form of the current result."""
        return {
            "account_balance": self.account_balance_input,
            "risk_percentage": self.risk_percentage_input,
            "signal": self.signal_input,
            "result": format_result(self.result) if self.result else None,
        }
