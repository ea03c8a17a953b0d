"""Calculation data models — typed representations of parsed inputs and results."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AccountBalance:
    """Account size and the currency it is denominated in."""

    amount: float
    currency: str  # uppercase 3-letter code


@dataclass(frozen=True)
class Instrument:
    """A currency pair, or gold quoted against a currency."""

    base_currency: str
    quote_currency: str

    @property
    def symbol(self) -> str:
        return f"{self.base_currency}{self.quote_currency}"


@dataclass(frozen=True)
class TradeSignal:
    """Trade parameters extracted from a free-text signal."""

    instrument: Instrument
    entry_price: float
    stop_loss: float
    explicit_pips: Optional[float] = None


@dataclass(frozen=True)
class RiskParameters:
    """Account balance plus the percentage of it to risk on one trade."""

    account_balance: AccountBalance
    risk_percent: float


@dataclass(frozen=True)
class CalculationResult:
    """Recommended position size for one signal."""

    lot_size: float
    amount_at_risk: float
    position_size_units: float
    standard_lots: float
    mini_lots: float
    micro_lots: float
    account_currency: str
    pips: float
