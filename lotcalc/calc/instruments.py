"""Instrument classification shared by pip distance and pip value math.

Gold and JPY pairs are special-cased once here so the pip unit used to
measure the stop distance and the per-pip value used for sizing can never
drift apart.
"""

from enum import Enum

from lotcalc.calc.models import Instrument


GOLD = "XAU"
JPY = "JPY"

# Codes used to rank instrument candidates while parsing.  Anything outside
# this set is still accepted as a fallback.
KNOWN_CURRENCIES: frozenset[str] = frozenset({
    "AUD", "BRL", "CAD", "CHF", "CNH", "CNY", "CZK", "DKK", "EUR", "GBP",
    "HKD", "HUF", "ILS", "INR", "JPY", "KRW", "MXN", "NOK", "NZD", "PLN",
    "RUB", "SEK", "SGD", "THB", "TRY", "USD", "XAG", "XAU", "ZAR",
})


class InstrumentClass(str, Enum):
    GOLD = "gold"
    JPY_QUOTE = "jpy_quote"
    JPY_BASE = "jpy_base"
    STANDARD = "standard"


# Price increment of one pip, which is also the per-unit pip value in the
# quote currency.
_PIP_UNITS: dict[InstrumentClass, float] = {
    InstrumentClass.GOLD: 0.01,
    InstrumentClass.JPY_QUOTE: 0.01,
    InstrumentClass.JPY_BASE: 0.000001,
    InstrumentClass.STANDARD: 0.0001,
}

GOLD_CONTRACT_SIZE = 100  # ounces per standard lot
FOREX_CONTRACT_SIZE = 100_000  # base units per standard lot


def classify_instrument(instrument: Instrument) -> InstrumentClass:
    """Classify *instrument*; the first matching rule wins.

    1. gold on either side
    2. JPY as quote currency
    3. JPY as base currency
    4. everything else
    """
    if GOLD in (instrument.base_currency, instrument.quote_currency):
        return InstrumentClass.GOLD
    if instrument.quote_currency == JPY:
        return InstrumentClass.JPY_QUOTE
    if instrument.base_currency == JPY:
        return InstrumentClass.JPY_BASE
    return InstrumentClass.STANDARD


def pip_unit(instrument: Instrument) -> float:
    """Return the price increment that counts as one pip."""
    return _PIP_UNITS[classify_instrument(instrument)]


def pip_value_quote(instrument: Instrument) -> float:
    """Return the value of one pip per unit, in the quote currency."""
    return _PIP_UNITS[classify_instrument(instrument)]


def contract_size(instrument: Instrument) -> int:
    """Return the number of units in one standard lot."""
    if classify_instrument(instrument) is InstrumentClass.GOLD:
        return GOLD_CONTRACT_SIZE
    return FOREX_CONTRACT_SIZE
