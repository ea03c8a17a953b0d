"""Trading signal parsing — pure, no I/O.

Signals arrive as human-written shorthand, for example::

    Buy EURUSD 1.05000, SL 1.04800
    EURUSD Buy Now Enter 1.05000 / SL: 1.04800 (20 pips)
    GBPUSD Entry (sell limit): 1.27000  Stop Loss 1.27200
    Long XAUUSD Entry: 2000.50  SL 1995.50

Rather than a grammar, each field has its own matcher that scans the whole
text independently and returns ``None`` when it finds nothing.
``parse_signal`` runs them in order and raises on the first missing field.

Keyword matching is deliberately loose.  Instrument matching is not: a
wrong pair corrupts every downstream number, so only 3+3 letter tokens are
accepted.
"""

import logging
import re
from typing import Optional

from lotcalc.calc.instruments import KNOWN_CURRENCIES
from lotcalc.calc.models import Instrument, TradeSignal
from lotcalc.errors import InvalidEntryPrice, InvalidInstrument, InvalidStopLoss

logger = logging.getLogger("lotcalc")

_NUMBER = r"(\d+(?:\.\d*)?)"

# Zero-width so that overlapping candidates are all reported:
# "Buy EUR USD" yields both "Buy EUR" and "EUR USD".
_INSTRUMENT_RE = re.compile(
    r"(?=(?<![A-Za-z])([A-Za-z]{3})([ /_-]?)([A-Za-z]{3})(?![A-Za-z]))"
)

_ENTRY_RE = re.compile(
    r"\b(?:Enter(?:ed)?(?:\s+(?:at|now))?"
    r"|Entry(?:\s*\((?:sell|buy)\s*limit\))?"
    r"|Buy|Sell|Long|Short)[\s:@]*" + _NUMBER
    + r"|\b(?:Buy|Sell|Long|Short)\s+[A-Za-z]{3}[/_]?[A-Za-z]{3}\s+" + _NUMBER,
    re.IGNORECASE,
)

_STOP_LOSS_PREFIX = r"\b(?:SL|Stop\s*Loss)[\s:@]*"

_STOP_LOSS_RE = re.compile(_STOP_LOSS_PREFIX + _NUMBER, re.IGNORECASE)

_EXPLICIT_PIPS_RE = re.compile(
    _STOP_LOSS_PREFIX + r"\d+(?:\.\d*)?\s*\(\s*(\d+(?:\.\d+)?)\s*(?:pips?)?\s*\)",
    re.IGNORECASE,
)


# ── Matchers ─────────────────────────────────────────────────────────────


def match_instrument(text: str) -> Optional[Instrument]:
    """Find the traded pair, e.g. ``EURUSD``, ``eur/usd`` or ``XAU USD``.

    When several 3+3 candidates appear, the first one made of two known
    currency codes wins.  Failing that, the first contiguous or ``/ _ -``
    joined token beats space-joined words, so ``"Buy now BTCUSD"`` yields
    ``BTC/USD`` rather than ``BUY/NOW``.
    """
    candidates = [
        (Instrument(base.upper(), quote.upper()), separator)
        for base, separator, quote in _INSTRUMENT_RE.findall(text)
    ]
    if not candidates:
        return None
    for candidate, _ in candidates:
        if (
            candidate.base_currency in KNOWN_CURRENCIES
            and candidate.quote_currency in KNOWN_CURRENCIES
        ):
            return candidate
    for candidate, separator in candidates:
        if separator != " ":
            return candidate
    return candidates[0][0]


def match_entry_price(text: str) -> Optional[float]:
    """Find the entry price following an action or entry keyword."""
    match = _ENTRY_RE.search(text)
    if match is None:
        return None
    return float(match.group(1) or match.group(2))


def match_stop_loss(text: str) -> Optional[float]:
    """Find the price following ``SL`` or ``Stop Loss``."""
    match = _STOP_LOSS_RE.search(text)
    if match is None:
        return None
    return float(match.group(1))


def match_explicit_pips(text: str) -> Optional[float]:
    """Find a pip count annotated after the stop loss, e.g. ``(20 pips)``."""
    match = _EXPLICIT_PIPS_RE.search(text)
    if match is None:
        return None
    return float(match.group(1))


# ── Composition ──────────────────────────────────────────────────────────


def parse_signal(text: str) -> TradeSignal:
    """Extract a ``TradeSignal`` from free text.

    Raises:
        InvalidInstrument: No 3+3 letter pair found.
        InvalidEntryPrice: No positive price after an entry keyword.
        InvalidStopLoss: No positive price after ``SL`` / ``Stop Loss``.
    """
    text = text or ""

    instrument = match_instrument(text)
    if instrument is None:
        raise InvalidInstrument()

    entry_price = match_entry_price(text)
    if not entry_price:
        raise InvalidEntryPrice()

    stop_loss = match_stop_loss(text)
    if not stop_loss:
        raise InvalidStopLoss()

    signal = TradeSignal(
        instrument=instrument,
        entry_price=entry_price,
        stop_loss=stop_loss,
        explicit_pips=match_explicit_pips(text),
    )
    logger.debug("Parsed signal: %s", signal)
    return signal
