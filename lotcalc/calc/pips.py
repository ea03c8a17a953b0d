"""Pip distance between entry and stop loss — pure math, no I/O."""

from lotcalc.calc.instruments import pip_unit
from lotcalc.calc.models import Instrument, TradeSignal

# Float subtraction of 5-decimal prices leaves noise such as 19.999999999996.
_PIP_PRECISION = 6


def calculate_pips(
    instrument: Instrument,
    entry_price: float,
    stop_loss: float,
) -> float:
    """Return ``|entry_price - stop_loss|`` measured in pips.

    Example::

        EURUSD 1.05000 → 1.04800  =  0.00200 / 0.0001  =  20 pips
        XAUUSD 2000.50 → 1995.50  =  5.00 / 0.01       = 500 pips
    """
    distance = abs(entry_price - stop_loss)
    return round(distance / pip_unit(instrument), _PIP_PRECISION)


def resolve_pips(signal: TradeSignal) -> float:
    """Return the pip count to size with.

    An explicit pip annotation in the signal wins unconditionally, even
    when it disagrees with the price distance.
    """
    if signal.explicit_pips is not None:
        return signal.explicit_pips
    return calculate_pips(signal.instrument, signal.entry_price, signal.stop_loss)
