"""Display formatting for calculation results.

Numbers get thousands separators and at most N fractional digits with
trailing zeros dropped, e.g. ``33333.3`` → ``"33,333.3"``.  Only used for
display; never feed these strings back into a calculation.
"""

from lotcalc.calc.models import CalculationResult
from lotcalc.calc.position_sizer import LOT_PRECISION, MONEY_PRECISION


def format_number(value: float, max_fraction_digits: int) -> str:
    text = f"{value:,.{max_fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_result(result: CalculationResult) -> dict[str, str]:
    """Return the six labelled display values for *result*."""
    return {
        "lot_size": format_number(result.lot_size, LOT_PRECISION),
        "amount_at_risk": (
            f"{format_number(result.amount_at_risk, MONEY_PRECISION)} "
            f"{result.account_currency}"
        ),
        "position_size_units": format_number(
            result.position_size_units, LOT_PRECISION,
        ),
        "standard_lots": format_number(result.standard_lots, LOT_PRECISION),
        "mini_lots": format_number(result.mini_lots, LOT_PRECISION),
        "micro_lots": format_number(result.micro_lots, LOT_PRECISION),
    }
