"""Position sizing — converts account risk into a lot size.

Formula::

    risk_amount        = balance × (risk_pct / 100)
    pip_value_account  = pip_value_quote × rate(quote → account)
    lot_size           = risk_amount / (pips × pip_value_account × contract_size)
    units              = lot_size × contract_size

The only I/O is the conversion-rate lookup, skipped when the quote currency
already is the account currency.
"""

import logging

from lotcalc.calc.instruments import contract_size, pip_value_quote
from lotcalc.calc.models import CalculationResult, Instrument, RiskParameters
from lotcalc.errors import (
    InvalidRiskPercentage,
    InvalidStopLossDistance,
    RateLookupFailed,
)
from lotcalc.rates.coinbase_client import RateLookup

logger = logging.getLogger("lotcalc")

LOT_PRECISION = 4
MONEY_PRECISION = 2


async def quote_to_account_rate(
    quote_currency: str,
    account_currency: str,
    rate_lookup: RateLookup,
) -> float:
    """Return the multiplier converting quote-currency money to account money.

    A response that lacks the account currency degrades to 1.0 (no
    conversion) rather than failing.
    """
    if quote_currency == account_currency:
        return 1.0

    try:
        rates = await rate_lookup.get_rates(quote_currency)
    except RateLookupFailed:
        raise
    except Exception as exc:
        raise RateLookupFailed(
            f"Could not fetch conversion rates for {quote_currency}."
        ) from exc

    rate = rates.get(account_currency)
    if not rate:
        logger.warning(
            "No %s rate in %s response, assuming 1.0",
            account_currency, quote_currency,
        )
        return 1.0
    return float(rate)


async def size_position(
    risk: RiskParameters,
    instrument: Instrument,
    pips: float,
    rate_lookup: RateLookup,
) -> CalculationResult:
    """Calculate the lot size that risks ``risk.risk_percent`` over *pips*.

    Args:
        risk: Account balance and risk percentage.
        instrument: The traded pair.
        pips: Stop-loss distance in pips.
        rate_lookup: Source of quote → account conversion rates.

    Returns:
        A ``CalculationResult`` with lots rounded to 4 dp, money to 2 dp.

    Raises:
        InvalidStopLossDistance: If *pips* is not positive.
        InvalidRiskPercentage: If the risk is outside (0, 100].
        RateLookupFailed: If the conversion rate cannot be fetched.
    """
    if pips <= 0:
        raise InvalidStopLossDistance()
    if not 0 < risk.risk_percent <= 100:
        raise InvalidRiskPercentage()

    balance = risk.account_balance
    risk_amount = balance.amount * (risk.risk_percent / 100.0)

    rate = await quote_to_account_rate(
        instrument.quote_currency, balance.currency, rate_lookup,
    )
    pip_value_account = pip_value_quote(instrument) * rate
    units_per_lot = contract_size(instrument)

    lot_size = risk_amount / (pips * pip_value_account * units_per_lot)
    position_size_units = lot_size * units_per_lot

    # Tiers are exact multiples of the rounded standard lot.
    standard_lots = round(lot_size, LOT_PRECISION)

    return CalculationResult(
        lot_size=standard_lots,
        amount_at_risk=round(risk_amount, MONEY_PRECISION),
        position_size_units=round(position_size_units, LOT_PRECISION),
        standard_lots=standard_lots,
        mini_lots=round(standard_lots * 10, LOT_PRECISION),
        micro_lots=round(standard_lots * 100, LOT_PRECISION),
        account_currency=balance.currency,
        pips=pips,
    )
