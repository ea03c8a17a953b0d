"""Account balance parsing — pure, no I/O.

Accepts inputs such as ``"1000 USD"``, ``"2,500.50eur"`` or ``"1000"``.
A missing currency code falls back to ``DEFAULT_ACCOUNT_CURRENCY``.
"""

import re

from lotcalc.calc.models import AccountBalance
from lotcalc.errors import InvalidAccountBalance


DEFAULT_ACCOUNT_CURRENCY = "USD"

_BALANCE_RE = re.compile(
    r"(\d[\d,]*(?:\.\d*)?)\s*([A-Za-z]{3}(?![A-Za-z]))?"
)


def parse_account_balance(text: str) -> AccountBalance:
    """Parse a free-text balance into an ``AccountBalance``.

    Raises:
        InvalidAccountBalance: If no numeric amount is present.
    """
    match = _BALANCE_RE.search(text or "")
    if match is None:
        raise InvalidAccountBalance()

    amount = float(match.group(1).replace(",", ""))
    code = match.group(2)
    currency = code.upper() if code else DEFAULT_ACCOUNT_CURRENCY
    return AccountBalance(amount=amount, currency=currency)
