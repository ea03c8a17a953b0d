"""Calculator error taxonomy.

Every failure a calculation can hit is a ``CalculatorError`` carrying a
stable ``code`` (used by the API) and a user-facing message.
"""


class CalculatorError(ValueError):
    """Base class for all calculation failures."""

    code = "calculator_error"
    default_message = "Calculation failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class InvalidAccountBalance(CalculatorError):
    code = "invalid_account_balance"
    default_message = (
        "Invalid account balance format. Please use the format '1000 USD'."
    )


class InvalidRiskPercentage(CalculatorError):
    code = "invalid_risk_percentage"
    default_message = (
        "Invalid risk percentage. Please provide a number between 0 and 100."
    )


class InvalidInstrument(CalculatorError):
    code = "invalid_instrument"
    default_message = (
        "Invalid instrument format. Please provide a valid currency pair "
        "(e.g., NZDCAD, XAUUSD)."
    )


class InvalidEntryPrice(CalculatorError):
    code = "invalid_entry_price"
    default_message = (
        "Invalid opening amount format. Please provide a valid opening amount."
    )


class InvalidStopLoss(CalculatorError):
    code = "invalid_stop_loss"
    default_message = "Invalid stop loss format. Please provide a valid stop loss."


class InvalidStopLossDistance(CalculatorError):
    code = "invalid_stop_loss_distance"
    default_message = (
        "Stop loss must differ from the entry price (pip distance is zero)."
    )


class RateLookupFailed(CalculatorError):
    code = "rate_lookup_failed"
    default_message = "Could not fetch currency conversion rates."
