"""Calculator API routers — /session, /calculate and /reset endpoints.

No business logic.  Delegates to the ``Calculator`` set via
``configure_routers()`` and turns ``CalculatorError`` into JSON errors.
"""

import logging
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from lotcalc.calc.formatting import format_result
from lotcalc.errors import CalculatorError, RateLookupFailed

logger = logging.getLogger("lotcalc")
router = APIRouter()

# ── Shared state (set during app startup) ────────────────────────────────

_calculator = None  # Set via configure_routers()


def configure_routers(calculator) -> None:
    """Inject the calculator from application startup.

    Args:
        calculator: A ``Calculator`` instance (or duck-type for tests).
    """
    global _calculator  # noqa: PLW0603
    _calculator = calculator


def _not_configured() -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={"status": "error", "error": "not_configured",
                 "detail": "Calculator not configured."},
    )


def _error_response(exc: CalculatorError) -> JSONResponse:
    status_code = 502 if isinstance(exc, RateLookupFailed) else 422
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "error": exc.code, "detail": exc.message},
    )


def _text_field(body: dict, key: str) -> Optional[str]:
    value = body.get(key)
    return None if value is None else str(value)


# ── Session ──────────────────────────────────────────────────────────────


@router.get("/session")
async def get_session():
    """Return current inputs and the displayed result (or null)."""
    if _calculator is None:
        return _not_configured()
    return _calculator.snapshot()


@router.put("/session/account-balance")
async def put_account_balance(body: dict):
    """Update the balance input.  Not persisted."""
    if _calculator is None:
        return _not_configured()
    _calculator.set_account_balance(_text_field(body, "value") or "")
    return {"status": "ok", **_calculator.snapshot()}


@router.put("/session/risk-percentage")
async def put_risk_percentage(body: dict):
    """Update the risk input and persist it."""
    if _calculator is None:
        return _not_configured()
    _calculator.set_risk_percentage(_text_field(body, "value") or "")
    return {"status": "ok", **_calculator.snapshot()}


# ── Actions ──────────────────────────────────────────────────────────────


@router.post("/calculate")
async def post_calculate(body: dict):
    """Size a position for ``body["signal"]``.

    Optional ``account_balance`` and ``risk_percentage`` fields update the
    session inputs first, exactly like the PUT endpoints would.
    """
    if _calculator is None:
        return _not_configured()

    balance = _text_field(body, "account_balance")
    if balance is not None:
        _calculator.set_account_balance(balance)
    risk = _text_field(body, "risk_percentage")
    if risk is not None:
        _calculator.set_risk_percentage(risk)

    try:
        result = await _calculator.calculate(_text_field(body, "signal") or "")
    except CalculatorError as exc:
        logger.info("Calculation rejected: %s", exc.code)
        return _error_response(exc)

    return {"status": "ok", "result": format_result(result)}


@router.post("/reset")
async def post_reset():
    """Clear inputs, result and stored preferences."""
    if _calculator is None:
        return _not_configured()
    _calculator.reset()
    return {"status": "ok", **_calculator.snapshot()}
