"""LotCalc — application entry point.

Boots the FastAPI server and provides the CLI entry point for one-shot
calculations and serve mode.
"""

import logging
import os
import sys
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from lotcalc.api.routers import configure_routers, router
from lotcalc.calculator import Calculator
from lotcalc.config import Config
from lotcalc.prefs.store import PreferenceStore
from lotcalc.rates.coinbase_client import CoinbaseRateClient

app = FastAPI(title="LotCalc API", version="0.1.0")
app.include_router(router)

_static_dir = os.path.join(os.path.dirname(__file__), "static")

logger = logging.getLogger("lotcalc")


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/")
async def index():
    """Serve the single-page calculator form."""
    index_path = os.path.join(_static_dir, "index.html")
    if not os.path.isfile(index_path):
        return {"error": "No calculator page found."}
    with open(index_path, "r", encoding="utf-8") as f:
        html = f.read()
    return HTMLResponse(
        content=html,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )


def build_calculator(config: Config) -> Calculator:
    """Wire a ``Calculator`` to the Coinbase client and the preference file."""
    calculator = Calculator(
        rate_lookup=CoinbaseRateClient(config),
        prefs=PreferenceStore(config.prefs_path),
    )
    calculator.load_preferences()
    return calculator


# ── CLI ──────────────────────────────────────────────────────────────────


def _build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        description="Forex / gold lot size calculator",
    )
    parser.add_argument(
        "--signal",
        help='Trading signal, e.g. "Buy EURUSD 1.05000, SL 1.04800"',
    )
    parser.add_argument(
        "--balance",
        help='Account balance, e.g. "1000 USD" (default: stored value)',
    )
    parser.add_argument(
        "--risk",
        help="Risk percentage per trade, e.g. 1 (default: stored value)",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear stored preferences and exit",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP API and calculator page",
    )
    parser.add_argument("--port", type=int, help="HTTP port for --serve")
    return parser


def run_cli(argv: Optional[list[str]] = None) -> int:
    """Parse CLI arguments and dispatch.  Returns the process exit code."""
    import asyncio

    from lotcalc.cli.result_panel import print_result
    from lotcalc.config import load_config
    from lotcalc.errors import CalculatorError, RateLookupFailed

    parser = _build_parser()
    args = parser.parse_args(argv)

    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    calculator = build_calculator(config)

    if args.reset:
        calculator.reset()
        logger.info("Stored preferences cleared.")
        return 0

    if args.serve:
        _serve(calculator, args.port or config.http_port)
        return 0

    if not args.signal:
        parser.error("--signal is required unless --serve or --reset is given")

    if args.balance is not None:
        calculator.set_account_balance(args.balance)
    if args.risk is not None:
        calculator.set_risk_percentage(args.risk)

    try:
        result = asyncio.run(calculator.calculate(args.signal))
    except RateLookupFailed as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except CalculatorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    print_result(result, calculator.last_signal)
    return 0


def _serve(calculator: Calculator, port: int) -> None:
    """Start uvicorn with *calculator* injected into the routers."""
    import uvicorn

    configure_routers(calculator)
    logger.info("Calculator available at http://localhost:%d", port)
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")


if __name__ == "__main__":
    sys.exit(run_cli())
