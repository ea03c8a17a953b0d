"""CLI result panel — prints a calculation result to the console."""

from lotcalc.calc.formatting import format_result
from lotcalc.calc.models import CalculationResult, TradeSignal


def print_result(result: CalculationResult, signal: TradeSignal | None = None) -> str:
    """Format and print *result*.

    Args:
        result: The sized position.
        signal: Optional parsed signal, shown as a header line.

    Returns:
        The formatted string (also printed to stdout).
    """
    shown = format_result(result)

    lines = ["──────────────── Lot Size Calculator ────────────────"]
    if signal is not None:
        lines.append(
            f"  Signal:          {signal.instrument.symbol} "
            f"{signal.entry_price:g} → SL {signal.stop_loss:g} "
            f"({result.pips:g} pips)"
        )
    lines += [
        f"  Lot Size:        {shown['lot_size']}",
        f"  Amount at Risk:  {shown['amount_at_risk']}",
        f"  Position Units:  {shown['position_size_units']}",
        f"  Standard Lots:   {shown['standard_lots']}",
        f"  Mini Lots:       {shown['mini_lots']}",
        f"  Micro Lots:      {shown['micro_lots']}",
        "─────────────────────────────────────────────────────",
    ]
    output = "\n".join(lines)
    print(output)
    return output
