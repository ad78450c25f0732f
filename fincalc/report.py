# fincalc/report.py
"""
Presentation layer: turns Outcomes into text and emits diagnostics.

The calculation modules never print; everything a user sees goes through here.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, TextIO

from .finance.metrics import (
    ErrorKind,
    Outcome,
    compound_interest,
    future_value,
    internal_rate_of_return,
    npv,
    present_value,
    simple_interest,
)

logger = logging.getLogger("fincalc.report")

_LABELS = {
    ErrorKind.INVALID_ARGUMENT: "Error",
    ErrorKind.NUMERIC_DEGENERACY: "Error",
    ErrorKind.NON_CONVERGENCE: "Warning",
}


def format_currency(x: float) -> str:
    return f"${x:.2f}"


def format_percent(rate: float) -> str:
    return f"{rate * 100:.2f}%"


def format_cashflows(cashflows: Iterable[float]) -> str:
    return "[" + ", ".join(format_currency(float(cf)) for cf in cashflows) + "]"


def describe(outcome: Outcome, *, percent: bool = False) -> str:
    if not outcome.ok:
        return f"failed ({outcome.error.value}): {outcome.message}"
    return format_percent(outcome.value) if percent else format_currency(outcome.value)


def emit_diagnostic(outcome: Outcome, context: str = "") -> None:
    """Log the diagnostic of a failed outcome; successful outcomes are silent."""
    if outcome.ok:
        return
    label = _LABELS.get(outcome.error, "Error")
    if context:
        logger.warning("%s: %s [%s]", label, outcome.message, context)
    else:
        logger.warning("%s: %s", label, outcome.message)


# ---------- demo ----------
def _section(title: str, fields: Sequence[tuple], result: str) -> List[str]:
    out = [f"{title}:"]
    out.extend(f"  {k}: {v}" for k, v in fields)
    out.append(result)
    out.append("")
    return out


def demo_lines() -> List[str]:
    """The worked examples, one calculation of each kind."""
    lines = ["--- Financial Library Demonstrations ---", ""]

    fv = future_value(1000.0, 0.05, 10)
    emit_diagnostic(fv, "future value")
    lines += _section(
        "Future Value (FV)",
        [("Present Value", format_currency(1000.0)), ("Annual Rate", format_percent(0.05)),
         ("Periods", "10 years")],
        f"  Calculated FV: {describe(fv)}",
    )

    pv = present_value(2000.0, 0.08, 5)
    emit_diagnostic(pv, "present value")
    lines += _section(
        "Present Value (PV)",
        [("Future Value", format_currency(2000.0)), ("Annual Discount Rate", format_percent(0.08)),
         ("Periods", "5 years")],
        f"  Calculated PV: {describe(pv)}",
    )

    flows = [-10000.0, 3000.0, 4000.0, 5000.0, 3000.0]
    value = npv(0.10, flows)
    emit_diagnostic(value, "npv")
    lines += _section(
        "Net Present Value (NPV)",
        [("Discount Rate", format_percent(0.10)), ("Cash Flows", format_cashflows(flows))],
        f"  Calculated NPV: {describe(value)}" if value.ok else "  NPV calculation failed.",
    )

    si = simple_interest(5000.0, 0.06, 3.0)
    emit_diagnostic(si, "simple interest")
    lines += _section(
        "Simple Interest",
        [("Principal", format_currency(5000.0)), ("Annual Rate", format_percent(0.06)),
         ("Time", "3.00 years")],
        f"  Calculated Simple Interest: {describe(si)}",
    )

    ci = compound_interest(1000.0, 0.07, 12, 5.0)
    emit_diagnostic(ci, "compound interest")
    lines += _section(
        "Compound Interest (Total Amount)",
        [("Principal", format_currency(1000.0)), ("Annual Rate", format_percent(0.07)),
         ("Compounding Frequency", "12 (monthly)"), ("Time", "5.00 years")],
        f"  Calculated Total Amount: {describe(ci)}",
    )

    flows = [-1000.0, 300.0, 400.0, 500.0, 600.0]
    rate = internal_rate_of_return(flows)
    emit_diagnostic(rate, "irr")
    lines += _section(
        "Internal Rate of Return (IRR)",
        [("Cash Flows", format_cashflows(flows))],
        f"  Calculated IRR: {describe(rate, percent=True)}" if rate.ok
        else "  IRR calculation failed or did not converge.",
    )

    flows = [-1000.0, -200.0, -50.0]
    rate = internal_rate_of_return(flows)
    emit_diagnostic(rate, "irr")
    lines += _section(
        "Internal Rate of Return (IRR) - No Convergence Example",
        [("Cash Flows", format_cashflows(flows))],
        f"  Calculated IRR: {describe(rate, percent=True)}" if rate.ok
        else "  IRR calculation failed or did not converge (expected).",
    )
    return lines


def write_demo(stream: TextIO) -> None:
    for line in demo_lines():
        stream.write(line + "\n")


__all__ = [
    "format_currency",
    "format_percent",
    "format_cashflows",
    "describe",
    "emit_diagnostic",
    "demo_lines",
    "write_demo",
]
