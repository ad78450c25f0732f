# fincalc/finance/checks.py
"""
Numeric guards used by the formulas and the IRR solver.

Each check returns an error message, or None when the input is fine.
"""
from __future__ import annotations

import math
from typing import Iterable, List, Optional


def is_whole(x: float) -> bool:
    try:
        return float(x).is_integer()
    except (TypeError, ValueError, OverflowError):
        return False


def periods_error(periods: float, what: str) -> Optional[str]:
    if not periods >= 0:
        return f"Number of periods cannot be negative for {what} calculation."
    if not is_whole(periods):
        return f"Number of periods must be a whole number for {what} calculation, got {periods}."
    return None


def rate_error(rate: float, what: str) -> Optional[str]:
    # (1 + rate) is a discount base: it must stay positive
    if not rate > -1.0:
        return f"Discount rate must be greater than -100% for {what} calculation, got {rate}."
    return None


def negatives(**values: float) -> List[str]:
    """Names of the keyword arguments holding a negative (or NaN) value."""
    return [k for k, v in values.items() if not v >= 0]


def nans(**values: float) -> List[str]:
    """Names of the keyword arguments holding NaN."""
    return [k for k, v in values.items() if v != v]


def has_mixed_signs(cashflows: Iterable[float]) -> bool:
    has_negative = False
    has_positive = False
    for cf in cashflows:
        if cf < 0:
            has_negative = True
        elif cf > 0:
            has_positive = True
    return has_negative and has_positive


def safe_pow(base: float, exponent: float) -> float:
    """
    base ** exponent, with overflow giving a signed infinity instead of
    OverflowError. A negative base only occurs with integral exponents here.
    """
    try:
        return base ** exponent
    except OverflowError:
        if base < 0 and is_whole(exponent) and int(exponent) % 2 == 1:
            return -math.inf
        return math.inf


__all__ = [
    "is_whole",
    "periods_error",
    "rate_error",
    "negatives",
    "nans",
    "has_mixed_signs",
    "safe_pow",
]
