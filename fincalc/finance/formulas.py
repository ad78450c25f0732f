# fincalc/finance/formulas.py
"""
Closed-form time-value-of-money formulas.

Invalid input gives a failed Outcome with value 0.0:
    FV = PV * (1 + r)^n
    PV = FV / (1 + r)^n
    SI = P * r * t
    A  = P * (1 + r/m)^(m*t)
"""
from __future__ import annotations

from .checks import is_whole, nans, negatives, periods_error, rate_error, safe_pow
from .outcome import ErrorKind, Outcome


def _invalid(message: str) -> Outcome:
    return Outcome.failure(ErrorKind.INVALID_ARGUMENT, message, value=0.0)


def future_value(present_value: float, rate: float, periods: int) -> Outcome:
    """
    Value of a single amount after `periods` periods of growth at `rate`.
    A negative rate models depreciation.
    """
    err = periods_error(periods, "Future Value")
    if err:
        return _invalid(err)
    bad = nans(present_value=present_value, rate=rate)
    if bad:
        return _invalid(f"Future Value inputs must be numbers (got NaN {', '.join(bad)}).")
    return Outcome.success(float(present_value) * safe_pow(1.0 + float(rate), int(periods)))


def present_value(future_value: float, rate: float, periods: int) -> Outcome:
    """Today's value of an amount received after `periods` periods."""
    err = periods_error(periods, "Present Value") or rate_error(float(rate), "Present Value")
    if err:
        return _invalid(err)
    if nans(future_value=future_value):
        return _invalid("Present Value inputs must be numbers (got NaN future_value).")
    factor = safe_pow(1.0 + float(rate), int(periods))
    if factor == 0.0:
        return Outcome.failure(
            ErrorKind.NUMERIC_DEGENERACY,
            "Discount factor underflowed to zero in Present Value calculation.",
            value=0.0,
        )
    return Outcome.success(float(future_value) / factor)


def simple_interest(principal: float, rate: float, time: float) -> Outcome:
    bad = negatives(principal=principal, rate=rate, time=time)
    if bad:
        return _invalid(
            f"Principal, interest rate, and time cannot be negative for Simple Interest "
            f"(got negative {', '.join(bad)})."
        )
    return Outcome.success(float(principal) * float(rate) * float(time))


def compound_interest(principal: float, rate: float, frequency: int, time: float) -> Outcome:
    """
    Total accumulated amount (principal plus interest), compounded
    `frequency` times per year over `time` years.
    """
    bad = negatives(principal=principal, rate=rate, time=time)
    if not frequency > 0 or not is_whole(frequency):
        bad.append("frequency")
    if bad:
        return _invalid(
            "Invalid input for Compound Interest calculation. "
            f"Check principal, rate, frequency, and time (bad: {', '.join(bad)})."
        )
    m = int(frequency)
    return Outcome.success(
        float(principal) * safe_pow(1.0 + float(rate) / m, m * float(time))
    )


__all__ = ["future_value", "present_value", "simple_interest", "compound_interest"]
