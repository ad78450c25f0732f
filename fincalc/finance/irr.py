# fincalc/finance/irr.py
"""
NPV and IRR. This is the only module that defines `npv` and `irr`.

    NPV(r)  = sum_{t=0..N} CF[t] / (1+r)^t
    NPV'(r) = sum_{t=0..N} -t * CF[t] / (1+r)^(t+1)

IRR is found with plain Newton-Raphson from `IRRConfig.guess`. There is no
bisection fallback: flows with several sign changes or a poor guess can end
in NUMERIC_DEGENERACY or NON_CONVERGENCE instead of a root.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .checks import has_mixed_signs, nans, rate_error, safe_pow
from .outcome import ErrorKind, Outcome

logger = logging.getLogger("fincalc.finance.irr")


@dataclass(frozen=True)
class IRRConfig:
    guess: float = 0.1
    tolerance: float = 1e-6
    max_iterations: int = 1000

    def __post_init__(self) -> None:
        if not self.tolerance > 0:
            raise ValueError(f"tolerance must be > 0, got {self.tolerance}")
        if int(self.max_iterations) != self.max_iterations or self.max_iterations <= 0:
            raise ValueError(f"max_iterations must be a positive integer, got {self.max_iterations}")
        object.__setattr__(self, "max_iterations", int(self.max_iterations))


DEFAULT_CONFIG = IRRConfig()


# ---------- NPV ----------
def npv(rate: float, cashflows: Iterable[float]) -> Outcome:
    """
    Classic discounted cash flow; CF[0] sits at the valuation date.
    An empty series is worth 0.0.
    """
    r = float(rate)
    err = rate_error(r, "NPV")
    if err:
        return Outcome.failure(ErrorKind.INVALID_ARGUMENT, err)

    total = 0.0
    for t, cf in enumerate(cashflows):
        if nans(cashflow=cf):
            return Outcome.failure(
                ErrorKind.INVALID_ARGUMENT,
                f"Cash flow at t={t} is NaN in NPV calculation.",
            )
        denominator = safe_pow(1.0 + r, t)
        if denominator == 0.0:
            return Outcome.failure(
                ErrorKind.NUMERIC_DEGENERACY,
                "Division by zero encountered during NPV calculation.",
            )
        total += float(cf) / denominator
    return Outcome.success(total)


net_present_value = npv


# ---------- IRR (periodic, Newton-Raphson) ----------
def irr(cashflows: Iterable[float], config: Optional[IRRConfig] = None) -> Outcome:
    """
    Rate r with NPV(r) == 0 (within `config.tolerance`).
    Returns a decimal rate (e.g., 0.18 = 18%) or a failed Outcome with NaN.
    """
    cfg = config or DEFAULT_CONFIG
    cfs: List[float] = [float(x) for x in cashflows]
    if not cfs:
        return Outcome.failure(
            ErrorKind.INVALID_ARGUMENT,
            "Cash flow vector cannot be empty for IRR calculation.",
        )
    if any(cf != cf for cf in cfs) or nans(guess=cfg.guess):
        return Outcome.failure(
            ErrorKind.INVALID_ARGUMENT,
            "IRR inputs must be numbers (got NaN).",
        )
    # Heuristic only: a sign change does not prove a real root exists.
    if not has_mixed_signs(cfs):
        return Outcome.failure(
            ErrorKind.INVALID_ARGUMENT,
            "IRR requires at least one negative and one positive cash flow.",
        )

    r = float(cfg.guess)
    for i in range(cfg.max_iterations):
        value = 0.0
        slope = 0.0
        base = 1.0 + r
        for t, cf in enumerate(cfs):
            denominator = safe_pow(base, t)
            next_denominator = safe_pow(base, t + 1)
            if denominator == 0.0 or next_denominator == 0.0:
                return Outcome.failure(
                    ErrorKind.NUMERIC_DEGENERACY,
                    "Division by zero encountered during IRR calculation. Try a different guess.",
                    iterations=i + 1,
                )
            value += cf / denominator
            slope -= t * cf / next_denominator

        if abs(value) < cfg.tolerance:
            logger.debug("IRR converged to %r after %d iteration(s)", r, i + 1)
            return Outcome.success(r, iterations=i + 1)

        if slope == 0.0:
            return Outcome.failure(
                ErrorKind.NUMERIC_DEGENERACY,
                "Derivative is zero during IRR calculation. Cannot converge.",
                iterations=i + 1,
            )

        r = r - value / slope

    logger.debug("IRR gave up at r=%r", r)
    return Outcome.failure(
        ErrorKind.NON_CONVERGENCE,
        f"IRR did not converge within {cfg.max_iterations} iterations.",
        iterations=cfg.max_iterations,
    )


def internal_rate_of_return(
    cashflows: Iterable[float],
    guess: float = DEFAULT_CONFIG.guess,
    tolerance: float = DEFAULT_CONFIG.tolerance,
    max_iterations: int = DEFAULT_CONFIG.max_iterations,
) -> Outcome:
    """irr() with the iteration settings given as plain arguments."""
    return irr(cashflows, IRRConfig(guess=guess, tolerance=tolerance, max_iterations=max_iterations))


__all__ = [
    "IRRConfig",
    "DEFAULT_CONFIG",
    "npv",
    "net_present_value",
    "irr",
    "internal_rate_of_return",
]
