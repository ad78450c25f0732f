# fincalc/finance/outcome.py
"""
Result record shared by every calculation.

A calculation never raises for bad numeric input. It returns an Outcome whose
`value` is the number (or the neutral value 0.0 / NaN on failure) and whose
`error` says why it failed.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

NAN = float("nan")


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    NUMERIC_DEGENERACY = "numeric_degeneracy"
    NON_CONVERGENCE = "non_convergence"


@dataclass(frozen=True)
class Outcome:
    value: float
    error: Optional[ErrorKind] = None
    message: str = ""
    iterations: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    def __float__(self) -> float:
        return self.value

    @classmethod
    def success(cls, value: float, *, iterations: int = 0) -> "Outcome":
        return cls(value=float(value), iterations=iterations)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        *,
        value: float = NAN,
        iterations: int = 0,
    ) -> "Outcome":
        return cls(value=value, error=kind, message=message, iterations=iterations)

    def as_row(self) -> dict:
        """Flat mapping for JSON/CSV output. NaN is written as None."""
        v = self.value
        return {
            "value": None if v != v else v,
            "ok": self.ok,
            "error": self.error.value if self.error else None,
            "message": self.message,
            "iterations": self.iterations,
        }


__all__ = ["NAN", "ErrorKind", "Outcome"]
