"""
Finance metrics façade.

Design:
- IRR/NPV implementations live only in fincalc.finance.irr (singleton).
- This module must not *define* irr/npv (no 'def irr' / 'def npv' here).
- It re-exports the full calculation surface for callers and the CLI.
"""
from .formulas import (  # re-exports only
    compound_interest as compound_interest,
    future_value as future_value,
    present_value as present_value,
    simple_interest as simple_interest,
)
from .irr import (
    DEFAULT_CONFIG as DEFAULT_CONFIG,
    IRRConfig as IRRConfig,
    internal_rate_of_return as internal_rate_of_return,
    irr as irr,
    net_present_value as net_present_value,
    npv as npv,
)
from .outcome import NAN as NAN, ErrorKind as ErrorKind, Outcome as Outcome

__all__ = [
    "future_value",
    "present_value",
    "npv",
    "net_present_value",
    "simple_interest",
    "compound_interest",
    "irr",
    "internal_rate_of_return",
    "IRRConfig",
    "DEFAULT_CONFIG",
    "ErrorKind",
    "Outcome",
    "NAN",
]
