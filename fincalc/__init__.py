"""Closed-form and iterative financial formulas (FV, PV, NPV, interest, IRR)."""
from .finance.metrics import *  # noqa: F401,F403
from .finance.metrics import __all__

__version__ = "0.1.0"
