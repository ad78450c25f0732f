import importlib
import math

import pytest


def test_finance_irr_basic():
  m = importlib.import_module("fincalc.finance.irr")

  # Simple 3-period stream with single sign change
  cfs = [-100.0, 60.0, 60.0]
  res = m.irr(cfs)

  assert res.ok, res.message
  assert math.isfinite(res.value), "IRR should be finite"
  # 60x + 60x^2 = 100 with x = 1/(1+r)  ->  r ~ 13.07%
  assert 0.05 < res.value < 0.15, f"IRR out of expected band: {res.value}"
  assert res.value == pytest.approx(0.130662, abs=1e-5)


def test_finance_irr_accepts_any_iterable():
  m = importlib.import_module("fincalc.finance.irr")
  from_list = m.irr([-100.0, 60.0, 60.0])
  from_gen = m.irr(x for x in (-100, 60, 60))
  assert from_gen.ok
  assert from_gen.value == from_list.value


def test_finance_metrics_facade_reexports():
  m = importlib.import_module("fincalc.finance.metrics")
  irr_mod = importlib.import_module("fincalc.finance.irr")
  assert m.irr is irr_mod.irr
  assert m.npv is irr_mod.npv
  names = [n for n in m.__all__ if callable(getattr(m, n))]
  assert {"future_value", "present_value", "simple_interest", "compound_interest"} <= set(names)
