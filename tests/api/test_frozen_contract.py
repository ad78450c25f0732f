import importlib
import inspect
from pathlib import Path


def _param_names(fn):
    return [p.name for p in inspect.signature(fn).parameters.values()]


def test_finance_irr_public_api_is_stable():
    """Lock down that IRR/NPV live in finance.irr with a stable entrypoint."""
    m = importlib.import_module("fincalc.finance.irr")
    assert hasattr(m, "irr") and callable(m.irr)
    assert hasattr(m, "npv") and callable(m.npv)

    # Keep parameter names stable to avoid accidental API churn.
    assert _param_names(m.irr) == ["cashflows", "config"]
    assert _param_names(m.npv) == ["rate", "cashflows"]
    assert _param_names(m.internal_rate_of_return) == [
        "cashflows", "guess", "tolerance", "max_iterations",
    ]

    # Guard against import creep in the thin math module.
    src = Path(m.__file__).read_text(encoding="utf-8")
    for forbidden in ("import yaml", "fincalc.report", "fincalc.runner", "print("):
        assert forbidden not in src, f"Unexpected dependency '{forbidden}' inside finance/irr.py"


def test_formula_signatures_are_stable():
    f = importlib.import_module("fincalc.finance.formulas")
    assert _param_names(f.future_value) == ["present_value", "rate", "periods"]
    assert _param_names(f.present_value) == ["future_value", "rate", "periods"]
    assert _param_names(f.simple_interest) == ["principal", "rate", "time"]
    assert _param_names(f.compound_interest) == ["principal", "rate", "frequency", "time"]


def test_package_root_reexports_calculations():
    pkg = importlib.import_module("fincalc")
    for name in ("future_value", "present_value", "npv", "net_present_value",
                 "simple_interest", "compound_interest", "irr", "internal_rate_of_return",
                 "IRRConfig", "Outcome", "ErrorKind"):
        assert hasattr(pkg, name), name


def test_validate_exports_are_stable():
    """validate module must expose these helpers (names kept stable)."""
    v = importlib.import_module("fincalc.validate")
    for name in ("validate_params_dict", "validate_calculation", "load_params_from_file"):
        obj = getattr(v, name, None)
        assert callable(obj), f"Missing or non-callable export: {name}"


def test_runner_run_dir_api_minimal(tmp_path):
    """run_dir must accept (cfg_path, out_dir, ...) and return a summary-like object."""
    r = importlib.import_module("fincalc.runner")
    assert hasattr(r, "run_dir") and callable(r.run_dir)

    cfg = tmp_path / "cfg.yaml"
    cfg.write_text(
        "calculations:\n"
        "  - { name: cash, kind: npv, rate: 0.12, cashflows: [-100, 60, 60] }\n",
        encoding="utf-8",
    )
    out = tmp_path / "o"
    res = r.run_dir(cfg, out, fmt="jsonl")
    summary = getattr(res, "summary", res)
    assert isinstance(summary, dict)
    assert set(summary) == {"count", "failed", "results"}
    row = summary["results"][0]
    assert set(row) == {"name", "kind", "value", "ok", "error", "message", "iterations"}
