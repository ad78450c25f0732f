# fincalc/runner.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List, Optional
from datetime import datetime
import json, csv, logging

from .config import irr_config_from
from .finance import metrics
from .finance.irr import IRRConfig
from .finance.outcome import Outcome
from .report import emit_diagnostic
from .validate import (
    _mode_from_env_or_flag,
    load_params_from_file,
    validate_params_dict,
)

logger = logging.getLogger("fincalc.runner")

ROW_FIELDS = ["name", "kind", "value", "ok", "error", "message", "iterations"]


@dataclass
class RunResult:
    summary: Dict[str, Any]
    summary_path: Path
    results_path: Optional[Path] = None


def evaluate(calc: Dict[str, Any], irr_defaults: IRRConfig) -> Outcome:
    """Dispatch one validated calculation mapping to its formula."""
    kind = calc["kind"]
    if kind == "future_value":
        return metrics.future_value(calc["present_value"], calc["rate"], calc["periods"])
    if kind == "present_value":
        return metrics.present_value(calc["future_value"], calc["rate"], calc["periods"])
    if kind == "npv":
        return metrics.npv(calc["rate"], calc["cashflows"])
    if kind == "simple_interest":
        return metrics.simple_interest(calc["principal"], calc["rate"], calc["time"])
    if kind == "compound_interest":
        return metrics.compound_interest(
            calc["principal"], calc["rate"], calc["frequency"], calc["time"]
        )
    if kind == "irr":
        return metrics.irr(calc["cashflows"], irr_config_from(calc, base=irr_defaults))
    raise ValueError(f"unknown kind: {kind}")


def run_params(params: Dict[str, Any], *, mode: str = "relaxed") -> Dict[str, Any]:
    """Validate a loaded batch and evaluate every calculation in order."""
    validate_params_dict(params, mode=mode)
    irr_defaults = irr_config_from(params.get("irr"))

    rows: List[Dict[str, Any]] = []
    for i, calc in enumerate(params["calculations"]):
        name = str(calc.get("name") or f"calc_{i}")
        outcome = evaluate(calc, irr_defaults)
        emit_diagnostic(outcome, name)
        rows.append({"name": name, "kind": calc["kind"], **outcome.as_row()})

    failed = sum(1 for r in rows if not r["ok"])
    logger.info("evaluated %d calculation(s), %d failed", len(rows), failed)
    return {"count": len(rows), "failed": failed, "results": rows}


def _write_jsonl(path: Path, rows: List[Dict[str, Any]]) -> None:
    with path.open("w", encoding="utf-8") as f:
        for row in rows:
            f.write(json.dumps(row) + "\n")


def _write_csv(path: Path, rows: List[Dict[str, Any]]) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=ROW_FIELDS)
        w.writeheader()
        for row in rows:
            w.writerow({k: ("" if row.get(k) is None else row.get(k)) for k in ROW_FIELDS})


def run_file(
    config: str | Path,
    out_dir: str | Path,
    *,
    fmt: str = "csv",
    mode: str | None = None,
) -> RunResult:
    cfg_path = Path(config)
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    if fmt not in ("csv", "jsonl"):
        raise SystemExit(f"unknown fmt: {fmt}")

    params = load_params_from_file(cfg_path)
    summary = run_params(params, mode=_mode_from_env_or_flag(mode))

    summary_path = out / "summary.json"
    summary_path.write_text(json.dumps(summary, indent=2), encoding="utf-8")

    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    results_path = out / f"{cfg_path.stem}_results_{stamp}.{fmt}"
    if fmt == "jsonl":
        _write_jsonl(results_path, summary["results"])
    else:
        _write_csv(results_path, summary["results"])

    return RunResult(summary=summary, summary_path=summary_path, results_path=results_path)


def run_dir(
    config: str | Path,
    out_dir: str | Path,
    *,
    fmt: str = "csv",
    mode: str | None = None,
) -> RunResult | Dict[str, RunResult]:
    """
    Run a single batch file, or every *.yaml / *.yml file of a directory into
    its own sub-directory of `out_dir` (keyed by file name).
    """
    cfg_path = Path(config)
    if not cfg_path.is_dir():
        return run_file(cfg_path, out_dir, fmt=fmt, mode=mode)

    files = [f for f in sorted(cfg_path.glob("*.y*ml")) if f.is_file()]
    if not files:
        raise SystemExit(f"{cfg_path}: no batch files found")
    out = Path(out_dir)
    return {f.name: run_file(f, out / f.stem, fmt=fmt, mode=mode) for f in files}


__all__ = ["RunResult", "evaluate", "run_params", "run_file", "run_dir"]
