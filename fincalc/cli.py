# fincalc/cli.py
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .finance import metrics
from .report import describe, emit_diagnostic, write_demo


def _cashflows(text: str) -> list[float]:
    try:
        return [float(x) for x in text.replace(",", " ").split()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a list of numbers: {text!r}")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fincalc",
        description="Time-value-of-money formulas: FV, PV, NPV, simple/compound interest, IRR",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    sub = p.add_subparsers(dest="command")

    sub.add_parser("demo", help="Print the worked examples.")

    s = sub.add_parser("fv", help="Future value of a single amount.")
    s.add_argument("--present-value", type=float, required=True)
    s.add_argument("--rate", type=float, required=True)
    s.add_argument("--periods", type=int, required=True)

    s = sub.add_parser("pv", help="Present value of a single amount.")
    s.add_argument("--future-value", type=float, required=True)
    s.add_argument("--rate", type=float, required=True)
    s.add_argument("--periods", type=int, required=True)

    s = sub.add_parser("npv", help="Net present value of a cash-flow series.")
    s.add_argument("--rate", type=float, required=True)
    s.add_argument("--cashflows", type=_cashflows, required=True,
                   help='Cash flows from t=0, e.g. --cashflows=-10000,3000,4000')

    s = sub.add_parser("simple", help="Simple interest.")
    s.add_argument("--principal", type=float, required=True)
    s.add_argument("--rate", type=float, required=True)
    s.add_argument("--time", type=float, required=True, help="Years.")

    s = sub.add_parser("compound", help="Compound interest (total amount).")
    s.add_argument("--principal", type=float, required=True)
    s.add_argument("--rate", type=float, required=True)
    s.add_argument("--frequency", type=int, default=1, help="Compoundings per year (default: 1).")
    s.add_argument("--time", type=float, required=True, help="Years.")

    s = sub.add_parser("irr", help="Internal rate of return (Newton-Raphson).")
    s.add_argument("--cashflows", type=_cashflows, required=True)
    s.add_argument("--guess", type=float, default=metrics.DEFAULT_CONFIG.guess)
    s.add_argument("--tolerance", type=float, default=metrics.DEFAULT_CONFIG.tolerance)
    s.add_argument("--max-iterations", type=int, default=metrics.DEFAULT_CONFIG.max_iterations)

    s = sub.add_parser("run", help="Run a YAML batch file or a directory of them.")
    s.add_argument("config", help="Path to a batch file, or a directory of batch files.")
    s.add_argument(
        "--outputs-dir",
        default="outputs",
        help="Directory to write result files (default: outputs). Will be created if missing.",
    )
    s.add_argument(
        "--format",
        dest="fmt",
        default="csv",
        choices=["csv", "jsonl"],
        help="Output format for per-calculation results (default: csv).",
    )
    v = s.add_mutually_exclusive_group()
    v.add_argument("--strict", action="store_true", help="Enable strict validation (unknown keys raise).")
    v.add_argument("--relaxed", action="store_true", help="Enable relaxed validation (unknown keys ignored).")
    return p


def parse_args(argv: list[str] | None) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _apply_validation_mode(ns: argparse.Namespace) -> None:
    # Default: leave env as-is; flags override explicitly.
    if ns.strict:
        os.environ["VALIDATION_MODE"] = "strict"
    elif ns.relaxed:
        os.environ["VALIDATION_MODE"] = "relaxed"


def _calculate(ns: argparse.Namespace) -> metrics.Outcome:
    if ns.command == "fv":
        return metrics.future_value(ns.present_value, ns.rate, ns.periods)
    if ns.command == "pv":
        return metrics.present_value(ns.future_value, ns.rate, ns.periods)
    if ns.command == "npv":
        return metrics.npv(ns.rate, ns.cashflows)
    if ns.command == "simple":
        return metrics.simple_interest(ns.principal, ns.rate, ns.time)
    if ns.command == "compound":
        return metrics.compound_interest(ns.principal, ns.rate, ns.frequency, ns.time)
    return metrics.internal_rate_of_return(
        ns.cashflows, guess=ns.guess, tolerance=ns.tolerance, max_iterations=ns.max_iterations
    )


def _run(ns: argparse.Namespace) -> int:
    from .runner import run_dir

    _apply_validation_mode(ns)
    outputs_dir = Path(ns.outputs_dir).resolve()
    res = run_dir(Path(ns.config).resolve(), outputs_dir, fmt=ns.fmt)
    results = res.values() if isinstance(res, dict) else [res]
    failed = 0
    for r in results:
        failed += r.summary["failed"]
        print(f"{r.summary['count']} calculation(s), {r.summary['failed']} failed -> {r.summary_path}")
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    if ns.command is None:
        parser.print_usage(sys.stderr)
        return 2

    if ns.command == "demo":
        write_demo(sys.stdout)
        return 0

    try:
        if ns.command == "run":
            return _run(ns)
        outcome = _calculate(ns)
    except SystemExit as e:
        # Validation failures carry a message; keep exit codes shell-friendly
        if isinstance(e.code, int):
            return e.code
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if not outcome.ok:
        emit_diagnostic(outcome)
        return 1
    print(describe(outcome, percent=ns.command == "irr"))
    return 0


__all__ = ["main", "parse_args"]
