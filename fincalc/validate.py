# fincalc/validate.py
from __future__ import annotations
import os, sys, json
from numbers import Real
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .config import IRR_KEYS, load_config

# kind -> required numeric fields ("cashflows" is a list of numbers)
KINDS: Dict[str, tuple] = {
    "future_value": ("present_value", "rate", "periods"),
    "present_value": ("future_value", "rate", "periods"),
    "npv": ("rate", "cashflows"),
    "simple_interest": ("principal", "rate", "time"),
    "compound_interest": ("principal", "rate", "frequency", "time"),
    "irr": ("cashflows",),
}
OPTIONAL: Dict[str, tuple] = {"irr": IRR_KEYS}
TOP_LEVEL = {"calculations", "irr"}


def _mode_from_env_or_flag(flag: str | None) -> str:
    if flag in ("strict", "relaxed"):
        return flag
    env = (os.environ.get("VALIDATION_MODE") or "").lower()
    return env if env in ("strict", "relaxed") else "relaxed"


def _is_number(v: Any) -> bool:
    return isinstance(v, Real) and not isinstance(v, bool)


def validate_calculation(calc: Any, *, index: int = 0, mode: str = "relaxed") -> None:
    """
    Structural checks only. Out-of-domain numbers (negative periods, rate <= -1)
    are left to the calculation, which reports them as a failed outcome.
    """
    where = f"calculations[{index}]"
    if not isinstance(calc, dict):
        raise SystemExit(f"{where}: expected a mapping")
    kind = calc.get("kind")
    if kind not in KINDS:
        raise SystemExit(f"{where}: unknown kind {kind!r} (expected one of {sorted(KINDS)})")

    required = KINDS[kind]
    missing = [k for k in required if k not in calc]
    if missing:
        raise SystemExit(f"{where}: missing required keys for {kind}: {missing}")

    for k in required + OPTIONAL.get(kind, ()):
        if k not in calc:
            continue
        v = calc[k]
        if k == "cashflows":
            if not isinstance(v, list) or not all(_is_number(x) for x in v):
                raise SystemExit(f"{where}: cashflows must be a list of numbers")
        elif not _is_number(v):
            raise SystemExit(f"{where}: {k} must be a number, got {v!r}")

    if mode == "strict":
        if "name" not in calc:
            raise SystemExit(f"{where}: name is required (strict mode)")
        allowed = {"name", "kind"} | set(required) | set(OPTIONAL.get(kind, ()))
        unknown = [k for k in calc.keys() if k not in allowed]
        if unknown:
            raise SystemExit(f"{where}: unknown keys (strict mode): {unknown}")


def validate_params_dict(data: Dict[str, Any], *, mode: str = "relaxed") -> None:
    """
    Minimal guardrails:
      - relaxed: require a non-empty `calculations` list of known kinds
      - strict : also reject unknown keys at top level and per calculation
    """
    if "calculations" not in data:
        raise SystemExit("missing required keys: ['calculations']")
    calcs = data["calculations"]
    if not isinstance(calcs, list) or not calcs:
        raise SystemExit("calculations must be a non-empty list")

    if mode == "strict":
        unknown = [k for k in data.keys() if k not in TOP_LEVEL]
        if unknown:
            raise SystemExit(f"unknown top-level keys (strict mode): {unknown}")

    irr_section = data.get("irr")
    if irr_section is not None:
        if not isinstance(irr_section, dict):
            raise SystemExit("irr must be a mapping")
        for k, v in irr_section.items():
            if k not in IRR_KEYS:
                if mode == "strict":
                    raise SystemExit(f"irr: unknown key (strict mode): {k}")
                continue
            if not _is_number(v):
                raise SystemExit(f"irr: {k} must be a number, got {v!r}")

    for i, calc in enumerate(calcs):
        validate_calculation(calc, index=i, mode=mode)


def load_params_from_file(path: Path) -> Dict[str, Any]:
    p = Path(path)
    if p.is_dir():
        # the runner handles directories; keep this function file-only
        raise SystemExit(f"{p} is a directory (expected a file)")
    if p.suffix.lower() == ".json":
        data = json.loads(p.read_text(encoding="utf-8") or "{}")
        if not isinstance(data, dict):
            raise SystemExit(f"batch file must be a mapping, got {type(data).__name__}")
        return data
    return load_config(p)


def _iter_input_files(p: Path) -> Iterable[Path]:
    if p.is_file():
        yield p
    elif p.is_dir():
        for ext in ("*.yaml", "*.yml", "*.json"):
            yield from sorted(p.rglob(ext))


def _main(argv: List[str] | None = None) -> int:
    import argparse
    parser = argparse.ArgumentParser(prog="fincalc.validate", add_help=True)
    parser.add_argument("paths", nargs="+", help="YAML/JSON batch files or directories to validate")
    parser.add_argument("--mode", choices=["strict", "relaxed"], default=None, help="validation mode")
    args = parser.parse_args(argv)

    mode = _mode_from_env_or_flag(args.mode)
    had_error = False

    for raw in args.paths:
        target = Path(raw)
        any_seen = False
        for f in _iter_input_files(target):
            if not f.is_file():
                continue
            any_seen = True
            try:
                data = load_params_from_file(f)
                validate_params_dict(data, mode=mode)
                print(f"OK: {f}")
            except SystemExit as e:
                print(f"{f}: {e}", file=sys.stderr)
                had_error = True
            except Exception as e:
                print(f"{f}: ERROR: {e}", file=sys.stderr)
                had_error = True
        if not any_seen:
            print(f"{target}: no YAML/JSON files found", file=sys.stderr)
            had_error = True

    return 1 if had_error else 0


if __name__ == "__main__":
    raise SystemExit(_main())
