from __future__ import annotations

from typing import Any, Dict, Mapping, Optional
import os
import io
import yaml

from .finance.irr import DEFAULT_CONFIG, IRRConfig

IRR_KEYS = ("guess", "tolerance", "max_iterations")


def _read_text(source: str | os.PathLike | io.StringIO) -> str:
    if hasattr(source, "read"):
        return str(source.read())
    with open(os.fspath(source), "r", encoding="utf-8") as f:
        return f.read()


def load_config(source: str | os.PathLike | io.StringIO) -> Dict[str, Any]:
    """
    Load a batch file from a path or text stream.
    A document that is not a mapping raises SystemExit.
    """
    cfg = yaml.safe_load(_read_text(source))
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise SystemExit(f"batch file must be a mapping, got {type(cfg).__name__}")
    return cfg


def irr_config_from(
    section: Optional[Mapping[str, Any]],
    base: IRRConfig = DEFAULT_CONFIG,
) -> IRRConfig:
    """
    Build IRRConfig from a mapping such as the file's `irr:` section or a
    single calculation. Missing keys fall back to `base`.
    """
    section = section or {}
    try:
        return IRRConfig(
            guess=float(section.get("guess", base.guess)),
            tolerance=float(section.get("tolerance", base.tolerance)),
            max_iterations=section.get("max_iterations", base.max_iterations),
        )
    except (TypeError, ValueError) as e:
        raise SystemExit(f"invalid irr settings: {e}")


__all__ = ["IRR_KEYS", "load_config", "irr_config_from"]
