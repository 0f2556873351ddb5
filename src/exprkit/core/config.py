from __future__ import annotations

"""
exprkit.core.config
===================

Compiler configuration.
- No external deps; optional JSON file loading.
- Small env overrides for convenience.

If a config file path is not provided or not found, sane defaults are used.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_TRUTHY = ("1", "true", "yes", "on")


def _parse_bool_env(name: str) -> bool | None:
    val = os.getenv(name)
    if val is None or val.strip() == "":
        return None
    return val.strip().lower() in _TRUTHY


def _try_load_json(path: Path | None) -> dict[str, Any]:
    if not path:
        return {}
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            return data if isinstance(data, dict) else {}
    except (OSError, ValueError):
        # Fail soft (callers may still override)
        pass
    return {}


# ---------------------------------------------------------------------------


@dataclass
class CompilerConfig:
    """Options for create_evaluator(), loaded from JSON/env/overrides."""

    # ---- Limits
    max_depth: int = 200

    # ---- Diagnostics
    trace_compile: bool = False
    warn_absent: bool = True

    # ---- Methods ------------------------------------------------------------

    def __post_init__(self) -> None:
        if not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool) or self.max_depth <= 0:
            raise ValueError("max_depth must be a positive integer")
        self.trace_compile = bool(self.trace_compile)
        self.warn_absent = bool(self.warn_absent)

    # Loader
    @classmethod
    def load(cls, path: Path | str | None = None, *, overrides: dict[str, Any] | None = None) -> CompilerConfig:
        """
        Load config from JSON file (if provided), then apply env and overrides.

        Env overrides:
          - EXPRKIT_MAX_DEPTH
          - EXPRKIT_TRACE_COMPILE=1|true
          - EXPRKIT_WARN_ABSENT=0|false
        """
        data: dict[str, Any] = {}

        # File
        file_path: Path | None = Path(path) if path else None
        data.update(_try_load_json(file_path))

        # Env
        depth = os.getenv("EXPRKIT_MAX_DEPTH")
        if depth:
            try:
                data["max_depth"] = int(depth)
            except ValueError:
                raise ValueError("EXPRKIT_MAX_DEPTH must be an integer") from None
        trace = _parse_bool_env("EXPRKIT_TRACE_COMPILE")
        if trace is not None:
            data["trace_compile"] = trace
        warn = _parse_bool_env("EXPRKIT_WARN_ABSENT")
        if warn is not None:
            data["warn_absent"] = warn

        # Overrides
        if overrides:
            data.update(overrides)

        return cls(**data)
