from __future__ import annotations

"""
exprkit.core.log
================

Logging for the expression compiler.

Records go to the `exprkit` logger tree and are silent by default (NullHandler).
Call sites pass structured fields as keywords:

    log.debug("expr.compile.node", event="expr.compile.node", kind="add", depth=2)

Fields bound with log_context()/bind_context() (a scheduler's tree id, a tick
number) are copied onto every record. CompileFormatter renders the compiler's own
fields (event, kind, depth, code) in a fixed order after the message.
"""

import contextvars
import logging
import os
import sys
import threading
from contextlib import contextmanager
from typing import Any, ClassVar, TextIO

__all__ = [
    "CompileFormatter",
    "bind_context",
    "configure_from_env",
    "disable_logging",
    "enable_logging",
    "get_logger",
    "has_warned",
    "log_context",
    "set_level",
    "warn_once",
]

_ROOT = "exprkit"
_HANDLER_NAME = "_exprkit_handler"

# Attribute names a LogRecord already owns; keyword fields must not clobber them.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

# ---------- Context ----------

_log_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar("exprkit_log_ctx", default=None)


def _present(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if v is not None}


def bind_context(**fields: Any) -> None:
    """Merge fields into the log context of the current task/thread."""
    _log_context.set({**(_log_context.get() or {}), **_present(fields)})


@contextmanager
def log_context(**fields: Any):
    """Add fields to the log context for the duration of the block."""
    token = _log_context.set({**(_log_context.get() or {}), **_present(fields)})
    try:
        yield
    finally:
        _log_context.reset(token)


class ContextFilter(logging.Filter):
    """Copy context fields onto the record; explicit keyword fields win."""

    def filter(self, record: logging.LogRecord) -> bool:
        for k, v in (_log_context.get() or {}).items():
            record.__dict__.setdefault(k, v)
        return True


# ---------- Adapter ----------


class _KwExtraAdapter(logging.LoggerAdapter):
    """Turn arbitrary keyword arguments into `extra` fields on the record."""

    _passthrough: ClassVar[frozenset[str]] = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})

    def process(self, msg, kwargs):
        extra = kwargs.get("extra")
        extra = dict(extra) if isinstance(extra, dict) else {}
        for k in [k for k in kwargs if k not in self._passthrough]:
            extra.setdefault(f"field_{k}" if k in _RECORD_ATTRS else k, kwargs.pop(k))
        kwargs["extra"] = extra
        return msg, kwargs


# ---------- Formatter ----------


class CompileFormatter(logging.Formatter):
    """
    `LEVEL logger: message [event=.. kind=.. depth=.. code=..] {context}`

    Compiler fields come first in a fixed order; remaining context fields
    follow sorted by name.
    """

    fields: ClassVar[tuple[str, ...]] = ("event", "kind", "depth", "code")

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname:<7} {record.name}: {record.getMessage()}"
        own = [f"{k}={record.__dict__[k]}" for k in self.fields if record.__dict__.get(k) is not None]
        if own:
            line += f"  [{' '.join(own)}]"
        ctx = _log_context.get() or {}
        rest = sorted(k for k in ctx if k not in self.fields)
        if rest:
            line += "  {" + ", ".join(f"{k}={ctx[k]}" for k in rest) + "}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


# ---------- warn_once ----------

_WARNED: set[str] = set()
_WARNED_LOCK = threading.Lock()


def has_warned(code: str) -> bool:
    """True once warn_once() has fired for `code` in this process."""
    return code in _WARNED


def warn_once(
    logger: logging.Logger | logging.LoggerAdapter,
    code: str,
    msg: str,
    *,
    level: int = logging.WARNING,
    **extra: Any,
) -> None:
    """Log `msg` the first time `code` is seen in this process; later calls are dropped."""
    with _WARNED_LOCK:
        if code in _WARNED:
            return
        _WARNED.add(code)
    adapter = logger if isinstance(logger, logging.LoggerAdapter) else _KwExtraAdapter(logger, {})
    adapter.log(level, msg, code=code, **extra)


def _reset_warn_once() -> None:
    with _WARNED_LOCK:
        _WARNED.clear()


# ---------- Setup ----------

_bootstrapped = False


def _bootstrap_minimal() -> None:
    global _bootstrapped
    if _bootstrapped:
        return
    root = logging.getLogger(_ROOT)
    if not any(isinstance(h, logging.NullHandler) for h in root.handlers):
        root.addHandler(logging.NullHandler())
    if not any(isinstance(f, ContextFilter) for f in root.filters):
        root.addFilter(ContextFilter())
    _bootstrapped = True


def get_logger(name: str | None = None) -> logging.LoggerAdapter:
    """Logger under `exprkit` (e.g. get_logger("compiler") -> exprkit.compiler)."""
    _bootstrap_minimal()
    base = logging.getLogger(_ROOT)
    return _KwExtraAdapter(base.getChild(name) if name else base, {})


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {level!r}")
    return resolved


def set_level(level: int | str) -> None:
    logging.getLogger(_ROOT).setLevel(_resolve_level(level))


def enable_logging(*, level: int | str = logging.DEBUG, stream: TextIO | None = None) -> logging.Handler:
    """Attach one CompileFormatter stream handler (stderr by default), replacing an earlier one."""
    _bootstrap_minimal()
    disable_logging()
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(_resolve_level(level))
    handler.setFormatter(CompileFormatter())
    logging.getLogger(_ROOT).addHandler(handler)
    return handler


def disable_logging() -> None:
    root = logging.getLogger(_ROOT)
    for h in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(h)


def configure_from_env() -> bool:
    """
    Apply EXPRKIT_LOG_LEVEL (default WARNING) and, when EXPRKIT_LOG_STDERR is
    truthy, attach the stream handler. Returns whether a handler was attached.
    """
    level = os.getenv("EXPRKIT_LOG_LEVEL", "WARNING")
    set_level(level)
    if os.getenv("EXPRKIT_LOG_STDERR", "").lower() in ("1", "true", "yes", "on"):
        enable_logging(level=level)
        return True
    disable_logging()
    return False


_bootstrap_minimal()
