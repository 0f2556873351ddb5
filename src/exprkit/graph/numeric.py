# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Numeric semantics for the expression evaluator.

All values are IEEE-754 doubles. Python's float operators and `math` functions
raise on several inputs where the animation runtime expects a degraded value
instead (x/0, sqrt(-1), overflow in pow/exp). The helpers below never raise:
domain errors give nan, overflow gives +/-inf.

Notes:
- `%` follows the host runtime's truncated remainder (sign of the dividend),
  `modulo()` then turns it into a floored, non-negative-for-positive-divisor result.
- `round()` rounds halves toward +inf.
"""

import math
from collections.abc import Callable
from typing import Any

__all__ = [
    "UNARY_FUNCTIONS",
    "divide",
    "is_truthy",
    "maximum",
    "minimum",
    "modulo",
    "power",
    "remainder",
    "to_number",
]


def to_number(x: Any) -> float:
    """Coerce an operand value to float; absent (None) and non-numeric values become nan."""
    if x is None:
        return math.nan
    if isinstance(x, float):
        return x
    try:
        return float(x)
    except OverflowError:
        # ints beyond the double range saturate to +/-inf
        if isinstance(x, int):
            return math.inf if x > 0 else -math.inf
        return math.nan
    except (TypeError, ValueError):
        return math.nan


def is_truthy(x: float) -> bool:
    """Nonzero and not NaN."""
    return x != 0 and not math.isnan(x)


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and int(x) % 2 == 1


# ---- binary reducers


def divide(p: float, c: float) -> float:
    if c == 0:
        if p == 0 or math.isnan(p):
            return math.nan
        return math.copysign(math.inf, p) * math.copysign(1.0, c)
    return p / c


def power(p: float, c: float) -> float:
    if math.isnan(c):
        return math.nan
    if c == 0:
        return 1.0
    if math.isnan(p):
        return math.nan
    if abs(p) == 1 and math.isinf(c):
        return math.nan
    try:
        return math.pow(p, c)
    except OverflowError:
        return -math.inf if p < 0 and _is_odd_integer(c) else math.inf
    except ValueError:
        if p == 0:
            # 0 ** negative exponent
            negative_zero = math.copysign(1.0, p) < 0
            return -math.inf if negative_zero and _is_odd_integer(c) else math.inf
        return math.nan


def remainder(p: float, c: float) -> float:
    """Truncated remainder; sign follows the dividend."""
    if math.isnan(p) or math.isnan(c) or c == 0 or math.isinf(p):
        return math.nan
    if math.isinf(c):
        return p
    return math.fmod(p, c)


def modulo(p: float, c: float) -> float:
    return remainder(remainder(p, c) + c, c)


def maximum(p: float, c: float) -> float:
    return c if c > p else p


def minimum(p: float, c: float) -> float:
    return c if c < p else p


# ---- unary functions


def _safe(fn: Callable[[float], float]) -> Callable[[float], float]:
    def wrapped(x: float) -> float:
        try:
            return float(fn(x))
        except OverflowError:
            return math.inf
        except ValueError:
            return math.nan

    wrapped.__name__ = getattr(fn, "__name__", "fn")
    return wrapped


def _log(x: float) -> float:
    if x == 0:
        return -math.inf
    if x < 0 or math.isnan(x):
        return math.nan
    return math.log(x)


def _round(x: float) -> float:
    if not math.isfinite(x):
        return x
    r = math.floor(x)
    return float(r + 1) if x - r >= 0.5 else float(r)


def _ceil(x: float) -> float:
    return float(math.ceil(x)) if math.isfinite(x) else x


def _floor(x: float) -> float:
    return float(math.floor(x)) if math.isfinite(x) else x


def _not(x: float) -> float:
    return 0.0 if is_truthy(x) else 1.0


UNARY_FUNCTIONS: dict[str, Callable[[float], float]] = {
    "abs": abs,
    "sqrt": _safe(math.sqrt),
    "log": _log,
    "sin": _safe(math.sin),
    "cos": _safe(math.cos),
    "tan": _safe(math.tan),
    "acos": _safe(math.acos),
    "asin": _safe(math.asin),
    "atan": math.atan,
    "exp": _safe(math.exp),
    "round": _round,
    "ceil": _ceil,
    "floor": _floor,
    "not": _not,
}
