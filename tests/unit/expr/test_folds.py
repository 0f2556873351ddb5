"""
Unit tests: variadic numeric folds (add/sub/.../and/or).

Covers the two-operand result, left-to-right folding of `others`, and the
IEEE edge cases the animation runtime relies on (x/0, overflow, floored modulo).
"""

from __future__ import annotations

import math

import pytest

from exprkit import compile_expr
from exprkit.api.errors import MissingOperand
from exprkit.graph.nodes import BinaryNode
from tests.helpers import RecordingRef

pytestmark = [pytest.mark.unit, pytest.mark.expr]


@pytest.mark.parametrize(
    "kind,a,b,expected",
    [
        ("add", 3, 4, 7.0),
        ("sub", 10, 4, 6.0),
        ("multiply", 3, 4, 12.0),
        ("divide", 1, 4, 0.25),
        ("pow", 2, 10, 1024.0),
        ("modulo", 7, 3, 1.0),
        ("max", 3, 9, 9.0),
        ("min", 3, 9, 3.0),
        ("and", 2, 3, 1.0),
        ("and", 2, 0, 0.0),
        ("or", 0, 0, 0.0),
        ("or", 0, 5, 1.0),
    ],
)
def test_binary_two_operands(run, kind, a, b, expected):
    """Without `others` the result is exactly f(a, b)."""
    assert run({"kind": kind, "a": a, "b": b}) == expected


@pytest.mark.parametrize(
    "kind,operands,expected",
    [
        ("add", [1, 2, 3, 4], 10.0),
        ("sub", [100, 10, 20, 5], 65.0),
        ("multiply", [2, 3, 4], 24.0),
        ("divide", [120, 2, 3, 4], 5.0),
        ("pow", [2, 3, 2], 64.0),
        ("modulo", [17, 10, 4], 3.0),
        ("max", [1, 7, 3, 9, 2], 9.0),
        ("min", [4, 7, -3, 9, 2], -3.0),
        ("and", [1, 1, 0], 0.0),
        ("or", [0, 0, 3], 1.0),
    ],
)
def test_others_fold_left_to_right(run, kind, operands, expected):
    """others=[c, d] gives f(f(f(a, b), c), d); order matters for sub/divide/pow/modulo."""
    a, b, *others = operands
    assert run(BinaryNode(kind=kind, a=a, b=b, others=others)) == expected


def test_others_evaluated_in_order():
    """a, b, then each of `others` is read left to right on every pass."""
    journal: list = []
    refs = [RecordingRef(i, name=f"r{i}", journal=journal) for i in range(4)]
    producer = compile_expr({"kind": "add", "a": refs[0], "b": refs[1], "others": refs[2:]})

    assert producer() == 6.0
    assert journal == [("read", "r0"), ("read", "r1"), ("read", "r2"), ("read", "r3")]


@pytest.mark.parametrize("p", [-9, -4, -1, 0, 1, 5, 13])
def test_modulo_is_non_negative_for_positive_divisor(run, p):
    """Floored modulo: modulo(-1, 4) == 3, never the truncated -1."""
    r = run({"kind": "modulo", "a": p, "b": 4})
    assert 0 <= r < 4
    assert r == p % 4


def test_modulo_negative_divisor_and_zero(run):
    assert run({"kind": "modulo", "a": 1, "b": -4}) == -3.0
    assert math.isnan(run({"kind": "modulo", "a": 5, "b": 0}))


@pytest.mark.parametrize(
    "a,b,expected",
    [
        (1, 0, math.inf),
        (-1, 0, -math.inf),
        (1, -0.0, -math.inf),
    ],
)
def test_divide_by_zero_is_infinite(run, a, b, expected):
    assert run({"kind": "divide", "a": a, "b": b}) == expected


def test_zero_over_zero_is_nan(run):
    assert math.isnan(run({"kind": "divide", "a": 0, "b": 0}))


def test_pow_edge_cases(run):
    """pow never raises: overflow -> inf, complex results -> nan, 0**-1 -> inf."""
    assert run({"kind": "pow", "a": 10, "b": 400}) == math.inf
    assert run({"kind": "pow", "a": -10, "b": 401}) == -math.inf
    assert math.isnan(run({"kind": "pow", "a": -8, "b": 1 / 3}))
    assert run({"kind": "pow", "a": 0, "b": -1}) == math.inf
    assert run({"kind": "pow", "a": math.nan, "b": 0}) == 1.0


def test_logical_ops_treat_nan_as_false(run):
    assert run({"kind": "and", "a": math.nan, "b": 1}) == 0.0
    assert run({"kind": "or", "a": math.nan, "b": 0}) == 0.0


def test_zero_operands_are_present(run):
    """A literal 0 is a real operand, not a missing one."""
    assert run({"kind": "add", "a": 0, "b": 0}) == 0.0
    assert run({"kind": "multiply", "a": 0, "b": 5}) == 0.0


@pytest.mark.parametrize("missing", ["a", "b"])
def test_missing_operand_raises_before_evaluation(missing):
    """MissingOperand is a compile-time error; no operand is read."""
    ref = RecordingRef(1)
    node = {"kind": "sub", "a": ref, "b": ref}
    del node[missing]
    with pytest.raises(MissingOperand) as ei:
        compile_expr(node)
    assert ei.value.field == missing
    assert ei.value.kind == "sub"
    assert ref.journal == []
