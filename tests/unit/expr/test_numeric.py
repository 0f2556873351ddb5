"""
Unit tests: numeric helpers (coercion, truthiness, IEEE-safe reducers).
"""

from __future__ import annotations

import math

import pytest

from exprkit.graph.numeric import divide, is_truthy, maximum, minimum, power, remainder, to_number

pytestmark = [pytest.mark.unit, pytest.mark.expr]


@pytest.mark.parametrize(
    "raw,expected",
    [(3, 3.0), (2.5, 2.5), (True, 1.0), ("4", 4.0)],
)
def test_to_number(raw, expected):
    assert to_number(raw) == expected


@pytest.mark.parametrize("raw", [None, "abc", object()])
def test_to_number_non_numeric_is_nan(raw):
    assert math.isnan(to_number(raw))


def test_to_number_saturates_huge_ints():
    assert to_number(10**400) == math.inf
    assert to_number(-(10**400)) == -math.inf


@pytest.mark.parametrize(
    "x,expected",
    [(1.0, True), (-0.5, True), (math.inf, True), (0.0, False), (-0.0, False), (math.nan, False)],
)
def test_is_truthy(x, expected):
    assert is_truthy(x) is expected


def test_remainder_is_truncated():
    assert remainder(-1.0, 4.0) == -1.0
    assert remainder(5.0, math.inf) == 5.0
    assert math.isnan(remainder(math.inf, 2.0))


def test_divide_never_raises():
    assert divide(-3.0, -0.0) == math.inf
    assert math.isnan(divide(math.nan, 0.0))
    assert divide(6.0, 3.0) == 2.0


def test_power_unit_base_with_infinite_exponent_is_nan():
    assert math.isnan(power(1.0, math.inf))
    assert math.isnan(power(2.0, math.nan))


def test_max_min_keep_previous_on_nan_candidate():
    assert maximum(3.0, math.nan) == 3.0
    assert minimum(3.0, math.nan) == 3.0
