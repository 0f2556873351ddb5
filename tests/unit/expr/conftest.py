from __future__ import annotations

import pytest

from exprkit.core.config import CompilerConfig
from exprkit.graph.evaluators import create_evaluator, get_default_evaluators

pytestmark = [pytest.mark.unit, pytest.mark.expr]


@pytest.fixture
def registry():
    """Fresh default registry (tests may register extra kinds on it)."""
    return get_default_evaluators()


@pytest.fixture
def run(registry):
    """
    Compile and evaluate once: run(node) -> float.
    Extra kwargs are forwarded as CompilerConfig overrides.
    """

    def _run(element, **cfg):
        producer = create_evaluator(element, registry=registry, config=CompilerConfig(**cfg))
        return producer()

    return _run
