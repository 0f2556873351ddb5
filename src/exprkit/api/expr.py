# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Public expression engine surface.

compile_expr() is the one entry point the surrounding animation system calls;
evaluate() runs a single evaluation pass of a compiled producer.
"""

from typing import Any

from ..core.config import CompilerConfig
from ..graph.evaluators import Producer, create_evaluator
from ..graph.registry import EvaluatorRegistry

__all__ = ["Producer", "compile_expr", "evaluate"]


def compile_expr(
    element: Any,
    *,
    registry: EvaluatorRegistry | None = None,
    config: CompilerConfig | None = None,
) -> Producer:
    """Compile a number, an ExternalRef, or a node tree into a producer."""
    return create_evaluator(element, registry=registry, config=config)


def evaluate(producer: Producer) -> float:
    """Run one evaluation pass and return its result."""
    return producer()
