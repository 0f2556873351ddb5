# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Public exports for the graph package: node models, the evaluator registry and
the compiler.
"""

from .analysis import ExternalRefs, collect_external_refs
from .evaluators import CompileContext, Producer, create_evaluator, get_default_evaluators
from .nodes import (
    BinaryNode,
    BlockNode,
    CallNode,
    CompareNode,
    CondNode,
    ExpressionNode,
    NumberNode,
    SetNode,
    UnaryNode,
    ValueNode,
)
from .registry import Evaluator, EvaluatorRegistry

__all__ = [
    "BinaryNode",
    "BlockNode",
    "CallNode",
    "CompareNode",
    "CompileContext",
    "CondNode",
    "Evaluator",
    "EvaluatorRegistry",
    "ExpressionNode",
    "ExternalRefs",
    "NumberNode",
    "Producer",
    "SetNode",
    "UnaryNode",
    "ValueNode",
    "collect_external_refs",
    "create_evaluator",
    "get_default_evaluators",
]
