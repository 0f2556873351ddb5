# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Static analysis over expression node trees.

collect_external_refs() reports which external values a tree reads and which ones
its `set` nodes write, so a scheduler can attach a compiled tree to its inputs.
"""

from dataclasses import dataclass, field
from typing import Any

from ..api.externals import ExternalRef, WritableRef
from .evaluators import get_default_evaluators
from .nodes import SetNode, ValueNode, iter_operands
from .registry import EvaluatorRegistry

__all__ = ["ExternalRefs", "collect_external_refs"]


@dataclass
class ExternalRefs:
    """Refs in first-seen order, deduplicated by identity."""

    reads: list[ExternalRef] = field(default_factory=list)
    writes: list[WritableRef] = field(default_factory=list)

    def _add(self, bucket: list[Any], ref: Any) -> None:
        if not any(r is ref for r in bucket):
            bucket.append(ref)


def collect_external_refs(element: Any, *, registry: EvaluatorRegistry | None = None) -> ExternalRefs:
    """Walk a node tree (models or mappings) and collect read and written refs."""
    acc = ExternalRefs()
    _walk(element, get_default_evaluators() if registry is None else registry, acc)
    return acc


def _walk(element: Any, registry: EvaluatorRegistry, acc: ExternalRefs) -> None:
    if element is None or isinstance(element, (int, float)):
        return
    if isinstance(element, ExternalRef):
        acc._add(acc.reads, element)
        return
    node, _ = registry.resolve(element)
    if isinstance(node, ValueNode) and isinstance(node.ref, ExternalRef):
        acc._add(acc.reads, node.ref)
    for child in iter_operands(node):
        _walk(child, registry, acc)
    if isinstance(node, SetNode) and isinstance(node.target, WritableRef):
        acc._add(acc.writes, node.target)
