# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Evaluator registry: node kind -> (node model, compiler function).

The registry is the single dispatch table used by create_evaluator(). Unknown kinds
are rejected with UnknownNodeKind; node mappings are validated into the registered
model before their compiler runs.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from ..api.errors import InvalidNode, MissingElementType, RegistryError, UnknownNodeKind
from .nodes import node_kind

if TYPE_CHECKING:
    from .evaluators import CompileContext, Producer

__all__ = ["Evaluator", "EvaluatorRegistry"]

Compiler = Callable[[Any, "CompileContext"], "Producer"]


@dataclass(frozen=True)
class Evaluator:
    """Registered handler for one node kind."""

    kind: str
    model: type[BaseModel]
    compile: Compiler


def _summarize(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(x) for x in e.get("loc", ())) or "node"
        parts.append(f"{loc}: {e.get('msg', 'invalid')}")
    return "; ".join(parts)


class EvaluatorRegistry:
    """Pluggable kind registry used by the expression compiler."""

    def __init__(self) -> None:
        self._by_kind: dict[str, Evaluator] = {}

    def register(self, kind: str, model: type[BaseModel], compiler: Compiler) -> None:
        if not kind or not isinstance(kind, str) or kind.strip() != kind:
            raise RegistryError("empty/invalid node kind")
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            raise RegistryError(f"model for {kind!r} must be a pydantic model class")
        if not callable(compiler):
            raise RegistryError(f"compiler for {kind!r} is not callable")
        # last-wins to allow overrides
        self._by_kind[kind] = Evaluator(kind=kind, model=model, compile=compiler)

    def get(self, kind: str) -> Evaluator:
        try:
            return self._by_kind[kind]
        except KeyError:
            raise UnknownNodeKind(kind) from None

    def kinds(self) -> list[str]:
        return sorted(self._by_kind.keys())

    def __contains__(self, kind: object) -> bool:
        return kind in self._by_kind

    def __len__(self) -> int:
        return len(self._by_kind)

    def resolve(self, element: Any) -> tuple[BaseModel, Evaluator]:
        """
        Look up the evaluator for a tagged element and return it with the
        validated node model.

        Raises MissingElementType (no tag), UnknownNodeKind, or InvalidNode.
        """
        kind = node_kind(element)
        if kind is None:
            raise MissingElementType(element)
        entry = self.get(kind)
        if isinstance(element, entry.model):
            return element, entry
        try:
            node = entry.model.model_validate(element, from_attributes=not isinstance(element, Mapping))
        except ValidationError as e:
            raise InvalidNode(kind, _summarize(e)) from e
        return node, entry
