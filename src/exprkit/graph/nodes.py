# src/exprkit/graph/nodes.py
from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from .numeric import to_number

# -------------------------------
# Kind literals
# -------------------------------

BinaryKind = Literal["add", "sub", "multiply", "divide", "pow", "modulo", "max", "min", "and", "or"]
UnaryKind = Literal[
    "abs",
    "sqrt",
    "log",
    "sin",
    "cos",
    "tan",
    "acos",
    "asin",
    "atan",
    "exp",
    "round",
    "ceil",
    "floor",
    "not",
]
CompareKind = Literal["eq", "neq", "lessThan", "greaterThan", "lessOrEq", "greaterOrEq"]

# An operand is a number, an ExternalRef, a node model, or a node mapping.
# None is the only "absent" marker; 0 is a present operand.
Operand = Any

_NODE_CONFIG = {"extra": "forbid", "frozen": True, "populate_by_name": True}


# -------------------------------
# Node models
# -------------------------------


class BinaryNode(BaseModel):
    """Variadic numeric fold: f(f(f(a, b), others[0]), others[1]) ..."""

    kind: BinaryKind
    a: Operand = None
    b: Operand = None
    others: list[Operand] | None = None
    model_config = _NODE_CONFIG

    def operands(self) -> list[Operand]:
        return [x for x in (self.a, self.b, *(self.others or ())) if x is not None]


class UnaryNode(BaseModel):
    kind: UnaryKind
    v: Operand = None
    model_config = _NODE_CONFIG

    def operands(self) -> list[Operand]:
        return [self.v] if self.v is not None else []


class CompareNode(BaseModel):
    kind: CompareKind
    left: Operand = None
    right: Operand = None
    model_config = _NODE_CONFIG

    def operands(self) -> list[Operand]:
        return [x for x in (self.left, self.right) if x is not None]


class CondNode(BaseModel):
    """Evaluates exactly one branch per pass; both branches compile eagerly."""

    kind: Literal["cond"] = "cond"
    expr: Operand = None
    if_node: Operand = Field(default=None, alias="ifNode")
    else_node: Operand = Field(default=None, alias="elseNode")
    model_config = _NODE_CONFIG

    def operands(self) -> list[Operand]:
        return [x for x in (self.expr, self.if_node, self.else_node) if x is not None]


class SetNode(BaseModel):
    kind: Literal["set"] = "set"
    source: Operand = None
    target: Any = None
    model_config = _NODE_CONFIG

    def operands(self) -> list[Operand]:
        return [self.source] if self.source is not None else []


class BlockNode(BaseModel):
    kind: Literal["block"] = "block"
    nodes: list[Operand] | None = None
    model_config = _NODE_CONFIG

    def operands(self) -> list[Operand]:
        return list(self.nodes or ())


class CallNode(BaseModel):
    kind: Literal["call"] = "call"
    args: list[Operand] | None = None
    callback: Callable[[list[float]], Any] | None = None
    model_config = _NODE_CONFIG

    def operands(self) -> list[Operand]:
        return list(self.args or ())


class ValueNode(BaseModel):
    """Leaf reading an external value at evaluation time."""

    kind: Literal["value"] = "value"
    ref: Any = None
    model_config = _NODE_CONFIG

    def operands(self) -> list[Operand]:
        return []


class NumberNode(BaseModel):
    kind: Literal["number"] = "number"
    value: float
    model_config = _NODE_CONFIG

    @field_validator("value", mode="before")
    @classmethod
    def _saturate_ints(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return to_number(v)
        return v

    def operands(self) -> list[Operand]:
        return []


ExpressionNode = (
    BinaryNode | UnaryNode | CompareNode | CondNode | SetNode | BlockNode | CallNode | ValueNode | NumberNode
)


# -------------------------------
# Helpers
# -------------------------------


def node_kind(element: Any) -> str | None:
    """Return the `kind` tag of a node model or mapping, or None when untagged."""
    if isinstance(element, Mapping):
        kind = element.get("kind")
    else:
        kind = getattr(element, "kind", None)
    return kind if isinstance(kind, str) and kind else None


def field_label(node: BaseModel, name: str) -> str:
    """Authoring-format name of a model field (its alias when one is set)."""
    info = type(node).model_fields.get(name)
    return (info.alias if info is not None and info.alias else None) or name


def iter_operands(node: BaseModel) -> Iterator[Operand]:
    operands = getattr(node, "operands", None)
    if callable(operands):
        yield from operands()


__all__ = [
    "BinaryKind",
    "BinaryNode",
    "BlockNode",
    "CallNode",
    "CompareKind",
    "CompareNode",
    "CondNode",
    "ExpressionNode",
    "NumberNode",
    "Operand",
    "SetNode",
    "UnaryKind",
    "UnaryNode",
    "ValueNode",
    "field_label",
    "iter_operands",
    "node_kind",
]
