# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Expression compiler: node tree -> graph of zero-argument numeric producers.

Compilation is eager recursive descent. Each per-kind compiler compiles its operands
by calling back into the dispatcher and returns a closure composing them, so the
producer graph mirrors the node graph. Invoking the root producer is one evaluation
pass: operands run left to right, depth first, and external values are re-read
every time.

Leaves:
  - numbers compile to constants
  - ExternalRef objects compile to live reads (absent -> nan)
  - tagged nodes (pydantic models or mappings) dispatch through EvaluatorRegistry
"""

import operator
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from ..api.errors import CompileError, MissingOperand, NodeDepthExceeded
from ..api.externals import ExternalRef, WritableRef
from ..core.config import CompilerConfig
from ..core.log import get_logger, has_warned, warn_once
from .nodes import (
    BinaryNode,
    BlockNode,
    CallNode,
    CompareNode,
    CondNode,
    NumberNode,
    SetNode,
    UnaryNode,
    ValueNode,
    field_label,
    node_kind,
)
from .numeric import (
    UNARY_FUNCTIONS,
    divide,
    is_truthy,
    maximum,
    minimum,
    modulo,
    power,
    to_number,
)
from .registry import Compiler, EvaluatorRegistry

__all__ = ["CompileContext", "Producer", "create_evaluator", "get_default_evaluators"]

Producer = Callable[[], float]
Reducer = Callable[[float, float], float]

log = get_logger("compiler")
_ABSENT_CODE = "expr.value.absent"


@dataclass(frozen=True)
class CompileContext:
    """Per-compilation state handed to every kind compiler."""

    registry: EvaluatorRegistry
    config: CompilerConfig = field(default_factory=CompilerConfig)
    depth: int = 0

    def compile(self, element: Any) -> Producer:
        """Compile a nested operand one level deeper."""
        return _compile(element, replace(self, depth=self.depth + 1))

    def compile_all(self, elements: Iterable[Any] | None) -> list[Producer]:
        return [self.compile(e) for e in (elements or ())]


def create_evaluator(
    element: Any,
    *,
    registry: EvaluatorRegistry | None = None,
    config: CompilerConfig | None = None,
) -> Producer:
    """
    Compile a number, an ExternalRef, or an expression node into a producer.

    Raises a CompileError subclass (MissingElementType, UnknownNodeKind,
    MissingOperand, InvalidNode, NodeDepthExceeded) before anything is evaluated.
    """
    ctx = CompileContext(
        registry=get_default_evaluators() if registry is None else registry,
        config=CompilerConfig() if config is None else config,
    )
    root_kind = node_kind(element)
    log.debug("expr.compile.start", event="expr.compile.start", kind=root_kind)
    try:
        producer = _compile(element, ctx)
    except CompileError as e:
        log.debug(
            "expr.compile.failed",
            event="expr.compile.failed",
            kind=root_kind,
            error=type(e).__name__,
            detail=str(e),
        )
        raise
    log.debug("expr.compile.done", event="expr.compile.done", kind=root_kind)
    return producer


def _compile(element: Any, ctx: CompileContext) -> Producer:
    if ctx.depth > ctx.config.max_depth:
        raise NodeDepthExceeded(ctx.config.max_depth)

    if isinstance(element, (int, float)):
        constant = to_number(element)
        return lambda: constant

    if isinstance(element, ExternalRef):
        return _read(element, ctx)

    node, entry = ctx.registry.resolve(element)
    if ctx.config.trace_compile:
        log.debug("expr.compile.node", event="expr.compile.node", kind=entry.kind, depth=ctx.depth)
    return entry.compile(node, ctx)


def _read(ref: ExternalRef, ctx: CompileContext) -> Producer:
    warn_absent = ctx.config.warn_absent

    def produce() -> float:
        raw = ref.read()
        if raw is None and warn_absent and not has_warned(_ABSENT_CODE):
            warn_once(log, _ABSENT_CODE, "external value is absent; evaluating as nan", ref=repr(ref))
        return to_number(raw)

    return produce


def _require(node: Any, name: str) -> Any:
    value = getattr(node, name)
    if value is None:
        raise MissingOperand(node.kind, field_label(node, name))
    return value


# ---- folds


def multi(reducer: Reducer) -> Compiler:
    """Left fold of `reducer` over a, b, *others."""

    def compile_multi(node: BinaryNode, ctx: CompileContext) -> Producer:
        a = ctx.compile(_require(node, "a"))
        b = ctx.compile(_require(node, "b"))
        others = ctx.compile_all(node.others)
        if not others:
            return lambda: reducer(a(), b())

        def produce() -> float:
            acc = reducer(a(), b())
            for other in others:
                acc = reducer(acc, other())
            return acc

        return produce

    return compile_multi


def unary(fn: Callable[[float], float]) -> Compiler:
    def compile_unary(node: UnaryNode, ctx: CompileContext) -> Producer:
        v = ctx.compile(_require(node, "v"))
        return lambda: fn(v())

    return compile_unary


def boolean(compare: Callable[[float, float], bool]) -> Compiler:
    def compile_boolean(node: CompareNode, ctx: CompileContext) -> Producer:
        left = ctx.compile(_require(node, "left"))
        right = ctx.compile(_require(node, "right"))
        return lambda: 1.0 if compare(left(), right()) else 0.0

    return compile_boolean


def _logical_and(p: float, c: float) -> float:
    return 1.0 if is_truthy(p) and is_truthy(c) else 0.0


def _logical_or(p: float, c: float) -> float:
    return 1.0 if is_truthy(p) or is_truthy(c) else 0.0


# ---- control flow


def _zero() -> float:
    return 0.0


def compile_cond(node: CondNode, ctx: CompileContext) -> Producer:
    expr = ctx.compile(_require(node, "expr"))
    if_eval = ctx.compile(_require(node, "if_node"))
    else_eval = ctx.compile(node.else_node) if node.else_node is not None else _zero

    def produce() -> float:
        if is_truthy(expr()):
            return if_eval()
        return else_eval()

    return produce


def compile_set(node: SetNode, ctx: CompileContext) -> Producer:
    source = ctx.compile(_require(node, "source"))
    target = node.target if isinstance(node.target, WritableRef) else None
    if node.target is not None and target is None:
        log.debug("expr.set.readonly_target", event="expr.set.readonly_target", target=repr(node.target))

    if target is None:
        return source

    def produce() -> float:
        value = source()
        target.write(value)
        return value

    return produce


def compile_block(node: BlockNode, ctx: CompileContext) -> Producer:
    evals = ctx.compile_all(node.nodes)

    def produce() -> float:
        ret = 0.0
        for ev in evals:
            ret = ev()
        return ret

    return produce


def _noop(values: list[float]) -> None:
    return None


def compile_call(node: CallNode, ctx: CompileContext) -> Producer:
    evals = ctx.compile_all(node.args)
    callback = node.callback or _noop

    def produce() -> float:
        callback([ev() for ev in evals])
        return 0.0

    return produce


# ---- leaves


def compile_value(node: ValueNode, ctx: CompileContext) -> Producer:
    if isinstance(node.ref, ExternalRef):
        return _read(node.ref, ctx)
    nan = to_number(None)
    return lambda: nan


def compile_number(node: NumberNode, ctx: CompileContext) -> Producer:
    constant = node.value
    return lambda: constant


# ---- registry

_BINARY: dict[str, Reducer] = {
    "add": operator.add,
    "sub": operator.sub,
    "multiply": operator.mul,
    "divide": divide,
    "pow": power,
    "modulo": modulo,
    "max": maximum,
    "min": minimum,
    "and": _logical_and,
    "or": _logical_or,
}

_COMPARE: dict[str, Callable[[float, float], bool]] = {
    "eq": operator.eq,
    "neq": operator.ne,
    "lessThan": operator.lt,
    "greaterThan": operator.gt,
    "lessOrEq": operator.le,
    "greaterOrEq": operator.ge,
}


def get_default_evaluators() -> EvaluatorRegistry:
    """Return a registry pre-populated with the built-in node kinds."""
    reg = EvaluatorRegistry()
    for kind, reducer in _BINARY.items():
        reg.register(kind, BinaryNode, multi(reducer))
    for kind, fn in UNARY_FUNCTIONS.items():
        reg.register(kind, UnaryNode, unary(fn))
    for kind, compare in _COMPARE.items():
        reg.register(kind, CompareNode, boolean(compare))
    reg.register("cond", CondNode, compile_cond)
    reg.register("set", SetNode, compile_set)
    reg.register("block", BlockNode, compile_block)
    reg.register("call", CallNode, compile_call)
    reg.register("value", ValueNode, compile_value)
    reg.register("number", NumberNode, compile_number)
    return reg
