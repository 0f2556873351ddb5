# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Error taxonomy for the exprkit expression compiler.

Every compile-time failure derives from CompileError and is raised synchronously
by create_evaluator(); nothing is deferred to evaluation time. Numeric edge cases
during evaluation (division by zero, NaN, absent external values) are not errors.
"""


class ExprkitError(Exception):
    """Base class for all exprkit public errors."""

    ...


class CompileError(ExprkitError):
    """A node tree could not be compiled into a producer graph."""

    ...


class MissingElementType(CompileError):
    """The element is neither a number, an external ref, nor a node with a `kind` tag."""

    def __init__(self, element: object = None) -> None:
        super().__init__(f"element type unknown: {type(element).__name__}")
        self.element = element


class UnknownNodeKind(CompileError):
    """The `kind` tag is present but no evaluator is registered for it."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"node kind {kind!r} not found")
        self.kind = kind


class MissingOperand(CompileError):
    """A required operand field is absent (None) on the node."""

    def __init__(self, kind: str, field: str) -> None:
        super().__init__(f"{field!r} missing in {kind!r} node")
        self.kind = kind
        self.field = field


class InvalidNode(CompileError):
    """A node mapping failed model validation (unexpected field, bad type)."""

    def __init__(self, kind: str, detail: str) -> None:
        super().__init__(f"invalid {kind!r} node: {detail}")
        self.kind = kind
        self.detail = detail


class NodeDepthExceeded(CompileError):
    """The node tree nests deeper than the configured max_depth."""

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"node tree deeper than max_depth={max_depth}")
        self.max_depth = max_depth


class RegistryError(ExprkitError):
    """Raised when an evaluator registration is rejected."""

    ...
