# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
exprkit public API.

Re-exports the error taxonomy, the external value contracts, and the
compile/evaluate entry points.
"""

from .errors import (
    CompileError,
    ExprkitError,
    InvalidNode,
    MissingElementType,
    MissingOperand,
    NodeDepthExceeded,
    RegistryError,
    UnknownNodeKind,
)
from .expr import Producer, compile_expr, evaluate
from .externals import ExternalRef, Value, WritableRef

__all__ = [
    # errors
    "ExprkitError",
    "CompileError",
    "MissingElementType",
    "UnknownNodeKind",
    "MissingOperand",
    "InvalidNode",
    "NodeDepthExceeded",
    "RegistryError",
    # externals
    "ExternalRef",
    "WritableRef",
    "Value",
    # expr
    "Producer",
    "compile_expr",
    "evaluate",
]
