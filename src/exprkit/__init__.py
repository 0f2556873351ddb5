from __future__ import annotations

# Runtime package version, provided by setuptools_scm during build.
try:
    # created at build time by setuptools_scm (see [tool.setuptools_scm].version_file)
    from ._version import __version__
except ImportError:  # pragma: no cover
    # fallback for editable installs / missing file
    try:
        from importlib.metadata import version as _pkg_version

        __version__ = _pkg_version("exprkit")
    except Exception:
        __version__ = "0.0.0"

from .api import (
    CompileError,
    ExprkitError,
    ExternalRef,
    InvalidNode,
    MissingElementType,
    MissingOperand,
    NodeDepthExceeded,
    Producer,
    RegistryError,
    UnknownNodeKind,
    Value,
    WritableRef,
    compile_expr,
    evaluate,
)
from .core.config import CompilerConfig
from .graph import collect_external_refs, create_evaluator

__all__ = [
    "CompileError",
    "CompilerConfig",
    "ExprkitError",
    "ExternalRef",
    "InvalidNode",
    "MissingElementType",
    "MissingOperand",
    "NodeDepthExceeded",
    "Producer",
    "RegistryError",
    "UnknownNodeKind",
    "Value",
    "WritableRef",
    "__version__",
    "collect_external_refs",
    "compile_expr",
    "create_evaluator",
    "evaluate",
]
