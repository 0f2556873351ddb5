# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
External value protocols and a concrete mutable value cell.

External refs are handles to numeric state owned by the surrounding system (the
animation graph). The interpreter only holds references to them: it reads through
`read()` and mutates exclusively through `write()` on `set` targets.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ExternalRef(Protocol):
    """Readable external value. `read()` returns None while the value is absent."""

    def read(self) -> float | None: ...


@runtime_checkable
class WritableRef(Protocol):
    """Write capability required of `set` targets."""

    def write(self, value: float) -> None: ...


class Value:
    """
    Mutable numeric cell satisfying WritableRef.

    Value() starts absent; Value(3) starts at 3.0. Writes are stored as floats.
    """

    __slots__ = ("_value",)

    def __init__(self, initial: float | None = None) -> None:
        self._value: float | None = None if initial is None else float(initial)

    def read(self) -> float | None:
        return self._value

    def write(self, value: float) -> None:
        self._value = float(value)

    def reset(self) -> None:
        """Make the value absent again."""
        self._value = None

    def __repr__(self) -> str:
        return f"Value({self._value!r})"
