"""docproxy.counter

Counter values.

Counters merge by summing increments instead of last-writer-wins, so they are a
separate datatype from plain numbers. Reading one through a read-only view gives
an immutable ``Counter`` snapshot; through a writable view it gives a
``WriteableCounter`` bound to the property it was read from.
"""

from __future__ import annotations

from typing import Any

from .errors import DocProxyError, DocumentEngineError, FrozenDocumentError
from .path import Path, Prop, describe


def _unwrap(other: Any) -> Any:
    return other.value if isinstance(other, Counter) else other


class Counter:
    """Immutable counter snapshot.

    Comparison, hashing, and numeric conversion delegate to the underlying value,
    so ``doc.visits == 3`` works as expected.
    """

    __slots__ = ("_value",)

    def __init__(self, value: int = 0):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Counter requires an integer, got {value!r}")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    # --- transparent delegation ---
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    def __str__(self) -> str:
        return str(self._value)

    def __eq__(self, other: Any) -> bool:
        return self._value == _unwrap(other)

    def __ne__(self, other: Any) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return bool(self._value)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __float__(self) -> float:
        return float(self._value)

    def __add__(self, other: Any) -> Any:
        return self._value + _unwrap(other)

    def __radd__(self, other: Any) -> Any:
        return _unwrap(other) + self._value

    def __sub__(self, other: Any) -> Any:
        return self._value - _unwrap(other)

    def __rsub__(self, other: Any) -> Any:
        return _unwrap(other) - self._value

    def __lt__(self, other: Any) -> bool:
        return self._value < _unwrap(other)

    def __le__(self, other: Any) -> bool:
        return self._value <= _unwrap(other)

    def __gt__(self, other: Any) -> bool:
        return self._value > _unwrap(other)

    def __ge__(self, other: Any) -> bool:
        return self._value >= _unwrap(other)

    def to_json(self) -> int:
        return self._value


class WriteableCounter(Counter):
    """Counter read through a writable view; increments go straight to the engine."""

    __slots__ = ("_context", "_path", "_object_id", "_key")

    def __init__(self, value: int, context: Any, path: Path, object_id: str, key: Prop):
        super().__init__(value)
        self._context = context
        self._path = path
        self._object_id = object_id
        self._key = key

    @property
    def path(self) -> Path:
        return self._path.child(self._key)

    def increment(self, delta: int = 1) -> int:
        """Add ``delta`` to the stored counter and return the new local value."""
        if getattr(self._context, "frozen", False):
            raise FrozenDocumentError(path=self.path)
        try:
            self._context.increment(self._object_id, self._key, delta)
        except DocProxyError:
            raise
        except Exception as e:
            raise DocumentEngineError(f"increment() failed at {describe(self.path)}: {e}", path=self.path) from e
        self._value += delta
        return self._value

    def decrement(self, delta: int = 1) -> int:
        return self.increment(-delta)
