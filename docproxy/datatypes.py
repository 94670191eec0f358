"""docproxy.datatypes

The closed set of datatype tags understood by the document engine, plus the
explicit wrappers a caller uses to force a numeric or string tag that the
default classification would not pick.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, NamedTuple


class Datatype(str, Enum):
    """Discriminator carried by every value crossing the engine boundary."""

    MAP = "map"
    LIST = "list"
    TEXT = "text"
    STR = "str"
    INT = "int"
    UINT = "uint"
    F64 = "f64"
    COUNTER = "counter"
    TIMESTAMP = "timestamp"
    BYTES = "bytes"
    BOOLEAN = "boolean"
    NULL = "null"

    @property
    def is_object(self) -> bool:
        return self in _OBJECT_TYPES


_OBJECT_TYPES = frozenset([Datatype.MAP, Datatype.LIST, Datatype.TEXT])

# Raw tag strings of composite values, as engines report them.
OBJECT_TAGS = frozenset(t.value for t in _OBJECT_TYPES)


class TaggedValue(NamedTuple):
    """A raw value paired with its datatype tag."""

    value: Any
    datatype: Datatype


class _NumberWrapper:
    __slots__ = ("value",)

    def __init__(self, value: Any):
        object.__setattr__(self, "value", self._check(value))

    def _check(self, value: Any) -> Any:
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"

    def __eq__(self, other: Any) -> bool:
        if type(other) is type(self):
            return self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.value))


class Int(_NumberWrapper):
    """Store a number with the signed integer tag."""

    __slots__ = ()

    def _check(self, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Int requires an integer, got {value!r}")
        return value


class Uint(_NumberWrapper):
    """Store a number with the unsigned integer tag."""

    __slots__ = ()

    def _check(self, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise TypeError(f"Uint requires a non-negative integer, got {value!r}")
        return value


class F64(_NumberWrapper):
    """Store a number with the 64-bit float tag, even when it is integral."""

    __slots__ = ()

    def _check(self, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"F64 requires a number, got {value!r}")
        return float(value)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, F64) and math.isnan(self.value) and math.isnan(other.value):
            return True
        return super().__eq__(other)

    __hash__ = _NumberWrapper.__hash__


class RawString:
    """A string stored as a scalar ``str`` value even under the plain text scheme."""

    __slots__ = ("val",)

    def __init__(self, val: str):
        if not isinstance(val, str):
            raise TypeError(f"RawString requires a str, got {type(val).__name__}")
        self.val = val

    def __str__(self) -> str:
        return self.val

    def __repr__(self) -> str:
        return f"RawString({self.val!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, RawString):
            return self.val == other.val
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("RawString", self.val))
