"""docproxy.sequence

Ordered-container methods for list and text views.

Everything here is built on two primitives supplied by the host view: the lazy
index-by-index read (``__iter__``, which stops at the first index with no
value) and ``splice``. The host provides ``_state`` (a ViewState) and
``_write(prop, tagged, insert=...)``.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Iterator, List, Optional, Tuple

from .base import get_object_id, parse_list_index
from .codec import decode_value, encode_value, value_at
from .constants import MISSING
from .counter import Counter
from .datatypes import OBJECT_TAGS
from .errors import ListTypeError, UnsupportedTypeError
from .text import Text

SEQUENCE_READONLY_MESSAGE = "Sequence object cannot be modified outside of a change block"

SEQUENCE_METHODS = frozenset([
    "delete_at",
    "fill",
    "index_of",
    "insert_at",
    "pop",
    "push",
    "shift",
    "splice",
    "unshift",
    "entries",
    "keys",
    "values",
    "to_array",
    "map",
    "for_each",
    "concat",
    "every",
    "filter",
    "find",
    "find_index",
    "includes",
    "join",
    "reduce",
    "reduce_right",
    "last_index_of",
    "slice",
    "some",
])

_NO_INITIAL = object()


def _as_count(value: Any, what: str) -> int:
    value = parse_list_index(value)
    if not isinstance(value, int) or isinstance(value, bool):
        raise ListTypeError(f"{what} must be a number, got {value!r}")
    return value


def _detach(value: Any) -> Any:
    """Plain copy of a read value that can be written back; counters stay counters."""
    from . import proxies

    if isinstance(value, proxies.MapProxy):
        return {k: _detach(value[k]) for k in value}
    if isinstance(value, proxies.TextProxy):
        return Text([_detach(v) for v in value])
    if isinstance(value, proxies.ListProxy):
        return [_detach(v) for v in value]
    if isinstance(value, Counter):
        return Counter(value.value)
    return value


class SequenceMethods:
    __slots__ = ()

    # -- mutation ------------------------------------------------------------------------

    def splice(self, index: Any, delete_count: Any = 0, *values: Any) -> List[Any]:
        """Delete ``delete_count`` elements at ``index``, then insert ``values`` there.

        Returns the removed values (each read just before its delete). Inserted values
        are all classified before the first engine call; an engine failure part way
        through is not rolled back.
        """
        state = self._state
        index = _as_count(index, "splice index")
        delete_count = _as_count(delete_count, "splice delete count")
        tagged = [encode_value(v, state.text_scheme, deep=True) for v in values]
        state.check_writable(SEQUENCE_READONLY_MESSAGE)
        state.invalidate()
        removed: List[Any] = []
        for _ in range(delete_count):
            value = value_at(state, index)
            if value is not MISSING:
                removed.append(value)
            state.call("delete", state.object_id, index)
        for tv in tagged:
            self._write(index, tv, insert=True)
            index += 1
        return removed

    def insert_at(self, index: Any, *values: Any):
        self.splice(index, 0, *values)
        return self

    def delete_at(self, index: Any, count: Optional[int] = None):
        state = self._state
        index = _as_count(index, "index")
        state.check_writable(SEQUENCE_READONLY_MESSAGE)
        state.invalidate()
        if count is None:
            state.call("delete", state.object_id, index)
        else:
            state.call("splice", state.object_id, index, _as_count(count, "count"))
        return self

    def push(self, *values: Any) -> int:
        state = self._state
        self.splice(state.call("length", state.object_id), 0, *values)
        return state.call("length", state.object_id)

    def unshift(self, *values: Any) -> int:
        state = self._state
        self.splice(0, 0, *values)
        return state.call("length", state.object_id)

    def pop(self, index: Any = None) -> Any:
        """Remove and return the element at ``index`` (default the last), or None when empty."""
        state = self._state
        length = state.call("length", state.object_id)
        if length == 0:
            return None
        state.check_writable(SEQUENCE_READONLY_MESSAGE)
        index = length - 1 if index is None else _as_count(index, "index")
        value = value_at(state, index)
        state.invalidate()
        state.call("delete", state.object_id, index)
        return None if value is MISSING else value

    def shift(self) -> Any:
        """Remove and return the first element, or None when empty."""
        state = self._state
        if state.call("length", state.object_id) == 0:
            return None
        state.check_writable(SEQUENCE_READONLY_MESSAGE)
        first = value_at(state, 0)
        state.invalidate()
        state.call("delete", state.object_id, 0)
        return None if first is MISSING else first

    def fill(self, value: Any, start: Any = 0, end: Any = None):
        """Replace every element in ``[start, end)`` (clamped to the length) with ``value``."""
        state = self._state
        tagged = encode_value(value, state.text_scheme, deep=True)
        state.check_writable(SEQUENCE_READONLY_MESSAGE)
        state.invalidate()
        length = state.call("length", state.object_id)
        start = _as_count(start or 0, "start")
        end = length if end is None else _as_count(end, "end")
        for i in range(start, min(end, length)):
            self._write(i, tagged, insert=False)
        return self

    # -- python list aliases -------------------------------------------------------------

    def append(self, value: Any) -> None:
        self.push(value)

    def extend(self, values: Any) -> None:
        self.push(*list(values))

    def insert(self, index: Any, value: Any) -> None:
        self.splice(index, 0, value)

    def index(self, value: Any, start: int = 0) -> int:
        i = self.index_of(value, start)
        if i < 0:
            raise ValueError(f"{value!r} is not in list")
        return i

    def count(self, value: Any) -> int:
        return sum(1 for _ in self._positions(value))

    def remove(self, value: Any) -> None:
        self.splice(self.index(value), 1)

    def clear(self) -> None:
        state = self._state
        length = state.call("length", state.object_id)
        if length:
            self.delete_at(0, length)

    def reverse(self) -> None:
        """Rewrite the elements in reverse order; nested views are re-created from copies."""
        values = [_detach(v) for v in self]
        values.reverse()
        self.splice(0, len(values), *values)

    def __iadd__(self, values: Any):
        self.extend(values)
        return self

    # -- reads ---------------------------------------------------------------------------

    def __iter__(self) -> Iterator[Any]:
        state = self._state
        i = 0
        value = value_at(state, i)
        while value is not MISSING:
            yield value
            i += 1
            value = value_at(state, i)

    def __contains__(self, value: Any) -> bool:
        return self.includes(value)

    def __reversed__(self) -> Iterator[Any]:
        return reversed(self.to_array())

    def to_array(self) -> List[Any]:
        return list(self)

    def entries(self) -> Iterator[Tuple[int, Any]]:
        return enumerate(self)

    def keys(self) -> Iterator[int]:
        state = self._state
        return iter(range(state.call("length", state.object_id, state.heads)))

    def values(self) -> Iterator[Any]:
        return iter(self)

    def _positions(self, o: Any, start: int = 0) -> Iterator[int]:
        """Indices whose stored element is ``o``.

        A view matches by object identity. Any other value must carry the same
        datatype tag it would be written with and decode to an equal value, so
        ``True`` does not match a stored ``1``.
        """
        state = self._state
        target_id = get_object_id(o)
        if target_id is None:
            try:
                target_tag = encode_value(o, state.text_scheme).datatype.value
            except UnsupportedTypeError:
                return
        length = state.call("length", state.object_id, state.heads)
        for i in range(start, length):
            tagged = state.call("get", state.object_id, i, state.heads)
            if tagged is None:
                continue
            if target_id is not None:
                if tagged[0] in OBJECT_TAGS and tagged[1] == target_id:
                    yield i
            elif tagged[0] == target_tag and decode_value(state, i, tagged) == o:
                yield i

    def index_of(self, o: Any, start: int = 0) -> int:
        return next(self._positions(o, start), -1)

    def last_index_of(self, search: Any, from_index: Optional[int] = None) -> int:
        state = self._state
        length = state.call("length", state.object_id, state.heads)
        if from_index is None:
            end = length - 1
        elif from_index < 0:
            end = length + from_index
        else:
            end = min(from_index, length - 1)
        found = -1
        for i in self._positions(search):
            if i > end:
                break
            found = i
        return found

    def includes(self, elem: Any) -> bool:
        return self.index_of(elem) >= 0

    def find(self, f: Callable[[Any], bool]) -> Any:
        for v in self:
            if f(v):
                return v
        return None

    def find_index(self, f: Callable[[Any], bool]) -> int:
        for i, v in enumerate(self):
            if f(v):
                return i
        return -1

    def some(self, f: Callable[[Any], bool]) -> bool:
        return any(f(v) for v in self)

    def every(self, f: Callable[[Any], bool]) -> bool:
        return all(f(v) for v in self)

    def map(self, f: Callable[[Any], Any]) -> List[Any]:
        return [f(v) for v in self]

    def filter(self, f: Callable[[Any], bool]) -> List[Any]:
        return [v for v in self if f(v)]

    def for_each(self, f: Callable[[Any], Any]) -> None:
        for v in self:
            f(v)

    def reduce(self, f: Callable[[Any, Any], Any], initial: Any = _NO_INITIAL) -> Any:
        if initial is _NO_INITIAL:
            return functools.reduce(f, self.to_array())
        return functools.reduce(f, self.to_array(), initial)

    def reduce_right(self, f: Callable[[Any, Any], Any], initial: Any = _NO_INITIAL) -> Any:
        items = list(reversed(self.to_array()))
        if initial is _NO_INITIAL:
            return functools.reduce(f, items)
        return functools.reduce(f, items, initial)

    def concat(self, *others: Any) -> List[Any]:
        out = self.to_array()
        for other in others:
            if isinstance(other, (list, tuple, SequenceMethods)):
                out.extend(other)
            else:
                out.append(other)
        return out

    def join(self, sep: str = ",") -> str:
        return sep.join("" if v is None else str(v) for v in self)

    def slice(self, start: Optional[int] = None, end: Optional[int] = None) -> List[Any]:
        return self.to_array()[start:end]
