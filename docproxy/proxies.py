"""docproxy.proxies

Map, list and text views over objects held by a document engine.

A view holds no data: every read asks the engine (map reads are cached per view
until the next write through it), every write becomes engine primitives keyed by
the view's object identity. Composite values are written by creating an empty
object and re-applying each element or key through a child view, so the engine
sees the same primitives it would from repeated scalar writes.

    root = root_proxy(engine)
    root.birds = ["goldfinch"]
    root.birds.push("greenfinch")
    root.birds == ["goldfinch", "greenfinch"]   # True
"""

from __future__ import annotations

from collections.abc import MutableMapping, MutableSequence, Sequence
from typing import Any, Iterator, List, Optional

from .base import ProxyBase, ViewState, get_handle, get_object_id, get_path, is_proxy, parse_list_index, read_reserved
from .codec import encode_value, value_at
from .constants import MISSING, ROOT_ID, TRACE
from .counter import Counter
from .datatypes import OBJECT_TAGS, Datatype, TaggedValue
from .defaults import DEFAULT_REPR_MAX_ITEMS, TEXT_SCHEME_PLAIN, TEXT_SCHEME_RICH, resolve_text_scheme
from .errors import AliasingError, ListTypeError, UnsupportedTypeError
from .path import ROOT_PATH, Path, Prop, describe
from .sequence import SEQUENCE_METHODS, SEQUENCE_READONLY_MESSAGE, SequenceMethods
from .text import Text, check_element
from .textmethods import TEXT_METHODS, TextMethods


__all__ = [
    "MapProxy",
    "ListProxy",
    "TextProxy",
    "map_proxy",
    "list_proxy",
    "text_proxy",
    "root_proxy",
    "is_proxy",
    "get_object_id",
    "get_handle",
    "get_path",
    "to_py",
]


# ---------------------------------------------------------------------------
# Shared write path
# ---------------------------------------------------------------------------


def _create(state: ViewState, prop: Prop, seed: Any, insert: bool) -> str:
    if insert:
        return state.call("insert_object", state.object_id, prop, seed)
    return state.call("put_object", state.object_id, prop, seed)


def _assign(state: ViewState, prop: Prop, tagged: TaggedValue, *, insert: bool) -> None:
    """Write one classified value at ``prop`` (``insert`` picks insert vs. put for sequences)."""
    value, datatype = tagged
    child_path = state.path.child(prop)

    if datatype is Datatype.MAP:
        oid = _create(state, prop, {}, insert)
        child = map_proxy(state.context, oid, state.text_scheme, child_path, state.readonly)
        for k, v in value.items():
            child._write(k, encode_value(v, state.text_scheme), insert=False)
    elif datatype is Datatype.LIST:
        oid = _create(state, prop, [], insert)
        seq = list_proxy(state.context, oid, state.text_scheme, child_path, state.readonly)
        for i, v in enumerate(value):
            seq._write(i, encode_value(v, state.text_scheme), insert=True)
    elif datatype is Datatype.TEXT:
        if state.text_scheme == TEXT_SCHEME_PLAIN:
            _create(state, prop, value, insert)
        else:
            oid = _create(state, prop, "", insert)
            txt = text_proxy(state.context, oid, child_path, state.readonly)
            for i, v in enumerate(value):
                txt._write(i, encode_value(v, TEXT_SCHEME_RICH), insert=True)
    elif insert:
        state.call("insert", state.object_id, prop, value, datatype.value)
    else:
        state.call("put", state.object_id, prop, value, datatype.value)


def _is_stored_at(state: ViewState, prop: Prop, value: Any) -> bool:
    """True when ``value`` is the view already stored at ``prop``; writing it back is a no-op."""
    stored = state.call("get", state.object_id, prop, None)
    return stored is not None and stored[0] in OBJECT_TAGS and stored[1] == get_object_id(value)


# ---------------------------------------------------------------------------
# Map view
# ---------------------------------------------------------------------------


class MapProxy(ProxyBase, MutableMapping):
    """Dict-like view with attribute drilling; writes go to the engine."""

    __slots__ = ()

    def _write(self, key: str, tagged: TaggedValue, *, insert: bool = False) -> None:
        _assign(self._state, key, tagged, insert=False)

    def __getitem__(self, key: Any) -> Any:
        state = self._state
        reserved = read_reserved(state, key)
        if reserved is not MISSING:
            return reserved
        if key in state.cache:
            return state.cache[key]
        value = value_at(state, key)
        if value is MISSING:
            raise KeyError(key)
        state.cache[key] = value
        return value

    def __setitem__(self, key: Any, value: Any) -> None:
        state = self._state
        state.invalidate()
        if is_proxy(value):
            if isinstance(key, str) and _is_stored_at(state, key, value):
                return
            raise AliasingError(path=state.path.child(key))
        if key is TRACE:
            state.trace = value
            return
        if not isinstance(key, str):
            raise UnsupportedTypeError(f"Map keys must be strings, got {type(key).__name__}: {key!r}", path=state.path)
        tagged = encode_value(value, state.text_scheme, deep=True)
        state.check_writable(f'Object property "{key}" cannot be modified')
        self._write(key, tagged)

    def __delitem__(self, key: Any) -> None:
        state = self._state
        state.invalidate()
        state.check_writable(f'Object property "{key}" cannot be modified')
        state.call("delete", state.object_id, key)

    def __contains__(self, key: Any) -> bool:
        try:
            self[key]
        except KeyError:
            return False
        return True

    def _keys(self) -> List[str]:
        state = self._state
        return list(dict.fromkeys(state.call("keys", state.object_id, state.heads)))

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys())

    def __len__(self) -> int:
        return len(self._keys())

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"No key '{name}' at {describe(self._state.path)}") from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self[name] = value

    def __delattr__(self, name: str) -> None:
        if name.startswith("_"):
            object.__delattr__(self, name)
        else:
            del self[name]

    def __dir__(self) -> List[str]:
        base = set(super().__dir__())
        base.update(k for k in self._keys() if k.isidentifier())
        return sorted(base)

    def __repr__(self) -> str:
        keys = self._keys()
        shown = ", ".join(f"{k!r}: {_short(self.get(k))}" for k in keys[:DEFAULT_REPR_MAX_ITEMS])
        more = ", ..." if len(keys) > DEFAULT_REPR_MAX_ITEMS else ""
        return f"MapProxy({{{shown}{more}}})"

    def to_dict(self) -> dict:
        return to_py(self)


# ---------------------------------------------------------------------------
# List / text views
# ---------------------------------------------------------------------------


def _is_index(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


class _SequenceProxy(ProxyBase):
    __slots__ = ()

    _METHODS = SEQUENCE_METHODS

    def _write(self, index: int, tagged: TaggedValue, *, insert: bool) -> None:
        _assign(self._state, index, tagged, insert=insert)

    @property
    def length(self) -> int:
        state = self._state
        return state.call("length", state.object_id, state.heads)

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, index: Any) -> Any:
        state = self._state
        reserved = read_reserved(state, index)
        if reserved is not MISSING:
            return reserved
        if isinstance(index, slice):
            return self.to_array()[index]
        index = parse_list_index(index)
        if index == "length":
            return self.length
        if _is_index(index):
            value = value_at(state, index)
            if value is MISSING:
                raise IndexError(f"list index {index} out of range at {describe(state.path)}")
            return value
        if isinstance(index, str) and index in self._METHODS:
            return getattr(self, index)
        raise ListTypeError(f"list indices must be integers or method names, not {index!r}", path=state.path)

    def __setitem__(self, index: Any, value: Any) -> None:
        state = self._state
        state.invalidate()
        if isinstance(index, slice):
            raise ListTypeError("slice assignment is not supported; use splice()", path=state.path)
        index = parse_list_index(index)
        if is_proxy(value):
            if _is_index(index) and _is_stored_at(state, index, value):
                return
            raise AliasingError(path=state.path)
        if index is TRACE:
            state.trace = value
            return
        if not _is_index(index):
            raise ListTypeError("list index must be a number", path=state.path)
        tagged = encode_value(value, state.text_scheme, deep=True)
        state.check_writable(f'Object property "{index}" cannot be modified')
        insert = index >= state.call("length", state.object_id)
        self._write(index, tagged, insert=insert)

    def __delitem__(self, index: Any) -> None:
        state = self._state
        state.invalidate()
        index = parse_list_index(index)
        if not _is_index(index):
            raise ListTypeError("list index must be a number", path=state.path)
        state.check_writable(SEQUENCE_READONLY_MESSAGE)
        elem = state.call("get", state.object_id, index, None)
        if elem is not None and elem[0] == Datatype.COUNTER.value:
            raise ListTypeError("Unsupported operation: deleting a counter from a list", path=state.path.child(index))
        state.call("delete", state.object_id, index)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, (str, bytes, bytearray)) or not isinstance(other, Sequence):
            return NotImplemented
        return self.to_array() == list(other)

    __hash__ = None  # type: ignore[assignment]

    def to_list(self) -> list:
        return to_py(self)


class ListProxy(SequenceMethods, _SequenceProxy):
    """List-like view; ordered-container methods come from SequenceMethods."""

    __slots__ = ()

    def __repr__(self) -> str:
        items = self.slice(0, DEFAULT_REPR_MAX_ITEMS)
        more = ", ..." if self.length > DEFAULT_REPR_MAX_ITEMS else ""
        return f"ListProxy([{', '.join(_short(v) for v in items)}{more}])"


class TextProxy(TextMethods, SequenceMethods, _SequenceProxy):
    """Rich-text view: one element per character or embedded value."""

    __slots__ = ()

    _METHODS = TEXT_METHODS | SEQUENCE_METHODS

    def __setitem__(self, index: Any, value: Any) -> None:
        if index is not TRACE:
            check_element(value)
        super().__setitem__(index, value)

    def splice(self, index: Any, delete_count: Any = 0, *values: Any) -> List[Any]:
        for v in values:
            check_element(v)
        return super().splice(index, delete_count, *values)

    def fill(self, value: Any, start: Any = 0, end: Any = None):
        return super().fill(check_element(value), start, end)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, str):
            return self.to_string() == other and self.length == len(other)
        if isinstance(other, Text):
            return self.to_array() == list(other)
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        state = self._state
        return f"TextProxy({state.call('text', state.object_id, state.heads)!r})"


MutableSequence.register(ListProxy)
MutableSequence.register(TextProxy)


def _short(v: Any) -> str:
    if isinstance(v, MapProxy):
        return "{...}"
    if isinstance(v, ListProxy):
        return "[...]"
    return repr(v)


# ---------------------------------------------------------------------------
# View factory
# ---------------------------------------------------------------------------


def map_proxy(
    context: Any,
    object_id: str,
    text_scheme: Optional[str] = None,
    path: Optional[Path] = None,
    readonly: bool = False,
    heads: Optional[List[str]] = None,
) -> MapProxy:
    return MapProxy(ViewState(context, object_id, resolve_text_scheme(text_scheme), path, readonly, heads))


def list_proxy(
    context: Any,
    object_id: str,
    text_scheme: Optional[str] = None,
    path: Optional[Path] = None,
    readonly: bool = False,
    heads: Optional[List[str]] = None,
) -> ListProxy:
    return ListProxy(ViewState(context, object_id, resolve_text_scheme(text_scheme), path, readonly, heads))


def text_proxy(
    context: Any,
    object_id: str,
    path: Optional[Path] = None,
    readonly: bool = False,
    heads: Optional[List[str]] = None,
) -> TextProxy:
    # Text views only exist under the rich scheme; the plain scheme reads text as str.
    return TextProxy(ViewState(context, object_id, TEXT_SCHEME_RICH, path, readonly, heads))


def root_proxy(
    context: Any,
    text_scheme: Optional[str] = None,
    readonly: bool = False,
    heads: Optional[List[str]] = None,
) -> MapProxy:
    """View of the document root map."""
    return map_proxy(context, ROOT_ID, text_scheme, ROOT_PATH, readonly, heads)


def to_py(value: Any) -> Any:
    """Deep copy of a view (or any decoded value) as plain Python data."""
    if isinstance(value, MapProxy):
        return {k: to_py(value[k]) for k in value}
    if isinstance(value, TextProxy):
        return value.to_string()
    if isinstance(value, ListProxy):
        return [to_py(v) for v in value]
    if isinstance(value, Counter):
        return value.value
    if isinstance(value, Text):
        return value.to_string()
    return value
