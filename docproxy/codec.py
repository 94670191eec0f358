"""docproxy.codec

Translation between native Python values and the engine's tagged values.

``encode_value`` classifies a native value into exactly one ``Datatype`` without
touching the engine. ``decode_value`` turns an engine ``(datatype, raw)`` pair
into what a view hands back to the caller: scalars as-is, composites as fresh
child views, counters as snapshots or writeable handles.
"""

from __future__ import annotations

import datetime as _dt
from collections.abc import Mapping
from typing import Any, Tuple

from .base import ViewState, is_proxy
from .constants import MISSING
from .counter import Counter, WriteableCounter
from .datatypes import F64, Datatype, Int, RawString, TaggedValue, Uint
from .defaults import TEXT_SCHEME_PLAIN
from .errors import AliasingError, UnsupportedTypeError
from .path import Prop
from .text import Text


_EPOCH = _dt.datetime(1970, 1, 1, tzinfo=_dt.timezone.utc)
_MILLISECOND = _dt.timedelta(milliseconds=1)


def _timestamp_ms(value: _dt.datetime) -> int:
    """Epoch milliseconds for an aware datetime; reads return it as an aware UTC datetime."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise UnsupportedTypeError(f"Timestamps must be timezone-aware, got naive {value!r}")
    if value.microsecond % 1000:
        raise UnsupportedTypeError(f"Timestamps are stored in whole milliseconds, got {value!r}")
    return (value - _EPOCH) // _MILLISECOND


def _classify(value: Any, text_scheme: str) -> TaggedValue:
    if value is None:
        return TaggedValue(None, Datatype.NULL)
    if is_proxy(value):
        raise AliasingError()
    if isinstance(value, Uint):
        return TaggedValue(value.value, Datatype.UINT)
    if isinstance(value, Int):
        return TaggedValue(value.value, Datatype.INT)
    if isinstance(value, F64):
        return TaggedValue(value.value, Datatype.F64)
    if isinstance(value, Counter):
        return TaggedValue(value.value, Datatype.COUNTER)
    if isinstance(value, _dt.datetime):
        return TaggedValue(_timestamp_ms(value), Datatype.TIMESTAMP)
    if isinstance(value, RawString):
        return TaggedValue(value.val, Datatype.STR)
    if isinstance(value, Text):
        if text_scheme == TEXT_SCHEME_PLAIN:
            raise UnsupportedTypeError("Text values need the rich text scheme; assign a str instead")
        return TaggedValue(value, Datatype.TEXT)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return TaggedValue(bytes(value), Datatype.BYTES)
    if isinstance(value, bool):
        return TaggedValue(value, Datatype.BOOLEAN)
    if isinstance(value, int):
        return TaggedValue(value, Datatype.INT)
    if isinstance(value, float):
        if value.is_integer():
            return TaggedValue(int(value), Datatype.INT)
        return TaggedValue(value, Datatype.F64)
    if isinstance(value, str):
        if text_scheme == TEXT_SCHEME_PLAIN:
            return TaggedValue(value, Datatype.TEXT)
        return TaggedValue(value, Datatype.STR)
    if isinstance(value, (list, tuple)):
        return TaggedValue(list(value), Datatype.LIST)
    if isinstance(value, Mapping):
        return TaggedValue(value, Datatype.MAP)
    raise UnsupportedTypeError(f"Cannot assign unknown object: {value!r} ({type(value).__name__})")


def _check_nested(tagged: TaggedValue, text_scheme: str) -> None:
    if tagged.datatype is Datatype.MAP:
        for k, v in tagged.value.items():
            if not isinstance(k, str):
                raise UnsupportedTypeError(f"Map keys must be strings, got {type(k).__name__}: {k!r}")
            _check_nested(_classify(v, text_scheme), text_scheme)
    elif tagged.datatype is Datatype.LIST:
        for v in tagged.value:
            _check_nested(_classify(v, text_scheme), text_scheme)
    elif tagged.datatype is Datatype.TEXT and isinstance(tagged.value, Text):
        for v in tagged.value:
            _check_nested(_classify(v, text_scheme), text_scheme)


def encode_value(value: Any, text_scheme: str, *, deep: bool = False) -> TaggedValue:
    """Classify ``value`` into a TaggedValue.

    With ``deep=True`` every nested element of a list, map or Text is classified
    too, so a bad leaf is reported before anything is written.
    """
    tagged = _classify(value, text_scheme)
    if deep:
        _check_nested(tagged, text_scheme)
    return tagged


def decode_value(state: ViewState, prop: Prop, tagged: Tuple[Any, Any]) -> Any:
    """Native value for ``tagged`` read from ``prop`` of the object ``state`` presents."""
    from . import proxies

    datatype, val = tagged
    try:
        tag = Datatype(datatype)
    except ValueError:
        raise UnsupportedTypeError(f"datatype {datatype} unimplemented", path=state.path.child(prop)) from None

    if tag is Datatype.MAP:
        return proxies.map_proxy(state.context, val, state.text_scheme, state.path.child(prop), state.readonly, state.heads)
    if tag is Datatype.LIST:
        return proxies.list_proxy(state.context, val, state.text_scheme, state.path.child(prop), state.readonly, state.heads)
    if tag is Datatype.TEXT:
        if state.text_scheme == TEXT_SCHEME_PLAIN:
            return state.call("text", val, state.heads)
        return proxies.text_proxy(state.context, val, state.path.child(prop), state.readonly, state.heads)
    if tag is Datatype.NULL:
        return None
    if tag is Datatype.TIMESTAMP:
        if isinstance(val, _dt.datetime):
            return val
        return _EPOCH + _dt.timedelta(milliseconds=val)
    if tag is Datatype.COUNTER:
        if state.readonly:
            return Counter(val)
        return WriteableCounter(val, state.context, state.path, state.object_id, prop)
    # str, int, uint, f64, boolean, bytes
    return val


def value_at(state: ViewState, prop: Prop) -> Any:
    """Read and decode ``prop``; MISSING when the engine has no value there."""
    tagged = state.call("get", state.object_id, prop, state.heads)
    if tagged is None or tagged[0] is None:
        return MISSING
    return decode_value(state, prop, tagged)
