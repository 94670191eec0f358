"""docproxy.memory

In-process document engine.

Keeps every object in a dict keyed by identity and snapshots the whole object
table on each commit so reads can be pinned to past heads. There is no merge:
a single writer applies operations in the order received. Used by the test
suite and the examples; any engine honouring ``DocumentEngine`` can replace it.
"""

from __future__ import annotations

import copy
import hashlib
import logging
import uuid
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from .constants import OBJECT_REPLACEMENT_CHAR, ROOT_ID
from .datatypes import Datatype
from .engine import DocumentEngine, EngineError, Heads, Prop

logger = logging.getLogger(__name__)

_OBJ_TYPES = ("map", "list", "text")


class _Obj:
    __slots__ = ("obj_type", "data")

    def __init__(self, obj_type: str):
        self.obj_type = obj_type
        self.data: Any = {} if obj_type == "map" else []

    def __deepcopy__(self, memo: Dict[int, Any]) -> "_Obj":
        out = _Obj(self.obj_type)
        out.data = dict(self.data) if self.obj_type == "map" else list(self.data)
        return out


class Op(NamedTuple):
    """One primitive operation as applied, in order."""

    action: str
    obj: str
    prop: Any
    value: Any = None
    datatype: Optional[str] = None


class MemoryEngine(DocumentEngine):
    def __init__(self, actor: Optional[str] = None):
        self.actor = actor or uuid.uuid4().hex
        self.ops: List[Op] = []
        self._seq = 0
        self._objects: Dict[str, _Obj] = {ROOT_ID: _Obj("map")}
        self._heads: List[str] = []
        self._history: Dict[Tuple[str, ...], Dict[str, _Obj]] = {(): copy.deepcopy(self._objects)}
        self._pending = 0

    def __repr__(self) -> str:
        return f"<MemoryEngine actor={self.actor[:8]} objects={len(self._objects)} heads={self._heads}>"

    # -- lookup helpers ------------------------------------------------------------------

    def _table(self, heads: Heads) -> Dict[str, _Obj]:
        if heads is None:
            return self._objects
        key = tuple(sorted(heads))
        try:
            return self._history[key]
        except KeyError:
            raise EngineError(f"Unknown heads: {list(heads)}") from None

    def _obj(self, obj: str, heads: Heads = None) -> _Obj:
        try:
            return self._table(heads)[obj]
        except KeyError:
            raise EngineError(f"No such object: {obj!r}") from None

    def _seq_obj(self, obj: str, heads: Heads = None) -> _Obj:
        o = self._obj(obj, heads)
        if o.obj_type == "map":
            raise EngineError(f"Object {obj!r} is a map, not a sequence")
        return o

    def _check_index(self, o: _Obj, index: Any, *, allow_end: bool) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise EngineError(f"Sequence index must be an integer, got {index!r}")
        limit = len(o.data) if allow_end else len(o.data) - 1
        if index < 0 or index > limit:
            raise EngineError(f"Index {index} out of bounds (length {len(o.data)})")
        return index

    def _check_key(self, prop: Any) -> str:
        if not isinstance(prop, str):
            raise EngineError(f"Map key must be a string, got {prop!r}")
        return prop

    def _new_object(self, seed: Any) -> Tuple[str, _Obj]:
        if isinstance(seed, dict) and not seed:
            o = _Obj("map")
        elif isinstance(seed, list) and not seed:
            o = _Obj("list")
        elif isinstance(seed, str):
            o = _Obj("text")
            o.data = [(Datatype.STR.value, ch) for ch in seed]
        else:
            raise EngineError(f"Unsupported object seed: {seed!r}")
        self._seq += 1
        oid = f"{self._seq}@{self.actor}"
        self._objects[oid] = o
        return oid, o

    def _record(self, op: Op) -> None:
        self.ops.append(op)
        self._pending += 1

    # -- reads ---------------------------------------------------------------------------

    def get(self, obj: str, prop: Prop, heads: Heads = None) -> Optional[Tuple[str, Any]]:
        o = self._obj(obj, heads)
        if o.obj_type == "map":
            if not isinstance(prop, str):
                return None
            return o.data.get(prop)
        if isinstance(prop, bool) or not isinstance(prop, int) or prop < 0 or prop >= len(o.data):
            return None
        return o.data[prop]

    def length(self, obj: str, heads: Heads = None) -> int:
        return len(self._obj(obj, heads).data)

    def keys(self, obj: str, heads: Heads = None) -> List[str]:
        o = self._obj(obj, heads)
        if o.obj_type != "map":
            return []
        return sorted(o.data.keys())

    def text(self, obj: str, heads: Heads = None) -> str:
        o = self._seq_obj(obj, heads)
        return "".join(
            raw if tag == Datatype.STR.value and isinstance(raw, str) else OBJECT_REPLACEMENT_CHAR
            for tag, raw in o.data
        )

    # -- writes --------------------------------------------------------------------------

    def put(self, obj: str, prop: Prop, value: Any, datatype: str) -> None:
        tag = Datatype(datatype)
        if tag.is_object:
            raise EngineError("put() takes scalar values; use put_object() for maps, lists and text")
        o = self._obj(obj)
        if o.obj_type == "map":
            o.data[self._check_key(prop)] = (tag.value, value)
        else:
            o.data[self._check_index(o, prop, allow_end=False)] = (tag.value, value)
        self._record(Op("put", obj, prop, value, tag.value))

    def insert(self, obj: str, index: int, value: Any, datatype: str) -> None:
        tag = Datatype(datatype)
        if tag.is_object:
            raise EngineError("insert() takes scalar values; use insert_object() for maps, lists and text")
        o = self._seq_obj(obj)
        o.data.insert(self._check_index(o, index, allow_end=True), (tag.value, value))
        self._record(Op("insert", obj, index, value, tag.value))

    def put_object(self, obj: str, prop: Prop, seed: Any) -> str:
        o = self._obj(obj)
        if o.obj_type == "map":
            prop = self._check_key(prop)
        else:
            prop = self._check_index(o, prop, allow_end=False)
        oid, child = self._new_object(seed)
        o.data[prop] = (child.obj_type, oid)
        self._record(Op("put_object", obj, prop, oid, child.obj_type))
        return oid

    def insert_object(self, obj: str, index: int, seed: Any) -> str:
        o = self._seq_obj(obj)
        index = self._check_index(o, index, allow_end=True)
        oid, child = self._new_object(seed)
        o.data.insert(index, (child.obj_type, oid))
        self._record(Op("insert_object", obj, index, oid, child.obj_type))
        return oid

    def delete(self, obj: str, prop: Prop) -> None:
        o = self._obj(obj)
        if o.obj_type == "map":
            o.data.pop(self._check_key(prop), None)
        else:
            del o.data[self._check_index(o, prop, allow_end=False)]
        self._record(Op("delete", obj, prop))

    def splice(self, obj: str, index: int, delete_count: int) -> None:
        o = self._seq_obj(obj)
        index = self._check_index(o, index, allow_end=True)
        if delete_count < 0:
            raise EngineError(f"delete_count must not be negative, got {delete_count}")
        del o.data[index:index + delete_count]
        self._record(Op("splice", obj, index, delete_count))

    def increment(self, obj: str, prop: Prop, delta: int) -> None:
        current = self.get(obj, prop)
        if current is None or current[0] != Datatype.COUNTER.value:
            raise EngineError(f"Cannot increment a non-counter value at {obj}/{prop}")
        o = self._obj(obj)
        o.data[prop] = (Datatype.COUNTER.value, current[1] + delta)
        self._record(Op("increment", obj, prop, delta))

    # -- history -------------------------------------------------------------------------

    def get_heads(self) -> List[str]:
        return list(self._heads)

    def commit(self, message: Optional[str] = None) -> Optional[str]:
        """Snapshot the current state; returns the new head, or None when nothing changed."""
        if self._pending == 0:
            return None
        h = hashlib.sha256()
        for head in self._heads:
            h.update(head.encode("utf-8"))
        h.update(f"{self.actor}:{len(self.ops)}:{message or ''}".encode("utf-8"))
        head = h.hexdigest()
        self._heads = [head]
        self._history[(head,)] = copy.deepcopy(self._objects)
        self._pending = 0
        logger.debug("commit %s (%d ops total)", head[:12], len(self.ops))
        return head
