"""docproxy.engine

Contract of the document engine the views delegate to.

The engine owns storage, history and merge semantics; views only translate
native Python operations into these calls. All calls are synchronous and either
succeed or raise.

Conventions:
- ``obj`` is an object identity returned by the engine (``"_root"`` for the root map).
- ``prop`` is a ``str`` key for maps or an ``int`` index for lists and text.
- ``heads`` is ``None`` for the current state, or a list of change hashes pinning
  reads to a past state.
- Values cross the boundary raw alongside a datatype tag (see ``Datatype``);
  timestamps travel as epoch milliseconds, composite values as object identities.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple, Union

Prop = Union[str, int]
Heads = Optional[Sequence[str]]


class EngineError(Exception):
    """Raised by engines for invalid operations (bad object, index out of range, ...)."""


class DocumentEngine:
    """Base class for document engines. Subclasses implement every method."""

    def get(self, obj: str, prop: Prop, heads: Heads = None) -> Optional[Tuple[str, Any]]:
        """Return ``(datatype, raw)`` for ``obj[prop]`` or ``None`` when absent."""
        raise NotImplementedError

    def put(self, obj: str, prop: Prop, value: Any, datatype: str) -> None:
        raise NotImplementedError

    def insert(self, obj: str, index: int, value: Any, datatype: str) -> None:
        raise NotImplementedError

    def put_object(self, obj: str, prop: Prop, seed: Any) -> str:
        """Create a map (``{}``), list (``[]``) or text (``str``) at ``prop``; return its identity."""
        raise NotImplementedError

    def insert_object(self, obj: str, index: int, seed: Any) -> str:
        raise NotImplementedError

    def delete(self, obj: str, prop: Prop) -> None:
        raise NotImplementedError

    def splice(self, obj: str, index: int, delete_count: int) -> None:
        raise NotImplementedError

    def increment(self, obj: str, prop: Prop, delta: int) -> None:
        raise NotImplementedError

    def length(self, obj: str, heads: Heads = None) -> int:
        raise NotImplementedError

    def keys(self, obj: str, heads: Heads = None) -> List[str]:
        raise NotImplementedError

    def text(self, obj: str, heads: Heads = None) -> str:
        """Render a text object; embedded values render as U+FFFC."""
        raise NotImplementedError

    def get_heads(self) -> List[str]:
        raise NotImplementedError

    def commit(self, message: Optional[str] = None) -> Optional[str]:
        raise NotImplementedError
