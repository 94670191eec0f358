"""docproxy.document

Document handles: the caller-side owner of an engine.

A ``Document`` is one version of the document. ``change`` hands the caller a
writable root view, commits what it did, and returns the next ``Document``; the
old one is frozen, so any view still bound to it rejects writes while continuing
to read the state it was pinned to.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .defaults import resolve_text_scheme
from .engine import DocumentEngine
from .errors import FrozenDocumentError
from .memory import MemoryEngine
from .proxies import MapProxy, root_proxy, to_py

logger = logging.getLogger(__name__)


class DocHandle:
    """Engine wrapper that carries the ``frozen`` flag views consult before writing."""

    __slots__ = ("engine", "frozen")

    def __init__(self, engine: DocumentEngine):
        self.engine = engine
        self.frozen = False

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__"):
            raise AttributeError(name)
        return getattr(self.engine, name)

    def __repr__(self) -> str:
        return f"<DocHandle frozen={self.frozen} engine={self.engine!r}>"


class Document:
    def __init__(
        self,
        engine: Optional[DocumentEngine] = None,
        *,
        text_scheme: Optional[str] = None,
        heads: Optional[Sequence[str]] = None,
    ):
        self._engine = engine if engine is not None else MemoryEngine()
        self._text_scheme = resolve_text_scheme(text_scheme)
        self._handle = DocHandle(self._engine)
        self._heads: List[str] = list(heads) if heads is not None else self._engine.get_heads()

    def __repr__(self) -> str:
        heads = ",".join(h[:8] for h in self._heads)
        return f"<Document heads=[{heads}] frozen={self.frozen} text_scheme={self._text_scheme!r}>"

    @property
    def engine(self) -> DocumentEngine:
        return self._engine

    @property
    def handle(self) -> DocHandle:
        return self._handle

    @property
    def text_scheme(self) -> str:
        return self._text_scheme

    @property
    def heads(self) -> List[str]:
        return list(self._heads)

    @property
    def frozen(self) -> bool:
        return self._handle.frozen

    @property
    def root(self) -> MapProxy:
        """Read-only root view pinned to this document's heads."""
        return root_proxy(self._handle, self._text_scheme, readonly=True, heads=self._heads)

    def at(self, heads: Sequence[str]) -> MapProxy:
        """Read-only root view of a past state."""
        return root_proxy(self._handle, self._text_scheme, readonly=True, heads=list(heads))

    def change(self, fn: Callable[[MapProxy], Any], message: Optional[str] = None) -> "Document":
        """Apply ``fn`` to a writable root view, commit, and return the successor document.

        Changes are not rolled back if ``fn`` raises part way through; the engine keeps
        whatever primitives were already applied.
        """
        if self.frozen:
            logger.warning("change() called on a frozen document %r", self)
            raise FrozenDocumentError()
        fn(root_proxy(self._handle, self._text_scheme))
        head = self._engine.commit(message)
        logger.debug("change committed: %s", head)
        successor = Document(self._engine, text_scheme=self._text_scheme)
        self.freeze()
        return successor

    def freeze(self) -> None:
        """Make every view bound to this document reject writes from now on."""
        self._handle.frozen = True
        logger.debug("document frozen at heads %s", self._heads)

    def to_dict(self) -> Dict[str, Any]:
        return to_py(self.root)

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        *,
        text_scheme: Optional[str] = None,
        engine: Optional[DocumentEngine] = None,
    ) -> "Document":
        """New document whose root holds ``data`` (one committed change)."""
        doc = cls(engine, text_scheme=text_scheme)
        return doc.change(lambda root: root.update(data), message="initial")
