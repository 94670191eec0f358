"""docproxy.base

State shared by every view kind, plus the helpers that need to recognise a view
without importing the concrete proxy classes.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, Optional, Sequence

from .constants import IS_PROXY, MISSING, OBJECT_ID, STATE, TRACE
from .errors import DocProxyError, DocumentEngineError, FrozenDocumentError, ListIndexError, ReadOnlyError
from .path import Path, describe

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")


class ViewState:
    """Everything a view knows about the object it presents.

    ``cache`` is the only mutable part: it maps properties to previously resolved
    values and is replaced wholesale on every write or delete through the view.
    """

    __slots__ = ("context", "object_id", "path", "readonly", "heads", "text_scheme", "cache", "trace")

    def __init__(
        self,
        context: Any,
        object_id: str,
        text_scheme: str,
        path: Optional[Path] = None,
        readonly: bool = False,
        heads: Optional[Sequence[str]] = None,
    ):
        self.context = context
        self.object_id = object_id
        self.text_scheme = text_scheme
        self.path = path if isinstance(path, Path) else Path(path or ())
        self.readonly = bool(readonly)
        self.heads = list(heads) if heads is not None else None
        self.cache: Dict[Any, Any] = {}
        self.trace: Any = None

    @property
    def frozen(self) -> bool:
        return bool(getattr(self.context, "frozen", False))

    def call(self, method: str, *args: Any) -> Any:
        """Invoke an engine primitive, re-raising engine failures with the view path."""
        fn = getattr(self.context, method)
        try:
            return fn(*args)
        except DocProxyError:
            raise
        except Exception as e:
            logger.debug("engine %s%r failed at %s", method, args, describe(self.path), exc_info=True)
            raise DocumentEngineError(f"{method}() failed at {describe(self.path)}: {e}", path=self.path) from e

    def check_writable(self, message: str) -> None:
        if self.frozen:
            logger.warning("write rejected at %s: document handle is frozen", describe(self.path))
            raise FrozenDocumentError(path=self.path)
        if self.readonly:
            raise ReadOnlyError(message, path=self.path)

    def invalidate(self) -> None:
        self.cache = {}


class ProxyBase:
    """Common base of map, list and text views."""

    __slots__ = ("_state",)

    def __init__(self, state: ViewState):
        object.__setattr__(self, "_state", state)


def is_proxy(value: Any) -> bool:
    return isinstance(value, ProxyBase)


def get_object_id(value: Any) -> Optional[str]:
    """Object identity behind a view, or None for anything else."""
    if isinstance(value, ProxyBase):
        return object.__getattribute__(value, "_state").object_id
    return None


def get_handle(value: Any) -> Any:
    """Document handle a view is bound to, or None for anything else."""
    if isinstance(value, ProxyBase):
        return object.__getattribute__(value, "_state").context
    return None


def get_path(value: Any) -> Optional[Path]:
    if isinstance(value, ProxyBase):
        return object.__getattribute__(value, "_state").path
    return None


def read_reserved(state: ViewState, key: Any) -> Any:
    """Answer a reserved accessor, or return MISSING when ``key`` is not one."""
    if key is OBJECT_ID:
        return state.object_id
    if key is IS_PROXY:
        return True
    if key is TRACE:
        return state.trace
    if key is STATE:
        return {"handle": state.context}
    return MISSING


def parse_list_index(key: Any) -> Any:
    """Normalise a list index.

    Digit strings become ints; negative, fractional, NaN and infinite numbers raise
    ListIndexError. Anything else (method names, sentinels) is returned unchanged.
    """
    if isinstance(key, str) and _DIGITS.fullmatch(key):
        key = int(key)
    if isinstance(key, bool) or not isinstance(key, (int, float)):
        return key
    if isinstance(key, float):
        if math.isnan(key) or math.isinf(key) or not key.is_integer():
            raise ListIndexError(f"A list index must be a non-negative integer, but you passed {key}")
        key = int(key)
    if key < 0:
        raise ListIndexError(f"A list index must be positive, but you passed {key}")
    return key
