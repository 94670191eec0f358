"""docproxy.constants

Reserved accessor keys and fixed identifiers shared by every view kind.
"""

from __future__ import annotations


class _Sentinel:
    """Unique reserved key; never collides with a document property name."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"<docproxy.{self.name}>"


# Reserved accessors understood by map, list and text views.
OBJECT_ID = _Sentinel("OBJECT_ID")
IS_PROXY = _Sentinel("IS_PROXY")
TRACE = _Sentinel("TRACE")
STATE = _Sentinel("STATE")

# Result of reading a property or index that holds no value.
MISSING = _Sentinel("MISSING")

ROOT_ID = "_root"

# Rendered in place of embedded (non-character) text elements.
OBJECT_REPLACEMENT_CHAR = "\ufffc"
