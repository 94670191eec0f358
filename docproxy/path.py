"""docproxy.path

Property-access chain from the document root to a view.
"""

from __future__ import annotations

from typing import Union

Prop = Union[str, int]


class Path(tuple):
    """Immutable sequence of map keys and list indices; the root is ``Path()``."""

    __slots__ = ()

    def child(self, prop: Prop) -> "Path":
        return Path(self + (prop,))

    def __str__(self) -> str:
        return ".".join(str(p) for p in self)

    def __repr__(self) -> str:
        return f"Path({list(self)!r})"


ROOT_PATH = Path()


def describe(path: Path) -> str:
    """Human-readable location used in error messages."""
    s = str(path)
    return s if s else "<root>"
