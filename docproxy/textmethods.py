"""docproxy.textmethods

String-oriented methods layered over a text view's element reads.
"""

from __future__ import annotations

from typing import Any, List

from .constants import OBJECT_REPLACEMENT_CHAR
from .text import spans_of

TEXT_METHODS = frozenset(["get", "set", "to_string", "to_spans", "to_json", "index_of"])


class TextMethods:
    __slots__ = ()

    def get(self, index: int) -> Any:
        try:
            return self[index]
        except IndexError:
            return None

    def set(self, index: int, value: Any) -> Any:
        self[index] = value
        return value

    def to_string(self) -> str:
        """Characters only; embedded values are stripped."""
        state = self._state
        return state.call("text", state.object_id, state.heads).replace(OBJECT_REPLACEMENT_CHAR, "")

    def to_spans(self) -> List[Any]:
        """Runs of characters as strings, embedded values as standalone entries, in order."""
        return spans_of(self)

    def to_json(self) -> str:
        return self.to_string()

    def index_of(self, o: Any, start: int = 0) -> int:
        """Position of substring ``o`` in the rendered text (embedded values count as one position)."""
        state = self._state
        return state.call("text", state.object_id, state.heads).find(o, start)

    def __str__(self) -> str:
        return self.to_string()
