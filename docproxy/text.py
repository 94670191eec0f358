"""docproxy.text

``Text``: a detached rich-text value.

Under the rich text scheme a ``Text`` is what you assign to create a text object
in the document; each element is either a single character or an embedded value
(a dict, list or scalar occupying one position).
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, List, Union

from .constants import OBJECT_REPLACEMENT_CHAR
from .errors import UnsupportedTypeError


def check_element(value: Any) -> Any:
    """Text elements are single characters or embedded non-string values."""
    if isinstance(value, str) and len(value) != 1:
        raise UnsupportedTypeError(f"Text elements must be single characters, got {value!r}")
    return value


def spans_of(elems: Iterable[Any]) -> List[Any]:
    """Coalesce consecutive characters into strings; other elements stand alone."""
    spans: List[Any] = []
    chars = ""
    for value in elems:
        if isinstance(value, str):
            chars += value
        else:
            if chars:
                spans.append(chars)
                chars = ""
            spans.append(value)
    if chars:
        spans.append(chars)
    return spans


class Text:
    __slots__ = ("elems",)

    def __init__(self, text: Union[str, Iterable[Any], None] = None):
        if text is None:
            self.elems: List[Any] = []
        elif isinstance(text, str):
            self.elems = list(text)
        else:
            self.elems = [check_element(e) for e in text]

    def __len__(self) -> int:
        return len(self.elems)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.elems)

    def __getitem__(self, index: int) -> Any:
        return self.elems[index]

    def get(self, index: int) -> Any:
        return self.elems[index]

    def set(self, index: int, value: Any) -> None:
        self.elems[index] = check_element(value)

    def insert_at(self, index: int, *values: Any) -> None:
        self.elems[index:index] = [check_element(v) for v in values]

    def delete_at(self, index: int, count: int = 1) -> None:
        del self.elems[index:index + count]

    def to_string(self) -> str:
        """Characters only; embedded values are dropped."""
        return "".join(e for e in self.elems if isinstance(e, str))

    def to_spans(self) -> List[Any]:
        return spans_of(self.elems)

    def to_json(self) -> str:
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        shown = "".join(e if isinstance(e, str) else OBJECT_REPLACEMENT_CHAR for e in self.elems)
        return f"Text({shown!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Text):
            return self.elems == other.elems
        if isinstance(other, str):
            return self.to_string() == other and all(isinstance(e, str) for e in self.elems)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]
