"""docproxy package

Native-looking map, list and text views over a versioned document engine.
Public API is re-exported here for convenience.
"""

from .version import __version__
from .constants import IS_PROXY, OBJECT_ID, STATE, TRACE  # noqa: F401
from .counter import Counter, WriteableCounter  # noqa: F401
from .datatypes import F64, Datatype, Int, RawString, TaggedValue, Uint  # noqa: F401
from .document import DocHandle, Document  # noqa: F401
from .engine import DocumentEngine, EngineError  # noqa: F401
from .errors import (  # noqa: F401
    AliasingError,
    DocProxyError,
    DocumentEngineError,
    ErrorCategory,
    FrozenDocumentError,
    ListIndexError,
    ListTypeError,
    PolicyError,
    ReadOnlyError,
    UnsupportedTypeError,
)
from .memory import MemoryEngine  # noqa: F401
from .path import Path  # noqa: F401
from .proxies import (  # noqa: F401
    ListProxy,
    MapProxy,
    TextProxy,
    get_handle,
    get_object_id,
    get_path,
    is_proxy,
    list_proxy,
    map_proxy,
    root_proxy,
    text_proxy,
    to_py,
)
from .text import Text  # noqa: F401


__all__ = [
    "__version__",
    "OBJECT_ID",
    "IS_PROXY",
    "TRACE",
    "STATE",
    "Counter",
    "WriteableCounter",
    "Datatype",
    "TaggedValue",
    "Int",
    "Uint",
    "F64",
    "RawString",
    "Text",
    "Path",
    "Document",
    "DocHandle",
    "DocumentEngine",
    "EngineError",
    "MemoryEngine",
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
    "ErrorCategory",
    "DocProxyError",
    "AliasingError",
    "PolicyError",
    "ReadOnlyError",
    "FrozenDocumentError",
    "UnsupportedTypeError",
    "ListTypeError",
    "ListIndexError",
    "DocumentEngineError",
]
