"""docproxy.errors

Exception taxonomy for the view layer.

Every error is raised synchronously and propagated to the caller; nothing here
is retried or recovered.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Sequence


class ErrorCategory(str, Enum):
    """Error categories for classification and diagnostics."""

    ALIASING = "aliasing"
    POLICY = "policy"
    TYPE = "type"
    RANGE = "range"
    ENGINE = "engine"


class DocProxyError(Exception):
    """Base class for every error raised by docproxy views."""

    category: ErrorCategory = ErrorCategory.ENGINE

    def __init__(self, message: str, *, path: Optional[Sequence[Any]] = None):
        super().__init__(message)
        self.message = message
        self.path = path


class AliasingError(DocProxyError, ValueError):
    """A value that is already part of a document was assigned somewhere else."""

    category = ErrorCategory.ALIASING

    def __init__(self, message: str = "Cannot create a reference to an existing document object", **kwargs: Any):
        super().__init__(message, **kwargs)


class PolicyError(DocProxyError):
    """A mutation was attempted where the view does not accept writes."""

    category = ErrorCategory.POLICY


class ReadOnlyError(PolicyError):
    pass


class FrozenDocumentError(PolicyError):
    def __init__(self, message: str = "Attempting to use an outdated document", **kwargs: Any):
        super().__init__(message, **kwargs)


class UnsupportedTypeError(DocProxyError, TypeError):
    """A value (or datatype tag) does not map onto the tagged value model."""

    category = ErrorCategory.TYPE


class ListTypeError(DocProxyError, TypeError):
    """A list-specific structural constraint was violated."""

    category = ErrorCategory.TYPE


class ListIndexError(DocProxyError, ValueError):
    """A list index is negative, fractional or not finite."""

    category = ErrorCategory.RANGE


class DocumentEngineError(DocProxyError):
    """The backing engine raised; the original exception is chained as __cause__."""

    category = ErrorCategory.ENGINE
