"""Core request engine: interpolation, execution, and errors."""

from .errors import (
    NetbookError,
    CollectionError,
    CollectionNotFound,
    CollectionParseError,
    RequestNotFound,
    TransportFailure,
    EditorFailure,
    EditDecodeFailure,
    PersistenceFailure,
)
from .interpolation import (
    VariableInterpolator,
    extract_from_response_path,
    PLACEHOLDER_PATTERN,
)
from .executor import RequestExecutor

__all__ = [
    "NetbookError",
    "CollectionError",
    "CollectionNotFound",
    "CollectionParseError",
    "RequestNotFound",
    "TransportFailure",
    "EditorFailure",
    "EditDecodeFailure",
    "PersistenceFailure",
    "VariableInterpolator",
    "extract_from_response_path",
    "PLACEHOLDER_PATTERN",
    "RequestExecutor",
]
