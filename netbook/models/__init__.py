"""Data models for request templates, execution results, and history."""

from .http_models import (
    HttpMethod,
    TextBody,
    JsonBody,
    RequestBody,
    RequestTemplate,
    ResponseTiming,
    ExecutionResult,
    body_from_value,
)
from .history_models import HistoryEntry, HistoryLog, DEFAULT_MAX_ENTRIES

__all__ = [
    "HttpMethod",
    "TextBody",
    "JsonBody",
    "RequestBody",
    "RequestTemplate",
    "ResponseTiming",
    "ExecutionResult",
    "body_from_value",
    "HistoryEntry",
    "HistoryLog",
    "DEFAULT_MAX_ENTRIES",
]
