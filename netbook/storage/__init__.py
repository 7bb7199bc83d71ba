"""Durable storage for collections, history, and variables."""

from .collection_store import load_collection, save_collection, find_request
from .discovery import (
    discover_collection,
    get_netbook_dir,
    create_initial_collection,
)
from .history_store import (
    HistoryStore,
    add_to_history,
    clear_history,
    export_history_entry,
    export_last_response,
)
from .variable_store import VariableStore, load_interpolator_with_context

__all__ = [
    "load_collection",
    "save_collection",
    "find_request",
    "discover_collection",
    "get_netbook_dir",
    "create_initial_collection",
    "HistoryStore",
    "add_to_history",
    "clear_history",
    "export_history_entry",
    "export_last_response",
    "VariableStore",
    "load_interpolator_with_context",
]
