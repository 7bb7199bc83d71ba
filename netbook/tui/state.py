"""Interactive session state."""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from ..config import Settings
from ..core.errors import CollectionError, NetbookError, PersistenceFailure
from ..core.interpolation import VariableInterpolator
from ..models import ExecutionResult, HistoryLog, RequestTemplate
from ..storage import (
    HistoryStore,
    VariableStore,
    create_initial_collection,
    load_collection,
    save_collection,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)


class AppMode(Enum):
    NORMAL = "Normal"
    FILTER = "Filter"
    VARIABLES = "Variables"
    HISTORY = "History"
    COMMAND = "Command"


class ResponseTab(Enum):
    PRETTY = "Pretty"
    RAW = "Raw"
    HEADERS = "Headers"
    TIMELINE = "Timeline"

    def next(self) -> "ResponseTab":
        tabs = list(ResponseTab)
        return tabs[(tabs.index(self) + 1) % len(tabs)]

    def previous(self) -> "ResponseTab":
        tabs = list(ResponseTab)
        return tabs[(tabs.index(self) - 1) % len(tabs)]


def matches_filter(template: RequestTemplate, filter_lower: str) -> bool:
    return (
        filter_lower in template.name.lower()
        or filter_lower in template.url.lower()
        or filter_lower in template.method.value.lower()
    )


class AppState:
    """Single source of truth for an interactive session.

    Owned by the controller; nothing else mutates it. Invariants:
    ``filtered_indices`` is an order-preserving subsequence of collection
    indices, and ``selected_request_index`` is a valid position in it (or 0
    when it is empty).
    """

    def __init__(
        self,
        collection: List[RequestTemplate],
        collection_path: Path,
        interpolator: Optional[VariableInterpolator] = None,
        history: Optional[HistoryLog] = None,
        history_store: Optional[HistoryStore] = None,
        variable_store: Optional[VariableStore] = None,
    ):
        self.collection = list(collection)
        self.collection_path = Path(collection_path)
        self.interpolator = interpolator or VariableInterpolator()
        self.history = history if history is not None else HistoryLog()
        self.history_store = history_store
        self.variable_store = variable_store

        self.filter_text = ""
        self.filtered_indices: List[int] = list(range(len(self.collection)))
        self.selected_request_index = 0
        self.mode = AppMode.NORMAL
        self.response_tab = ResponseTab.PRETTY
        self.current_response: Optional[ExecutionResult] = None
        self.is_executing = False
        self.status_message = "Ready"
        self.history_selected_index = 0
        self.should_quit = False

    @classmethod
    def load(cls, collection_path: Path, settings: Settings) -> "AppState":
        """Build session state: collection, variables, and history.

        A missing collection is created with example requests. A collection
        that cannot be loaded leaves the session with an empty one and the
        error in the status line.
        """
        collection_path = Path(collection_path)
        status = None

        if not collection_path.exists():
            try:
                create_initial_collection(collection_path)
                status = f"Created new collection at {collection_path}"
            except OSError as e:
                logger.error(f"Could not create collection: {e}")
        try:
            collection = load_collection(collection_path)
        except CollectionError as e:
            logger.error(f"Falling back to an empty collection: {e}")
            collection = []
            status = f"Error: {e}"

        variable_store = VariableStore(settings.variables_path)
        interpolator = VariableInterpolator()
        interpolator.load_env_file(collection_path)
        try:
            for key, value in variable_store.load().items():
                interpolator.set_variable(key, value)
        except PersistenceFailure as e:
            logger.warning(f"Ignoring saved variables: {e}")

        history_store = HistoryStore(
            settings.history_path, settings.history_max_entries
        )
        try:
            history = history_store.load()
        except PersistenceFailure as e:
            logger.warning(f"Starting with empty history: {e}")
            history = HistoryLog(max_entries=settings.history_max_entries)

        state = cls(
            collection,
            collection_path,
            interpolator=interpolator,
            history=history,
            history_store=history_store,
            variable_store=variable_store,
        )
        if status:
            state.status_message = status
        return state

    # Request selection

    def get_current_request(self) -> Optional[RequestTemplate]:
        if not self.filtered_indices:
            return None
        return self.collection[self.filtered_indices[self.selected_request_index]]

    def get_filtered_requests(self) -> List[RequestTemplate]:
        return [self.collection[i] for i in self.filtered_indices]

    def update_filter(self, filter_text: str) -> None:
        """Re-filter by case-insensitive substring of name, URL, or method."""
        self.filter_text = filter_text
        if not filter_text:
            self.filtered_indices = list(range(len(self.collection)))
        else:
            filter_lower = filter_text.lower()
            self.filtered_indices = [
                i
                for i, template in enumerate(self.collection)
                if matches_filter(template, filter_lower)
            ]
        self.selected_request_index = 0

    def move_selection_up(self) -> None:
        if self.selected_request_index > 0:
            self.selected_request_index -= 1

    def move_selection_down(self) -> None:
        if self.selected_request_index + 1 < len(self.filtered_indices):
            self.selected_request_index += 1

    def replace_request(self, name: str, template: RequestTemplate) -> bool:
        """Swap the template stored under ``name``; False if there is none."""
        for i, existing in enumerate(self.collection):
            if existing.name == name:
                self.collection[i] = template
                return True
        return False

    def save_collection(self) -> None:
        save_collection(self.collection, self.collection_path)

    # Response display

    def next_response_tab(self) -> None:
        self.response_tab = self.response_tab.next()

    def previous_response_tab(self) -> None:
        self.response_tab = self.response_tab.previous()

    # Execution lifecycle

    def mark_executing(self, request_name: str) -> None:
        self.is_executing = True
        self.status_message = f"Executing '{request_name}'..."

    def apply_completed(self, request_name: str, response: ExecutionResult) -> None:
        """Show a finished execution and record it in history.

        A history write failure is reported in the status line only.
        """
        self.is_executing = False
        self.current_response = response
        if response.is_transport_failure:
            body = response.body if isinstance(response.body, dict) else {}
            message = body.get('message', 'transport error')
            self.status_message = f"Request failed: {message}"
        else:
            self.status_message = (
                f"Request completed - Status: {response.status} "
                f"({response.timing.total_ms}ms)"
            )
        try:
            self.save_response_to_history(request_name, response)
        except NetbookError as e:
            logger.warning(f"History not saved: {e}")
            self.status_message += f" [history not saved: {e}]"

    def apply_failed(self, error: str) -> None:
        self.is_executing = False
        self.current_response = None
        self.status_message = f"Request failed: {error}"

    def save_response_to_history(
        self, request_name: str, response: ExecutionResult
    ) -> None:
        self.history.add_entry(request_name, response)
        if self.history_store is not None:
            self.history_store.save(self.history)

    # History navigation

    def enter_history(self) -> None:
        self.mode = AppMode.HISTORY
        last = max(len(self.history.entries) - 1, 0)
        self.history_selected_index = min(self.history_selected_index, last)

    def move_history_up(self) -> None:
        if self.history_selected_index > 0:
            self.history_selected_index -= 1

    def move_history_down(self) -> None:
        if self.history_selected_index + 1 < len(self.history.entries):
            self.history_selected_index += 1

    def load_selected_history(self) -> bool:
        """Display the selected entry's result and return to Normal mode."""
        if not 0 <= self.history_selected_index < len(self.history.entries):
            return False
        entry = self.history.entries[self.history_selected_index]
        self.current_response = entry.response
        self.mode = AppMode.NORMAL
        self.status_message = f"Loaded history entry for '{entry.request_name}'"
        return True

    # Variables

    def set_variable(self, key: str, value: str) -> None:
        self.interpolator.set_variable(key, value)

    def get_variable(self, key: str) -> Optional[str]:
        return self.interpolator.resolve(key)

    def get_all_variables(self) -> Dict[str, str]:
        return self.interpolator.all_variables()

    def save_variables(self) -> None:
        """Persist in-memory variables; failures go to the status line."""
        if self.variable_store is None:
            return
        try:
            self.variable_store.save(self.interpolator.in_memory)
        except PersistenceFailure as e:
            logger.warning(str(e))
            self.status_message = f"Failed to save variables: {e}"
        else:
            self.status_message = (
                f"Saved {len(self.interpolator.in_memory)} variables"
            )

    def capture_variable(self, name: str, path: str) -> Optional[str]:
        """Store a value from the displayed response as a variable."""
        if self.current_response is None:
            self.status_message = "No response to capture from"
            return None
        value = self.interpolator.extract_from_response_path(
            self.current_response.body, path
        )
        if value is None:
            self.status_message = f"Path '{path}' not found in response"
            return None
        self.set_variable(name, value)
        self.status_message = f"Set {name} = {value}"
        return value
