"""Run a single request without the interactive interface."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

from ..config import Settings
from ..plugins import create_plugin_manager
from ..storage import (
    HistoryStore,
    VariableStore,
    add_to_history,
    find_request,
    load_collection,
    load_interpolator_with_context,
)
from .errors import NetbookError, RequestNotFound
from .executor import RequestExecutor

logger = logging.getLogger(__name__)


async def run_headless(
    name: str,
    collection_path: Path,
    settings: Settings,
    executor: Optional[RequestExecutor] = None,
) -> int:
    """Execute the named request and print the outcome.

    Returns:
        Process exit code: 0 on success, 1 on any failure
    """
    owns_executor = executor is None
    if executor is None:
        executor = RequestExecutor(
            timeout=settings.request_timeout,
            plugin_manager=create_plugin_manager(settings),
            max_redirects=settings.max_redirects,
        )

    try:
        collection = load_collection(collection_path)
        template = find_request(collection, name)
        if template is None:
            raise RequestNotFound(name)

        interpolator = load_interpolator_with_context(
            collection_path, VariableStore(settings.variables_path)
        )
        response = await executor.execute(template, interpolator)
    except NetbookError as e:
        logger.error(f"Headless run of '{name}' failed: {e}")
        print(f"Request failed: {e}", file=sys.stderr)
        return 1
    finally:
        if owns_executor:
            await executor.aclose()

    print(f"Status: {response.status}")
    print(f"Time: {response.timing.total_ms}ms")
    print()
    print(json.dumps(response.body, indent=2, ensure_ascii=False))

    store = HistoryStore(settings.history_path, settings.history_max_entries)
    try:
        add_to_history(store, template.name, response)
    except NetbookError as e:
        logger.warning(f"Could not record history: {e}")

    return 0
