"""Ordered fan-out of lifecycle hooks to registered plugins."""

import copy
import logging
from typing import Any, List

from ..models import ExecutionResult, RequestTemplate
from .base import Plugin

logger = logging.getLogger(__name__)


class PluginManager:
    """Holds plugins in registration order and invokes their hooks.

    Each hook runs to completion before the next plugin's hook starts. A
    failing hook is logged and skipped; it never reaches the executor.
    Request and response hooks receive private copies, so a plugin cannot
    change what is sent or what the caller gets back.
    """

    def __init__(self):
        self.plugins: List[Plugin] = []

    def register(self, plugin: Plugin) -> None:
        self.plugins.append(plugin)
        logger.info(f"Registered plugin: {plugin.get_name()}")

    def list_plugins(self) -> List[str]:
        return [plugin.get_name() for plugin in self.plugins]

    async def before_request(self, request: RequestTemplate) -> None:
        await self._dispatch('before_request', request, isolate=True)

    async def after_response(self, response: ExecutionResult) -> None:
        await self._dispatch('after_response', response, isolate=True)

    async def on_error(self, error: Exception) -> None:
        await self._dispatch('on_error', error)

    async def _dispatch(self, hook: str, payload: Any, isolate: bool = False) -> None:
        for plugin in self.plugins:
            try:
                await getattr(plugin, hook)(copy.deepcopy(payload) if isolate else payload)
            except Exception as e:
                logger.warning(
                    f"Plugin '{plugin.get_name()}' failed in {hook}: {e}",
                    exc_info=True,
                )
