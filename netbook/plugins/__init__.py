"""Plugin hook bus and built-in plugins."""

from typing import Optional

from ..config import Settings
from .base import Plugin
from .manager import PluginManager
from .request_logger import RequestLoggerPlugin


def create_plugin_manager(settings: Optional[Settings] = None) -> PluginManager:
    """Build the plugin bus with the built-in plugins enabled by settings."""
    manager = PluginManager()
    if settings is not None and settings.request_log_file is not None:
        manager.register(RequestLoggerPlugin(settings.request_log_file))
    return manager


__all__ = [
    "Plugin",
    "PluginManager",
    "RequestLoggerPlugin",
    "create_plugin_manager",
]
