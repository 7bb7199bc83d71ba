import pytest

from netbook.config import Settings
from netbook.models import ExecutionResult, HttpMethod, RequestTemplate, ResponseTiming
from netbook.plugins import Plugin, PluginManager, RequestLoggerPlugin, create_plugin_manager


@pytest.mark.asyncio
async def test_request_logger_writes_lifecycle_lines(tmp_path):
    log_file = tmp_path / "requests.log"
    plugin = RequestLoggerPlugin(log_file)

    await plugin.before_request(
        RequestTemplate("Get user", HttpMethod.GET, "https://example.com/users/1")
    )
    await plugin.after_response(
        ExecutionResult(status=200, body={"id": 1}, timing=ResponseTiming(total_ms=42))
    )
    await plugin.on_error(RuntimeError("connection refused"))

    lines = log_file.read_text().splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("[")
    assert lines[0].endswith("BEFORE REQUEST: GET Get user https://example.com/users/1")
    assert lines[1].endswith("AFTER RESPONSE: Status 200 - 8 bytes - 42ms")
    assert lines[2].endswith("ERROR: connection refused")


@pytest.mark.asyncio
async def test_default_hooks_do_nothing():
    plugin = Plugin()
    assert plugin.get_name() == "plugin"
    await plugin.before_request(RequestTemplate("t", HttpMethod.GET, "http://x"))
    await plugin.after_response(ExecutionResult(status=200))
    await plugin.on_error(RuntimeError("x"))


def test_manager_lists_plugins_in_registration_order(tmp_path):
    manager = PluginManager()
    manager.register(Plugin())
    manager.register(RequestLoggerPlugin(tmp_path / "log"))
    assert manager.list_plugins() == ["plugin", "Request Logger"]


def test_request_logger_enabled_by_settings(tmp_path):
    assert create_plugin_manager(Settings(data_dir=tmp_path)).list_plugins() == []

    settings = Settings(data_dir=tmp_path, request_log_file=tmp_path / "req.log")
    assert create_plugin_manager(settings).list_plugins() == ["Request Logger"]
