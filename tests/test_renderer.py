import io

from rich.console import Console

from netbook.models import ExecutionResult, HistoryLog, HttpMethod, RequestTemplate, ResponseTiming
from netbook.tui.renderer import build_view, render_response_content
from netbook.tui.state import AppMode, AppState, ResponseTab


def render(renderable, width=120):
    console = Console(file=io.StringIO(), width=width, record=True)
    console.print(renderable)
    return console.export_text()


def make_state():
    return AppState(
        [RequestTemplate("Get user", HttpMethod.GET, "{{base}}/users/1")],
        "collection.json",
    )


RESPONSE = ExecutionResult(
    status=200,
    headers={"content-type": "application/json"},
    body={"id": 1},
    timing=ResponseTiming(total_ms=12),
)


def test_pretty_and_raw_tabs():
    pretty = render(render_response_content(RESPONSE, ResponseTab.PRETTY))
    assert "Status: 200" in pretty
    assert '"id": 1' in pretty
    assert '{"id":1}' in render(render_response_content(RESPONSE, ResponseTab.RAW))


def test_headers_and_timeline_tabs():
    assert "content-type" in render(render_response_content(RESPONSE, ResponseTab.HEADERS))
    timeline = render(render_response_content(RESPONSE, ResponseTab.TIMELINE))
    assert "12ms" in timeline
    assert "n/a" in timeline


def test_full_view_shows_requests_and_status():
    state = make_state()
    state.interpolator.set_variable("base", "https://api.example.com")
    text = render(build_view(state))
    assert "Get user" in text
    assert "https://api.example.com/users/1" in text
    assert "Ready" in text


def test_modals():
    state = make_state()
    state.interpolator.env_vars["base"] = "http://x"
    state.mode = AppMode.VARIABLES
    assert "(env) http://x" in render(build_view(state))

    state.history = HistoryLog()
    state.history.add_entry("Get user", RESPONSE)
    state.mode = AppMode.HISTORY
    assert "200" in render(build_view(state))
