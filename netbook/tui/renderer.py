"""Draw the session state with rich."""

import json
from typing import Any, Optional

from rich.console import Group, RenderableType
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models import ExecutionResult, HttpMethod
from .state import AppMode, AppState, ResponseTab

METHOD_COLORS = {
    HttpMethod.GET: "green",
    HttpMethod.POST: "yellow",
    HttpMethod.PUT: "blue",
    HttpMethod.PATCH: "magenta",
    HttpMethod.DELETE: "red",
}

BODY_PREVIEW_LINES = 10


def render_request_list(state: AppState) -> Panel:
    requests = state.get_filtered_requests()
    lines = Text()
    for i, template in enumerate(requests):
        selected = i == state.selected_request_index
        highlight = " on blue" if selected else ""
        lines.append(
            f"{template.method.value:<7}",
            style=METHOD_COLORS.get(template.method, "white") + highlight,
        )
        lines.append(f" {template.name}\n", style="white" + highlight)

    title = f"Requests ({len(requests)}/{len(state.collection)})"
    if state.filter_text:
        title += f" - Filter: '{state.filter_text}'"
    border = "yellow" if state.mode is AppMode.FILTER else "white"
    return Panel(lines, title=title, border_style=border)


def render_request_details(state: AppState) -> Panel:
    template = state.get_current_request()
    if template is None:
        return Panel("No request selected", title="Request Details")

    request = state.interpolator.interpolate_request(template)
    text = Text()
    text.append("Method: ", style="cyan")
    text.append(f"{request.method}\n")
    text.append("URL: ", style="cyan")
    text.append(f"{request.url}\n\n")

    for label, mapping in (("Headers", request.headers), ("Query", request.query)):
        if mapping:
            text.append(f"{label}:\n", style="cyan")
            for key, value in mapping.items():
                text.append(f"  {key}: {value}\n")
            text.append("\n")

    if request.body is not None:
        text.append("Body:\n", style="cyan")
        for line in request.body.to_text().splitlines()[:BODY_PREVIEW_LINES]:
            text.append(f"  {line}\n")
        text.append("\n")

    if request.notes:
        text.append("Notes:\n", style="cyan")
        text.append(request.notes)

    return Panel(text, title="Request Details")


def _raw_body(body: Any) -> str:
    if isinstance(body, str):
        return body
    return json.dumps(body, separators=(',', ':'), ensure_ascii=False)


def render_response_content(response: ExecutionResult, tab: ResponseTab) -> RenderableType:
    if tab is ResponseTab.PRETTY:
        status_style = "green" if 200 <= response.status < 300 else "red"
        header = Text(f"Status: {response.status}", style=status_style)
        body = response.body
        if not isinstance(body, str):
            body = json.dumps(body, indent=2, ensure_ascii=False)
        return Group(header, Text(body))
    if tab is ResponseTab.RAW:
        return Text(_raw_body(response.body))
    if tab is ResponseTab.HEADERS:
        table = Table(show_header=True, expand=True)
        table.add_column("Header", style="cyan")
        table.add_column("Value")
        for key, value in response.headers.items():
            table.add_row(key, value)
        return table

    timing = response.timing
    table = Table(show_header=False, expand=True)
    table.add_column("Phase", style="cyan")
    table.add_column("Time")
    table.add_row("Total", f"{timing.total_ms}ms")
    for label, value in (
        ("DNS lookup", timing.dns_lookup_ms),
        ("TCP connect", timing.tcp_connect_ms),
        ("TLS handshake", timing.tls_handshake_ms),
        ("Request", timing.request_ms),
    ):
        table.add_row(label, "n/a" if value is None else f"{value}ms")
    table.add_row("Timestamp", response.timestamp.isoformat())
    return table


def render_response_pane(state: AppState) -> Panel:
    tabs = Text()
    for tab in ResponseTab:
        style = "bold yellow" if tab is state.response_tab else "white"
        tabs.append(f" {tab.value} ", style=style)
        tabs.append("|")

    if state.current_response is not None:
        content = render_response_content(state.current_response, state.response_tab)
    elif state.is_executing:
        content = Text("Executing request...", style="yellow")
    else:
        content = Text("No response yet")
    return Panel(Group(tabs, Text(""), content), title="Response")


def render_modal(state: AppState) -> Optional[Panel]:
    if state.mode is AppMode.FILTER:
        return Panel(
            Text(f"/{state.filter_text}"),
            title="Filter (Enter confirm, Esc cancel)",
            border_style="yellow",
        )
    if state.mode is AppMode.VARIABLES:
        table = Table(show_header=True, expand=True)
        table.add_column("Name", style="cyan")
        table.add_column("Value")
        for key, value in sorted(state.get_all_variables().items()):
            table.add_row(key, value)
        return Panel(table, title="Variables (w save, Esc close)")
    if state.mode is AppMode.HISTORY:
        lines = Text()
        for i, entry in enumerate(state.history.entries):
            style = "white on blue" if i == state.history_selected_index else ""
            lines.append(
                f"{entry.created_at:%Y-%m-%d %H:%M:%S}  "
                f"{entry.response.status:>3}  {entry.request_name}\n",
                style=style,
            )
        if not state.history.entries:
            lines.append("No history yet")
        return Panel(lines, title="History (Enter load, Esc close)")
    if state.mode is AppMode.COMMAND:
        return Panel(Text("e  edit current request"), title="Command (Esc close)")
    return None


def render_status_bar(state: AppState) -> Text:
    text = Text()
    text.append(f" {state.mode.value.upper()} ", style="black on cyan")
    text.append(f" {state.status_message}")
    return text


def build_view(state: AppState) -> Layout:
    layout = Layout()
    layout.split_column(Layout(name="main"), Layout(name="status", size=1))
    layout["main"].split_row(
        Layout(name="requests", ratio=25),
        Layout(name="details", ratio=40),
        Layout(name="response", ratio=35),
    )
    layout["requests"].update(render_request_list(state))
    modal = render_modal(state)
    layout["details"].update(modal if modal is not None else render_request_details(state))
    layout["response"].update(render_response_pane(state))
    layout["status"].update(render_status_bar(state))
    return layout
