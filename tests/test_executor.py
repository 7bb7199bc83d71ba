import json

import httpx
import pytest

from netbook.core import RequestExecutor, TransportFailure, VariableInterpolator
from netbook.models import HttpMethod, JsonBody, RequestTemplate, TextBody
from netbook.plugins import Plugin, PluginManager


class RecordingPlugin(Plugin):
    name = "recorder"

    def __init__(self, calls, label="recorder"):
        self.calls = calls
        self.label = label

    async def before_request(self, request):
        self.calls.append((self.label, "before", request.url))

    async def after_response(self, response):
        self.calls.append((self.label, "after", response.status))

    async def on_error(self, error):
        self.calls.append((self.label, "error", str(error)))


class BrokenPlugin(Plugin):
    name = "broken"

    async def before_request(self, request):
        raise RuntimeError("plugin bug")

    async def after_response(self, response):
        raise RuntimeError("plugin bug")


def make_executor(handler, plugin_manager=None, **kwargs):
    return RequestExecutor(
        plugin_manager=plugin_manager,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_execute_returns_parsed_json():
    seen = {}

    def handler(request):
        seen['method'] = request.method
        seen['url'] = str(request.url)
        seen['auth'] = request.headers.get('Authorization')
        return httpx.Response(200, json={"id": 123, "name": "Ann"})

    executor = make_executor(handler)
    template = RequestTemplate(
        name="Get user",
        method=HttpMethod.GET,
        url="{{base_url}}/users/{{user_id}}",
        headers={"Authorization": "Bearer {{token}}"},
    )
    interpolator = VariableInterpolator({
        "base_url": "https://api.example.com",
        "user_id": "123",
        "token": "abc",
    })

    result = await executor.execute(template, interpolator)

    assert seen == {
        'method': "GET",
        'url': "https://api.example.com/users/123",
        'auth': "Bearer abc",
    }
    assert result.status == 200
    assert result.body == {"id": 123, "name": "Ann"}
    assert result.request_id == "Get user"
    assert result.timing.total_ms >= 0
    assert result.timing.dns_lookup_ms is None
    await executor.aclose()


@pytest.mark.asyncio
async def test_non_json_body_is_kept_as_string():
    executor = make_executor(lambda request: httpx.Response(500, text="oops"))
    template = RequestTemplate("t", HttpMethod.GET, "https://example.com/")

    result = await executor.execute(template)

    assert result.status == 500
    assert result.body == "oops"
    await executor.aclose()


@pytest.mark.asyncio
async def test_query_and_json_body_are_sent():
    seen = {}

    def handler(request):
        seen['params'] = dict(request.url.params)
        seen['body'] = json.loads(request.content)
        seen['content_type'] = request.headers.get('Content-Type')
        return httpx.Response(201, json={"ok": True})

    executor = make_executor(handler)
    template = RequestTemplate(
        "Create",
        HttpMethod.POST,
        "https://example.com/posts",
        query={"draft": "{{draft}}"},
        body=JsonBody({"title": "{{title}}"}),
    )
    result = await executor.execute(
        template, VariableInterpolator({"draft": "yes", "title": "Hi"})
    )

    assert result.status == 201
    assert seen == {
        'params': {"draft": "yes"},
        'body': {"title": "Hi"},
        'content_type': "application/json",
    }
    await executor.aclose()


@pytest.mark.asyncio
async def test_text_body_is_sent_verbatim():
    seen = {}

    def handler(request):
        seen['body'] = request.content
        return httpx.Response(200, text="")

    executor = make_executor(handler)
    template = RequestTemplate(
        "Raw", HttpMethod.PUT, "https://example.com/", body=TextBody("a=1&b=2")
    )
    await executor.execute(template)

    assert seen['body'] == b"a=1&b=2"
    await executor.aclose()


@pytest.mark.asyncio
async def test_undecodable_header_is_dropped():
    def handler(request):
        return httpx.Response(
            200,
            headers=[(b"X-Good", b"fine"), (b"X-Bad", b"\xff\xfe")],
            text="ok",
        )

    executor = make_executor(handler)
    result = await executor.execute(
        RequestTemplate("t", HttpMethod.GET, "https://example.com/")
    )

    assert result.headers.get("X-Good") == "fine"
    assert "X-Bad" not in result.headers
    await executor.aclose()


@pytest.mark.asyncio
async def test_connect_error_raises_transport_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    executor = make_executor(handler)
    with pytest.raises(TransportFailure) as exc_info:
        await executor.execute(
            RequestTemplate("t", HttpMethod.GET, "https://unreachable.invalid/")
        )
    assert "connection refused" in exc_info.value.details
    await executor.aclose()


@pytest.mark.asyncio
async def test_redirect_loop_is_a_transport_failure():
    def handler(request):
        return httpx.Response(302, headers={"Location": str(request.url)})

    executor = make_executor(handler, max_redirects=3)
    with pytest.raises(TransportFailure):
        await executor.execute(
            RequestTemplate("loop", HttpMethod.GET, "https://example.com/loop")
        )
    await executor.aclose()


@pytest.mark.asyncio
async def test_error_handling_converts_failure_to_status_zero():
    calls = []
    manager = PluginManager()
    manager.register(RecordingPlugin(calls))

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    executor = make_executor(handler, plugin_manager=manager)
    result = await executor.execute_with_error_handling(
        RequestTemplate("t", HttpMethod.GET, "https://unreachable.invalid/")
    )

    assert result.status == 0
    assert result.is_transport_failure
    assert result.body['error'] is True
    assert "connection refused" in result.body['message']
    assert 'details' in result.body
    assert result.request_id == "t"
    assert [c[1] for c in calls] == ["before", "error"]
    await executor.aclose()


@pytest.mark.asyncio
async def test_plugins_run_in_order_and_failures_are_swallowed():
    calls = []
    manager = PluginManager()
    manager.register(RecordingPlugin(calls, "first"))
    manager.register(BrokenPlugin())
    manager.register(RecordingPlugin(calls, "second"))

    executor = make_executor(
        lambda request: httpx.Response(200, json={}), plugin_manager=manager
    )
    result = await executor.execute(
        RequestTemplate("t", HttpMethod.GET, "https://example.com/")
    )

    assert result.status == 200
    assert calls == [
        ("first", "before", "https://example.com/"),
        ("second", "before", "https://example.com/"),
        ("first", "after", 200),
        ("second", "after", 200),
    ]
    await executor.aclose()


@pytest.mark.asyncio
async def test_clone_shares_client_and_plugins():
    executor = make_executor(lambda request: httpx.Response(204))
    clone = executor.clone()

    assert clone.client is executor.client
    assert clone.plugin_manager is executor.plugin_manager
    result = await clone.execute(
        RequestTemplate("t", HttpMethod.DELETE, "https://example.com/1")
    )
    assert result.status == 204
    assert result.body == ""
    await executor.aclose()


class TamperingPlugin(Plugin):
    name = "tamperer"

    async def before_request(self, request):
        request.headers["X-Injected"] = "yes"

    async def after_response(self, response):
        response.body["tampered"] = True
        response.headers["X-Tampered"] = "yes"


@pytest.mark.asyncio
async def test_plugins_cannot_change_request_or_result():
    seen_headers = []

    def handler(request):
        seen_headers.append(dict(request.headers))
        return httpx.Response(200, json={"id": 1})

    manager = PluginManager()
    manager.register(TamperingPlugin())
    executor = make_executor(handler, plugin_manager=manager)
    template = RequestTemplate(
        "t", HttpMethod.GET, "https://example.com/", headers={"Accept": "application/json"}
    )

    result = await executor.execute(template)

    assert "x-injected" not in seen_headers[0]
    assert template.headers == {"Accept": "application/json"}
    assert result.body == {"id": 1}
    assert "X-Tampered" not in result.headers
    await executor.aclose()


@pytest.mark.asyncio
async def test_read_timeout_raises_transport_failure():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    executor = make_executor(handler)
    with pytest.raises(TransportFailure) as exc_info:
        await executor.execute(RequestTemplate("slow", HttpMethod.GET, "https://example.com/slow"))
    assert "ReadTimeout" in exc_info.value.details

    result = await executor.execute_with_error_handling(
        RequestTemplate("slow", HttpMethod.GET, "https://example.com/slow")
    )
    assert result.status == 0
    assert result.is_transport_failure
    assert "timed out" in result.body['message']
    await executor.aclose()


@pytest.mark.asyncio
async def test_timeout_is_applied_to_client():
    executor = RequestExecutor(timeout=5)
    assert executor.client.timeout.connect == 5
    assert executor.client.timeout.read == 5
    await executor.aclose()
