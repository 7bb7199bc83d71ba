"""HTTP execution of request templates."""

import copy
import json
import logging
import time
from typing import Any, Dict, Optional

import httpx

from ..models import (
    ExecutionResult,
    JsonBody,
    RequestTemplate,
    ResponseTiming,
    TextBody,
)
from ..plugins.manager import PluginManager
from .errors import TransportFailure
from .interpolation import VariableInterpolator

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
MAX_REDIRECTS = 10


def decode_headers(response: httpx.Response) -> Dict[str, str]:
    """Decode response headers, dropping values that are not valid text."""
    headers = {}
    for raw_key, raw_value in response.headers.raw:
        try:
            key = raw_key.decode('ascii')
            value = raw_value.decode('utf-8')
        except UnicodeDecodeError:
            logger.debug(f"Dropping undecodable response header {raw_key!r}")
            continue
        headers[key] = value
    return headers


def parse_body(text: str) -> Any:
    """Parse a response body as JSON, falling back to the plain string."""
    try:
        return json.loads(text)
    except ValueError:
        return text


class RequestExecutor:
    """Send request templates over HTTP and normalize the outcome.

    The underlying client is created once and shared by clones; it is safe
    for concurrent use and never reconfigured after construction.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        plugin_manager: Optional[PluginManager] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        max_redirects: int = MAX_REDIRECTS,
    ):
        """Initialize executor.

        Args:
            timeout: Connect/read timeout in seconds for every call
            plugin_manager: Hook bus notified around each execution
            transport: Optional httpx transport (tests inject a mock here)
            max_redirects: Redirects followed before the call fails
        """
        self.timeout = timeout
        self.plugin_manager = plugin_manager or PluginManager()
        self.client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            max_redirects=max_redirects,
            transport=transport,
        )

    def clone(self) -> "RequestExecutor":
        """Shallow copy sharing the HTTP client and the plugin bus."""
        return copy.copy(self)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def execute(
        self,
        template: RequestTemplate,
        interpolator: Optional[VariableInterpolator] = None,
    ) -> ExecutionResult:
        """Interpolate and send a template.

        Raises:
            TransportFailure: the exchange failed before a response arrived
        """
        interpolator = interpolator or VariableInterpolator()
        request = interpolator.interpolate_request(template)

        await self.plugin_manager.before_request(request)

        kwargs: Dict[str, Any] = {'headers': request.headers}
        if request.query:
            kwargs['params'] = request.query
        if isinstance(request.body, JsonBody):
            kwargs['json'] = request.body.value
        elif isinstance(request.body, TextBody):
            kwargs['content'] = request.body.text

        logger.info(f"Sending {request.method} {request.url}")
        start = time.perf_counter()
        try:
            http_response = await self.client.request(
                request.method.value, request.url, **kwargs
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportFailure(
                f"Failed to send request to {request.url}: {e}",
                details=repr(e),
            ) from e
        elapsed = time.perf_counter() - start

        result = ExecutionResult(
            status=http_response.status_code,
            headers=decode_headers(http_response),
            body=parse_body(http_response.text),
            timing=ResponseTiming(total_ms=int(elapsed * 1000)),
            request_id=template.name,
        )
        logger.info(
            f"{request.method} {request.url} -> {result.status} "
            f"({result.timing.total_ms}ms)"
        )

        await self.plugin_manager.after_response(result)
        return result

    async def execute_with_error_handling(
        self,
        template: RequestTemplate,
        interpolator: Optional[VariableInterpolator] = None,
    ) -> ExecutionResult:
        """Like execute, but a transport failure becomes a status-0 result."""
        try:
            return await self.execute(template, interpolator)
        except TransportFailure as e:
            logger.warning(f"Request '{template.name}' failed: {e}")
            await self.plugin_manager.on_error(e)
            return ExecutionResult.transport_failure(
                e.message, e.details, request_id=template.name
            )
