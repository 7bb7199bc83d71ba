"""Plugin contract for request lifecycle observers."""

from ..models import ExecutionResult, RequestTemplate


class Plugin:
    """Observer notified around every execution.

    Subclasses override only the hooks they need; the defaults do nothing.
    Hooks observe; they cannot change the request, the result or the error,
    and they cannot stop an execution.
    """

    name = "plugin"

    def get_name(self) -> str:
        return self.name

    async def before_request(self, request: RequestTemplate) -> None:
        """Called with the interpolated template before it is sent."""

    async def after_response(self, response: ExecutionResult) -> None:
        """Called with the result of a completed exchange."""

    async def on_error(self, error: Exception) -> None:
        """Called when the exchange failed at the transport level."""
