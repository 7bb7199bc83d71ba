"""Built-in plugin that appends request activity to a log file."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from ..models import ExecutionResult, RequestTemplate
from .base import Plugin

logger = logging.getLogger(__name__)


class RequestLoggerPlugin(Plugin):
    """Write one timestamped line per lifecycle event."""

    name = "Request Logger"

    def __init__(self, log_file: Path = Path("netbook_requests.log")):
        self.log_file = Path(log_file)

    def _write_log(self, message: str) -> None:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        try:
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(f"[{timestamp}] {message}\n")
        except OSError as e:
            logger.debug(f"Could not write request log {self.log_file}: {e}")

    async def before_request(self, request: RequestTemplate) -> None:
        self._write_log(
            f"BEFORE REQUEST: {request.method} {request.name} {request.url}"
        )

    async def after_response(self, response: ExecutionResult) -> None:
        size = len(json.dumps(response.body, separators=(',', ':')))
        self._write_log(
            f"AFTER RESPONSE: Status {response.status} - {size} bytes - "
            f"{response.timing.total_ms}ms"
        )

    async def on_error(self, error: Exception) -> None:
        self._write_log(f"ERROR: {error}")
