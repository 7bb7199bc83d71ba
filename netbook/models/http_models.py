"""HTTP models for stored request templates and execution results."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Any, Optional, Union
from uuid import uuid4


class HttpMethod(str, Enum):
    """HTTP methods a request template may use."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> "HttpMethod":
        """Parse a method name case-insensitively."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid HTTP method: {value!r}")
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValueError(f"Invalid HTTP method: {value!r}") from None


@dataclass(frozen=True)
class TextBody:
    """Raw text request body, sent verbatim."""

    text: str

    def to_text(self) -> str:
        return self.text

    def to_value(self) -> Any:
        return self.text


@dataclass(frozen=True)
class JsonBody:
    """Structured JSON request body."""

    value: Any

    def to_text(self) -> str:
        return json.dumps(self.value, separators=(',', ':'), ensure_ascii=False)

    def to_value(self) -> Any:
        return self.value


RequestBody = Union[TextBody, JsonBody]


def body_from_value(value: Any) -> Optional[RequestBody]:
    """Build a request body from its stored form.

    A stored string is a text body; any other JSON value (object, array,
    number, bool) is a structured body. A missing body stays missing.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return TextBody(value)
    return JsonBody(value)


def _string_map(value: Any, field_name: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"'{field_name}' must be a mapping")
    return {str(k): str(v) for k, v in value.items()}


@dataclass(frozen=True)
class RequestTemplate:
    """Stored HTTP request, possibly containing {{variable}} placeholders."""

    name: str
    method: HttpMethod
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    body: Optional[RequestBody] = None
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RequestTemplate":
        """Create a template from its collection representation."""
        if not isinstance(data, dict):
            raise ValueError("Request entry must be a mapping")
        for key in ('name', 'method', 'url'):
            if key not in data:
                raise ValueError(f"Request entry is missing '{key}'")
        if not isinstance(data['name'], str) or not isinstance(
            data['url'], str
        ):
            raise ValueError("'name' and 'url' must be strings")

        notes = data.get('notes')
        return cls(
            name=data['name'],
            method=HttpMethod.parse(data['method']),
            url=data['url'],
            headers=_string_map(data.get('headers'), 'headers'),
            query=_string_map(data.get('query'), 'query'),
            body=body_from_value(data.get('body')),
            notes=str(notes) if notes is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the collection representation."""
        return {
            'name': self.name,
            'method': self.method.value,
            'url': self.url,
            'headers': dict(self.headers),
            'query': dict(self.query),
            'body': self.body.to_value() if self.body is not None else None,
            'notes': self.notes,
        }


@dataclass(frozen=True)
class ResponseTiming:
    """Execution timing. Phases that are not measured stay None."""

    total_ms: int = 0
    dns_lookup_ms: Optional[int] = None
    tcp_connect_ms: Optional[int] = None
    tls_handshake_ms: Optional[int] = None
    request_ms: Optional[int] = None

    def to_dict(self) -> Dict[str, Optional[int]]:
        return {
            'total_ms': self.total_ms,
            'dns_lookup_ms': self.dns_lookup_ms,
            'tcp_connect_ms': self.tcp_connect_ms,
            'tls_handshake_ms': self.tls_handshake_ms,
            'request_ms': self.request_ms,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResponseTiming":
        return cls(
            total_ms=int(data.get('total_ms', 0)),
            dns_lookup_ms=data.get('dns_lookup_ms'),
            tcp_connect_ms=data.get('tcp_connect_ms'),
            tls_handshake_ms=data.get('tls_handshake_ms'),
            request_ms=data.get('request_ms'),
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of one execution. Status 0 marks a transport failure."""

    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None
    timing: ResponseTiming = field(default_factory=ResponseTiming)
    request_id: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=_utcnow)

    @property
    def is_transport_failure(self) -> bool:
        return self.status == 0

    @classmethod
    def transport_failure(
        cls, message: str, details: str, request_id: Optional[str] = None
    ) -> "ExecutionResult":
        """Create the synthetic result reported for a failed exchange."""
        return cls(
            status=0,
            body={'error': True, 'message': message, 'details': details},
            request_id=request_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'request_id': self.request_id,
            'status': self.status,
            'headers': dict(self.headers),
            'body': self.body,
            'timing': self.timing.to_dict(),
            'timestamp': self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExecutionResult":
        return cls(
            id=str(data['id']),
            request_id=data.get('request_id'),
            status=int(data['status']),
            headers=dict(data.get('headers') or {}),
            body=data.get('body'),
            timing=ResponseTiming.from_dict(data.get('timing') or {}),
            timestamp=datetime.fromisoformat(data['timestamp']),
        )
