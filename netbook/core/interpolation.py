"""Variable interpolation for request templates."""

import json
import os
import re
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Optional

from ..models import JsonBody, RequestTemplate, TextBody
from ..parsers.env_file_parser import env_file_for, load_env_file

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


def render_json_leaf(value: Any) -> str:
    """Render an extracted JSON value as text."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False)


def extract_from_response_path(body: Any, path: str) -> Optional[str]:
    """Resolve a dotted path such as ``data.items.0.id`` against a JSON value.

    Numeric segments index into arrays; every other segment is an object
    key. Returns None when a segment is missing or the shape does not fit.
    """
    current = body
    for part in path.split('.'):
        if isinstance(current, list):
            if not part.isdigit():
                return None
            index = int(part)
            if index >= len(current):
                return None
            current = current[index]
        elif isinstance(current, dict):
            if part not in current:
                return None
            current = current[part]
        else:
            return None
    return render_json_leaf(current)


class VariableInterpolator:
    """Resolve {{name}} placeholders against layered variables.

    Lookup order: in-memory overrides, then the collection's variable file,
    then the process environment. Unresolved placeholders are left verbatim.
    """

    def __init__(
        self,
        in_memory: Optional[Dict[str, str]] = None,
        env_vars: Optional[Dict[str, str]] = None,
    ):
        self.in_memory: Dict[str, str] = dict(in_memory or {})
        self.env_vars: Dict[str, str] = dict(env_vars or {})

    def load_env_file(self, collection_path: Path) -> None:
        """Load the variable file next to the collection, if there is one."""
        self.env_vars.update(load_env_file(env_file_for(collection_path)))

    def set_variable(self, key: str, value: str) -> None:
        self.in_memory[key] = value

    def resolve(self, name: str) -> Optional[str]:
        if name in self.in_memory:
            return self.in_memory[name]
        if name in self.env_vars:
            return self.env_vars[name]
        return os.environ.get(name)

    def interpolate(self, text: str) -> str:
        def substitute(match: re.Match) -> str:
            value = self.resolve(match.group(1))
            return match.group(0) if value is None else value

        return PLACEHOLDER_PATTERN.sub(substitute, text)

    def interpolate_request(self, template: RequestTemplate) -> RequestTemplate:
        """Interpolate URL, header values, query values and body.

        A JSON body is interpolated in its serialized form and parsed back;
        when the result is no longer valid JSON it is kept as a text body.
        """
        body = template.body
        if isinstance(body, TextBody):
            body = TextBody(self.interpolate(body.text))
        elif isinstance(body, JsonBody):
            text = self.interpolate(body.to_text())
            try:
                body = JsonBody(json.loads(text))
            except ValueError:
                body = TextBody(text)

        return replace(
            template,
            url=self.interpolate(template.url),
            headers={k: self.interpolate(v) for k, v in template.headers.items()},
            query={k: self.interpolate(v) for k, v in template.query.items()},
            body=body,
        )

    def extract_from_response_path(self, body: Any, path: str) -> Optional[str]:
        return extract_from_response_path(body, path)

    def all_variables(self) -> Dict[str, str]:
        """File variables marked "(env)", overridden by in-memory values."""
        merged = {k: f"(env) {v}" for k, v in self.env_vars.items()}
        merged.update(self.in_memory)
        return merged

    def snapshot(self) -> "VariableInterpolator":
        """Independent copy for a background execution."""
        return VariableInterpolator(self.in_memory, self.env_vars)
