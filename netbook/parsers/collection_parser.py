"""Parse and serialize request collections (JSON or YAML)."""

import json
from pathlib import Path
from typing import Any, Dict, List

import yaml

from ..core.errors import CollectionParseError
from ..models import RequestTemplate
from ..utils.logger import get_logger

logger = get_logger(__name__)

YAML_SUFFIXES = ('.yaml', '.yml')


def is_yaml_path(path: Path) -> bool:
    """Collections use YAML for .yaml/.yml files and JSON otherwise."""
    return Path(path).suffix.lower() in YAML_SUFFIXES


def parse_collection(content: str, use_yaml: bool = False) -> List[RequestTemplate]:
    """Parse collection text into an ordered list of templates.

    Raises:
        CollectionParseError: content is malformed, an entry is invalid, or
            two entries share a name
    """
    try:
        data = yaml.safe_load(content) if use_yaml else json.loads(content)
    except (yaml.YAMLError, ValueError) as e:
        raise CollectionParseError(f"Malformed collection: {e}") from e

    if data is None and use_yaml:
        data = []
    if not isinstance(data, list):
        raise CollectionParseError("Collection must be a list of requests")

    collection = []
    seen = set()
    for idx, entry in enumerate(data):
        try:
            template = RequestTemplate.from_dict(entry)
        except (ValueError, TypeError) as e:
            raise CollectionParseError(f"Invalid request #{idx + 1}: {e}") from e
        if template.name in seen:
            raise CollectionParseError(
                f"Duplicate request name: '{template.name}'"
            )
        seen.add(template.name)
        collection.append(template)

    logger.debug(f"Parsed {len(collection)} requests")
    return collection


def _entry(template: RequestTemplate) -> Dict[str, Any]:
    # Optional fields are written only when set
    data = template.to_dict()
    for key in ('body', 'notes'):
        if data[key] is None:
            del data[key]
    return data


def dump_collection(collection: List[RequestTemplate], use_yaml: bool = False) -> str:
    """Serialize templates to collection text."""
    entries = [_entry(template) for template in collection]
    if use_yaml:
        return yaml.safe_dump(entries, sort_keys=False, allow_unicode=True)
    return json.dumps(entries, indent=2, ensure_ascii=False)


def parse_template(content: str) -> RequestTemplate:
    """Parse a single JSON-serialized template (the editor format).

    Raises:
        ValueError: content is not valid JSON or not a valid template
    """
    return RequestTemplate.from_dict(json.loads(content))


def dump_template(template: RequestTemplate) -> str:
    return json.dumps(template.to_dict(), indent=2, ensure_ascii=False)
