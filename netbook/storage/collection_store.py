"""Collection file loading and saving."""

from pathlib import Path
from typing import List, Optional

from ..core.errors import CollectionNotFound, PersistenceFailure
from ..models import RequestTemplate
from ..parsers.collection_parser import (
    dump_collection,
    is_yaml_path,
    parse_collection,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)


def load_collection(path: Path) -> List[RequestTemplate]:
    """Load a collection; the format follows the file extension.

    Raises:
        CollectionNotFound: the file does not exist
        CollectionParseError: the file could not be parsed
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        raise CollectionNotFound(f"Collection file not found: {path}") from None
    except OSError as e:
        raise CollectionNotFound(
            f"Failed to read collection file {path}: {e}"
        ) from e

    collection = parse_collection(content, use_yaml=is_yaml_path(path))
    logger.info(f"Loaded {len(collection)} requests from {path}")
    return collection


def save_collection(collection: List[RequestTemplate], path: Path) -> None:
    """Write a collection back to disk.

    Raises:
        PersistenceFailure: the file could not be written
    """
    path = Path(path)
    content = dump_collection(collection, use_yaml=is_yaml_path(path))
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except OSError as e:
        raise PersistenceFailure(
            f"Failed to write collection file {path}: {e}"
        ) from e
    logger.info(f"Saved {len(collection)} requests to {path}")


def find_request(
    collection: List[RequestTemplate], name: str
) -> Optional[RequestTemplate]:
    """Return the template with the given name, or None."""
    for template in collection:
        if template.name == name:
            return template
    return None
