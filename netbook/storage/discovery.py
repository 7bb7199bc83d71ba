"""Locate or create the collection for the working directory."""

import json
from pathlib import Path
from typing import Optional

from ..utils.logger import get_logger

logger = get_logger(__name__)

NETBOOK_DIR = ".netbook"

EXAMPLE_COLLECTION = [
    {
        "name": "Example GET Request",
        "method": "GET",
        "url": "https://jsonplaceholder.typicode.com/users/1",
        "headers": {"Accept": "application/json"},
        "notes": "Example request - edit this or delete it and add your own!",
    },
    {
        "name": "Example POST Request",
        "method": "POST",
        "url": "https://jsonplaceholder.typicode.com/posts",
        "headers": {"Content-Type": "application/json"},
        "body": {"title": "My Title", "body": "My content", "userId": 1},
        "notes": "Example POST with JSON body",
    },
]


def discover_collection(cwd: Optional[Path] = None) -> Path:
    """Find the collection for a directory.

    Prefers .netbook/collection.json, then netbook.json. When neither exists
    the .netbook/collection.json path is returned for a new collection.
    """
    cwd = Path(cwd) if cwd is not None else Path.cwd()

    project_collection = cwd / NETBOOK_DIR / "collection.json"
    if project_collection.exists():
        return project_collection

    simple_collection = cwd / "netbook.json"
    if simple_collection.exists():
        return simple_collection

    return project_collection


def get_netbook_dir(collection_path: Path) -> Path:
    """The .netbook directory that belongs to a collection."""
    parent = Path(collection_path).parent
    if parent.name == NETBOOK_DIR:
        return parent
    return parent / NETBOOK_DIR


def create_initial_collection(path: Path) -> None:
    """Write a new collection containing two example requests."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(EXAMPLE_COLLECTION, f, indent=2)
    logger.info(f"Created example collection at {path}")
