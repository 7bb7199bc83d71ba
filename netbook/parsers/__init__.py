"""Parsers for collection and variable files."""

from .collection_parser import (
    parse_collection,
    dump_collection,
    parse_template,
    dump_template,
    is_yaml_path,
)
from .env_file_parser import parse_env_text, load_env_file, env_file_for

__all__ = [
    "parse_collection",
    "dump_collection",
    "parse_template",
    "dump_template",
    "is_yaml_path",
    "parse_env_text",
    "load_env_file",
    "env_file_for",
]
