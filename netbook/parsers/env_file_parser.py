"""Parser for ``key=value`` variable files."""

from pathlib import Path
from typing import Dict

from ..utils.logger import get_logger

logger = get_logger(__name__)

ENV_FILE_NAME = ".netbook.env"


def parse_env_text(content: str) -> Dict[str, str]:
    """Parse variable file content.

    Blank lines and lines starting with '#' are skipped. Each remaining line
    is split at its first '='; both sides are trimmed. Lines without '=' are
    ignored.
    """
    variables = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if '=' not in line:
            logger.debug(f"Skipping variable line without '=': {line!r}")
            continue
        key, value = line.split('=', 1)
        variables[key.strip()] = value.strip()
    return variables


def env_file_for(collection_path: Path) -> Path:
    """Variable file location for a collection (same directory)."""
    return Path(collection_path).parent / ENV_FILE_NAME


def load_env_file(path: Path) -> Dict[str, str]:
    """Read a variable file.

    A missing or unreadable file yields no variables; the session starts
    without them.
    """
    path = Path(path)
    if not path.exists():
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            variables = parse_env_text(f.read())
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Ignoring variable file {path}: {e}")
        return {}
    logger.debug(f"Loaded {len(variables)} variables from {path}")
    return variables
