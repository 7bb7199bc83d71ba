"""Persistence for session variables."""

import json
from pathlib import Path
from typing import Dict

from ..core.errors import PersistenceFailure
from ..core.interpolation import VariableInterpolator
from ..utils.logger import get_logger

logger = get_logger(__name__)


class VariableStore:
    """Saved in-memory variables, kept as a flat JSON object."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceFailure(
                f"Failed to load variables from {self.path}: {e}"
            ) from e
        if not isinstance(data, dict):
            raise PersistenceFailure(f"Variables file {self.path} is not an object")
        return {str(k): str(v) for k, v in data.items()}

    def save(self, variables: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(variables, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise PersistenceFailure(
                f"Failed to save variables to {self.path}: {e}"
            ) from e
        logger.info(f"Saved {len(variables)} variables to {self.path}")


def load_interpolator_with_context(
    collection_path: Path, store: VariableStore
) -> VariableInterpolator:
    """Compose the interpolator for a collection.

    The collection's variable file fills the file tier; saved session
    variables fill the in-memory tier.
    """
    interpolator = VariableInterpolator()
    interpolator.load_env_file(collection_path)
    for key, value in store.load().items():
        interpolator.set_variable(key, value)
    return interpolator
