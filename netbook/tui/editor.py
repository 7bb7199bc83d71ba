"""Edit a request template in the user's external editor."""

import os
import re
import shlex
import subprocess
import tempfile
from pathlib import Path

from ..core.errors import EditDecodeFailure, EditorFailure
from ..models import RequestTemplate
from ..parsers.collection_parser import dump_template, parse_template
from ..utils.logger import get_logger

logger = get_logger(__name__)


class RequestEditor:
    """Run an editor program on a temporary JSON copy of a template."""

    def __init__(self, command: str = "vi"):
        self.command = command

    def edit(self, template: RequestTemplate) -> RequestTemplate:
        """Open the template in the editor and parse the saved result.

        Raises:
            EditorFailure: the editor could not be started or exited non-zero
            EditDecodeFailure: the saved content is not a valid template
        """
        safe_name = re.sub(r"[^\w.-]", "_", template.name)
        fd, temp_path = tempfile.mkstemp(prefix=f"netbook_{safe_name}_", suffix=".json")
        path = Path(temp_path)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(dump_template(template))

            argv = shlex.split(self.command) + [str(path)]
            logger.info(f"Launching editor: {argv[0]}")
            try:
                completed = subprocess.run(argv)
            except OSError as e:
                raise EditorFailure(f"Could not run editor '{self.command}': {e}") from e
            if completed.returncode != 0:
                raise EditorFailure(
                    f"Editor exited with status {completed.returncode}"
                )

            try:
                with open(path, 'r', encoding='utf-8') as f:
                    content = f.read()
            except OSError as e:
                raise EditorFailure(f"Could not read edited file: {e}") from e
            except UnicodeDecodeError as e:
                raise EditDecodeFailure(f"Edited file is not valid UTF-8: {e}") from e

            try:
                return parse_template(content)
            except (ValueError, TypeError) as e:
                raise EditDecodeFailure(f"Invalid JSON in edited file: {e}") from e
        finally:
            path.unlink(missing_ok=True)
