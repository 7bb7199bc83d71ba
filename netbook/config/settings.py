"""Application settings and configuration."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file from the working directory if it exists
load_dotenv(Path.cwd() / '.env')


def _default_data_dir() -> Path:
    return Path.home() / ".local" / "share" / "netbook"


@dataclass
class Settings:
    """Application configuration settings."""

    # HTTP client settings
    request_timeout: float = 30.0
    max_redirects: int = 10

    # Persistence settings
    data_dir: Optional[Path] = None
    history_max_entries: int = 100

    # External editor
    editor: str = "vi"

    # Application settings
    debug: bool = False
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    # Built-in request logger plugin (disabled when unset)
    request_log_file: Optional[Path] = None

    def __post_init__(self):
        if self.data_dir is None:
            self.data_dir = _default_data_dir()
        self.data_dir = Path(self.data_dir)
        if self.log_file is None:
            self.log_file = self.data_dir / "netbook.log"

    @property
    def history_path(self) -> Path:
        """Location of the persisted response history."""
        return self.data_dir / "history.json"

    @property
    def variables_path(self) -> Path:
        """Location of the persisted session variables."""
        return self.data_dir / "variables.json"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        data_dir = os.getenv("NETBOOK_DATA_DIR")
        log_file = os.getenv("NETBOOK_LOG_FILE")
        request_log = os.getenv("NETBOOK_REQUEST_LOG")
        return cls(
            request_timeout=float(os.getenv("NETBOOK_TIMEOUT", "30")),
            max_redirects=int(os.getenv("NETBOOK_MAX_REDIRECTS", "10")),
            data_dir=Path(data_dir).expanduser() if data_dir else None,
            history_max_entries=int(os.getenv("NETBOOK_HISTORY_MAX", "100")),
            editor=os.getenv("EDITOR") or os.getenv("VISUAL") or "vi",
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=Path(log_file).expanduser() if log_file else None,
            request_log_file=(
                Path(request_log).expanduser() if request_log else None
            ),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
