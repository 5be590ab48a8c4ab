"""
Runtime configuration for adaptlearn.

Values come from the environment, after loading an optional .env file at
the project root:

  ADAPTLEARN_API_BASE_URL   base URL of the hint service (no trailing /api)
  ADAPTLEARN_AUTH_TOKEN     bearer token for the hint service
  ADAPTLEARN_DATA_DIR       directory for storage.db (default ~/.adaptlearn)
  ADAPTLEARN_HINT_TIMEOUT   hint request timeout in seconds
  ADAPTLEARN_LOG_LEVEL      logging level name (default INFO)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from adaptlearn.classroom.hints import DEFAULT_TIMEOUT
from adaptlearn.classroom.storage import DEFAULT_STORAGE_DIR


logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    api_base_url: Optional[str] = None
    auth_token: Optional[str] = None
    data_dir: Path = DEFAULT_STORAGE_DIR
    hint_timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    @property
    def storage_path(self) -> Path:
        return self.data_dir / "storage.db"


def settings_from_env(env: Mapping[str, str]) -> Settings:
    """Build settings from an environment mapping, ignoring bad values."""
    timeout = DEFAULT_TIMEOUT
    raw_timeout = env.get("ADAPTLEARN_HINT_TIMEOUT")
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            logger.warning(f"Invalid ADAPTLEARN_HINT_TIMEOUT {raw_timeout!r}, using {DEFAULT_TIMEOUT}")

    data_dir = env.get("ADAPTLEARN_DATA_DIR")

    return Settings(
        api_base_url=env.get("ADAPTLEARN_API_BASE_URL") or None,
        auth_token=env.get("ADAPTLEARN_AUTH_TOKEN") or None,
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_STORAGE_DIR,
        hint_timeout=timeout,
        log_level=(env.get("ADAPTLEARN_LOG_LEVEL") or "INFO").upper(),
    )


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load .env (if present) into os.environ, then read settings."""
    load_dotenv(env_file or PROJECT_ROOT / ".env")
    return settings_from_env(os.environ)


def setup_logging(level: str = "INFO"):
    """Configure root logging once for the app."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
