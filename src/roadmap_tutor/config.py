"""Runtime settings loaded from the environment (and an optional .env file)."""
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DB_PATH = str(Path.home() / ".roadmap_tutor" / "tutor.db")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _resolve_db_path(raw_path: str) -> str:
    candidate = (raw_path or "").strip() or DEFAULT_DB_PATH
    return os.path.abspath(os.path.expanduser(candidate))


@dataclass(frozen=True)
class Settings:
    db_path: str = field(default_factory=lambda: _resolve_db_path(os.getenv("TUTOR_DB_PATH", "")))
    user_id: str = field(default_factory=lambda: os.getenv("TUTOR_USER_ID", "").strip() or "local")
    advance_delay_ms: int = field(default_factory=lambda: max(0, _int_env("TUTOR_ADVANCE_DELAY_MS", 500)))
    log_level: str = field(default_factory=lambda: os.getenv("TUTOR_LOG_LEVEL", "WARNING").strip().upper() or "WARNING")

    @property
    def advance_delay(self) -> float:
        """Pacing delay in seconds."""
        return self.advance_delay_ms / 1000


def load_settings() -> Settings:
    return Settings()
