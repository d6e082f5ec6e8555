"""Runtime settings resolved from ``WAVE_LIFT_*`` environment variables."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "WAVE_LIFT_"

# Default data directory
DEFAULT_DATA_DIR = Path(__file__).parent.parent.parent / "data"
DEFAULT_DEBOUNCE_MS = 500
DEFAULT_CONFIRM_TTL_SECONDS = 300
DEFAULT_LOG_LEVEL = "WARNING"


def get_env(name: str, default: str | None = None) -> str | None:
    """Read a ``WAVE_LIFT_``-prefixed environment variable."""
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _int_env(name: str, default: int) -> int:
    raw = get_env(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Attributes:
        data_dir: Directory holding the SQLite database
        debounce_ms: Coalescing window for baseline weight writes
        confirm_ttl_seconds: Lifetime of delete confirmation tokens
        log_level: Root logging level name
    """

    data_dir: Path = DEFAULT_DATA_DIR
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    confirm_ttl_seconds: int = DEFAULT_CONFIRM_TTL_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment, falling back to defaults."""
        data_dir = get_env("DATA_DIR")
        log_level = (get_env("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            log_level = DEFAULT_LOG_LEVEL

        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
            debounce_ms=_int_env("DEBOUNCE_MS", DEFAULT_DEBOUNCE_MS),
            confirm_ttl_seconds=_int_env("CONFIRM_TTL_SECONDS", DEFAULT_CONFIRM_TTL_SECONDS),
            log_level=log_level,
        )


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the CLI and server."""
    logging.basicConfig(
        level=level or Settings.from_env().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
