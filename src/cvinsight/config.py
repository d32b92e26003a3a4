"""Runtime settings for the resume builder and the backend API client.

Values come from environment variables; a ``.env`` file in the working
directory is loaded first so local development does not need exported
variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

__all__ = ["Settings", "get_settings"]

DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_API_TIMEOUT = 60.0
DEFAULT_PREVIEW_DEBOUNCE_MS = 1000
DEFAULT_SESSION_TTL = 3600.0
DEFAULT_MAX_SESSIONS = 1000


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values."""

    api_url: str = DEFAULT_API_URL
    api_timeout: float | None = DEFAULT_API_TIMEOUT
    api_token: str | None = None
    latex_compiler: str | None = None
    preview_debounce_ms: int = DEFAULT_PREVIEW_DEBOUNCE_MS
    picture_dir: str | None = None
    session_ttl: float | None = DEFAULT_SESSION_TTL
    max_sessions: int = DEFAULT_MAX_SESSIONS

    @property
    def preview_debounce(self) -> float:
        """Debounce interval in seconds."""
        return self.preview_debounce_ms / 1000


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return default


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", name, raw)
        return default


def get_settings() -> Settings:
    """Build :class:`Settings` from the current environment.

    ``CVINSIGHT_API_TIMEOUT=0`` disables the request timeout, which the
    analysis and comparison endpoints need since they wait on an LLM.
    ``CVINSIGHT_SESSION_TTL=0`` keeps idle builder sessions forever.
    Pictures are only embedded from ``CVINSIGHT_PICTURE_DIR``; without it
    no picture is included.
    """
    timeout = _read_float("CVINSIGHT_API_TIMEOUT", DEFAULT_API_TIMEOUT)
    debounce = _read_int("CVINSIGHT_PREVIEW_DEBOUNCE_MS", DEFAULT_PREVIEW_DEBOUNCE_MS)
    ttl = _read_float("CVINSIGHT_SESSION_TTL", DEFAULT_SESSION_TTL)
    max_sessions = _read_int("CVINSIGHT_MAX_SESSIONS", DEFAULT_MAX_SESSIONS)

    return Settings(
        api_url=os.getenv("CVINSIGHT_API_URL") or DEFAULT_API_URL,
        api_timeout=timeout if timeout > 0 else None,
        api_token=os.getenv("CVINSIGHT_API_TOKEN") or None,
        latex_compiler=os.getenv("CVINSIGHT_LATEX_COMPILER") or None,
        preview_debounce_ms=max(debounce, 0),
        picture_dir=os.getenv("CVINSIGHT_PICTURE_DIR") or None,
        session_ttl=ttl if ttl > 0 else None,
        max_sessions=max(max_sessions, 1),
    )
