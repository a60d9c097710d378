"""Runtime configuration helpers for environment-driven settings."""
from __future__ import annotations

import os
from typing import Dict, Final

from models import EASY, HARD, MEDIUM, MODE_AI, MODE_PVP, normalize_difficulty


def env_flag(name: str, *, default: bool = False) -> bool:
    """Return a boolean flag from environment variables.

    Common truthy values (``1``, ``true``, ``yes``, ``on``) map to ``True``
    and common falsy ones (``0``, ``false``, ``no``, ``off``) to ``False``.
    Unset or unrecognised values yield ``default``.
    """
    value = os.getenv(name)
    if value is None:
        return default

    normalised = value.strip().lower()
    if normalised in {"1", "true", "yes", "on"}:
        return True
    if normalised in {"0", "false", "no", "off"}:
        return False
    return default


def env_seconds(name: str, default: float) -> float:
    """Return a non-negative number of seconds, or ``default`` if unparsable."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return max(0.0, value)


def normalize_webhook_base(raw_url: str) -> str:
    """Strip trailing slashes and a trailing ``/webhook`` from ``raw_url``.

    The webhook endpoint is always served at ``<base>/webhook`` so the
    configured ``WEBHOOK_URL`` may be given with or without that suffix.
    """
    base = raw_url.rstrip("/")
    if base.endswith("/webhook"):
        base = base[: -len("/webhook")].rstrip("/")
    return base


LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()

DEFAULT_MODE: Final[str] = (
    MODE_PVP if os.getenv("DEFAULT_MODE", MODE_AI).strip().lower() == MODE_PVP else MODE_AI
)
DEFAULT_DIFFICULTY: Final[str] = normalize_difficulty(os.getenv("DEFAULT_DIFFICULTY", MEDIUM))

# "thinking" pause before the computer fires, per difficulty
AI_DELAYS: Final[Dict[str, float]] = {
    EASY: env_seconds("AI_DELAY_EASY", 0.6),
    MEDIUM: env_seconds("AI_DELAY_MEDIUM", 0.9),
    HARD: env_seconds("AI_DELAY_HARD", 1.2),
}

SHOW_OWN_BOARD: Final[bool] = env_flag("SHOW_OWN_BOARD", default=True)


def ai_delay(difficulty: str) -> float:
    return AI_DELAYS[normalize_difficulty(difficulty)]


__all__ = [
    "AI_DELAYS",
    "DEFAULT_DIFFICULTY",
    "DEFAULT_MODE",
    "LOG_LEVEL",
    "SHOW_OWN_BOARD",
    "ai_delay",
    "env_flag",
    "env_seconds",
    "normalize_webhook_base",
]
