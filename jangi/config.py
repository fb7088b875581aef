"""Runtime settings, read from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .board import Side


@dataclass
class Settings:
    depth: int = 3
    ai_side: Side = Side.BLUE
    ai_delay: float = 0.5  # seconds before the AI answers a human move
    seed: Optional[int] = None
    session_ttl: int = 3600  # idle seconds before a game is dropped
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``JANGI_*`` variables.

        Raises:
            ValueError: if a variable holds a malformed value
        """
        env = os.environ if environ is None else environ
        settings = cls()
        if "JANGI_DEPTH" in env:
            settings.depth = int(env["JANGI_DEPTH"])
            if settings.depth < 1:
                raise ValueError(f"JANGI_DEPTH must be at least 1, got {settings.depth}")
        if "JANGI_AI_SIDE" in env:
            try:
                settings.ai_side = Side[env["JANGI_AI_SIDE"].upper()]
            except KeyError:
                raise ValueError(f"JANGI_AI_SIDE must be RED or BLUE, got {env['JANGI_AI_SIDE']!r}")
        if "JANGI_AI_DELAY" in env:
            settings.ai_delay = float(env["JANGI_AI_DELAY"])
            if settings.ai_delay < 0:
                raise ValueError("JANGI_AI_DELAY must not be negative")
        if env.get("JANGI_SEED"):
            settings.seed = int(env["JANGI_SEED"])
        if "JANGI_SESSION_TTL" in env:
            settings.session_ttl = int(env["JANGI_SESSION_TTL"])
        if "JANGI_LOG_LEVEL" in env:
            settings.log_level = env["JANGI_LOG_LEVEL"].upper()
        return settings
