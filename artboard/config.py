"""
Runtime configuration for content resolution and background handling.

Centralizes behavior flags so callers can tune defaults without touching
core logic. `ArtboardConfig()` gives module defaults; `ArtboardConfig.from_env()`
layers ARTBOARD_* environment variables on top.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple


def _env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip()
    return raw or default


def _env_int(name: str, default: int) -> int:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_float(name: str, default: float) -> float:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_bool(name: str, default: bool) -> bool:
    raw = (_env_str(name) or "").lower()
    # convenience switches people naturally try
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    return default


@dataclass(frozen=True)
class ArtboardConfig:
    # Logging/debug
    debug: bool = False

    # Query key that marks an embedded image URL inside a viewer URL
    # (e.g. a search result page: ...?imgurl=https%3A%2F%2Fcdn...)
    alias_query_key: str = "imgurl"

    # Worker threads used for provider decodes and background fetches
    max_workers: int = 4

    # Single best-effort fetch; there is no retry
    fetch_timeout: float = 15.0
    user_agent: str = "artboard/0.1"

    # Overrides the local-storage root; None means the platform default
    storage_dir: Optional[str] = None

    # Predicate for recognizing image type identifiers beyond "public.image"
    image_type_prefixes: Tuple[str, ...] = ("public.image",)
    image_type_exacts: Tuple[str, ...] = (
        "public.jpeg",
        "public.png",
        "public.heic",
        "public.heif",
        "public.tiff",
        "com.compuserve.gif",
        "com.microsoft.bmp",
        "org.webmproject.webp",
    )

    @classmethod
    def from_env(cls) -> "ArtboardConfig":
        base = cls()
        return cls(
            debug=_env_bool("ARTBOARD_DEBUG", base.debug),
            alias_query_key=_env_str("ARTBOARD_ALIAS_QUERY_KEY", base.alias_query_key)
            or base.alias_query_key,
            max_workers=_env_int("ARTBOARD_MAX_WORKERS", base.max_workers),
            fetch_timeout=_env_float("ARTBOARD_FETCH_TIMEOUT", base.fetch_timeout),
            user_agent=_env_str("ARTBOARD_USER_AGENT", base.user_agent)
            or base.user_agent,
            storage_dir=_env_str("ARTBOARD_STORAGE_DIR", base.storage_dir),
        )

    def is_image_type(self, type_id: Optional[str]) -> bool:
        if not type_id:
            return False
        t = type_id.lower()
        for p in self.image_type_prefixes or ("public.image",):
            if t.startswith(p):
                return True
        return t in (self.image_type_exacts or ())
