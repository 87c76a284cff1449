"""Public exports for artboard data models."""

from __future__ import annotations

from .background import Background, BackgroundKind

__all__ = [
    "Background",
    "BackgroundKind",
]
