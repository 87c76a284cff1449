"""Exceptions raised by artboard."""

from __future__ import annotations

from typing import Optional


class ArtboardError(Exception):
    """Base artboard error."""


class BridgeError(ArtboardError):
    """A provider value could not be converted to the requested content type."""

    def __init__(self, message: str, value: Optional[object] = None):
        super().__init__(message)
        self.value = value


class FetchError(ArtboardError):
    """A single best-effort fetch of background content failed."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class StorageError(ArtboardError):
    """The storage root or a stored name cannot be used."""
