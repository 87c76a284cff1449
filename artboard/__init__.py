"""Resolve dropped and pasted content into typed art document values."""

from .config import ArtboardConfig
from .content import (
    ContentResolutionPipeline,
    ContentType,
    DataItemProvider,
    FileItemProvider,
    RemoteImageProvider,
    SerialQueue,
    TextItemProvider,
)
from .document import ArtDocument, BackgroundStatus, Element
from .models import Background, BackgroundKind
from .naming import incremented, uniqued
from .storage import application_support_url, store_in_filesystem
from .urls import image_url

__version__ = "0.1.0"

__all__ = [
    "ArtboardConfig",
    "ArtDocument",
    "Background",
    "BackgroundKind",
    "BackgroundStatus",
    "ContentResolutionPipeline",
    "ContentType",
    "DataItemProvider",
    "Element",
    "FileItemProvider",
    "RemoteImageProvider",
    "SerialQueue",
    "TextItemProvider",
    "application_support_url",
    "image_url",
    "incremented",
    "store_in_filesystem",
    "uniqued",
]
