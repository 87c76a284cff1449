"""Content resolution for dropped and pasted items.

Contains:
- types: ContentType tags, bridges between representations, image sniffing
- providers: the ItemProvider seam and concrete provider kinds
- context: delivery contexts completion callbacks run on
- pipeline: ContentResolutionPipeline (selection + async decode + delivery)
"""

from .context import EventLoopContext, ExecutionContext, SerialQueue
from .pipeline import ContentResolutionPipeline
from .providers import (
    BaseItemProvider,
    DataItemProvider,
    FileItemProvider,
    ItemProvider,
    RemoteImageProvider,
    TextItemProvider,
    provider_for,
)
from .types import DROP_PRIORITY, ContentType

__all__ = [
    "ContentResolutionPipeline",
    "ContentType",
    "DROP_PRIORITY",
    "ExecutionContext",
    "SerialQueue",
    "EventLoopContext",
    "ItemProvider",
    "BaseItemProvider",
    "DataItemProvider",
    "TextItemProvider",
    "FileItemProvider",
    "RemoteImageProvider",
    "provider_for",
]
