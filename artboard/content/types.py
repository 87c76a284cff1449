"""
Content type tags and conversions used by item providers.

Types are keyed by uniform type identifiers. Host identifiers map onto a
`ContentType` through an exact table, then config-driven image predicates,
then prefix rules. Each type has a native Python representation for direct
decodes and a bridge for lossless conversion from related representations.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..config import ArtboardConfig
from ..exceptions import BridgeError
from ..urls import looks_like_url


class ContentType(str, Enum):
    IMAGE = "public.image"
    PLAIN_TEXT = "public.plain-text"
    URL = "public.url"
    DATA = "public.data"


# Highest priority first: what a drop resolves to
DROP_PRIORITY: Tuple[ContentType, ...] = (
    ContentType.IMAGE,
    ContentType.PLAIN_TEXT,
    ContentType.URL,
)

NATIVE_TYPES: Dict[ContentType, type] = {
    ContentType.IMAGE: bytes,
    ContentType.PLAIN_TEXT: str,
    ContentType.URL: str,
    ContentType.DATA: bytes,
}


def is_native(content_type: ContentType, value: Any) -> bool:
    """Direct decodes deliver only values already in the native type."""
    native = NATIVE_TYPES[content_type]
    if not isinstance(value, native):
        return False
    if content_type is ContentType.URL:
        return looks_like_url(value)
    return True


# ----------------------------- Bridges ---------------------------------------


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise BridgeError(f"cannot bridge {type(value).__name__} to bytes", value)


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise BridgeError(f"text is not valid UTF-8: {e}", value) from e
    raise BridgeError(f"cannot bridge {type(value).__name__} to text", value)


def _to_url(value: Any) -> str:
    text = _to_text(value).strip()
    if not looks_like_url(text):
        raise BridgeError(f"not a URL: {text[:80]!r}", value)
    return text


BRIDGES: Dict[ContentType, Callable[[Any], Any]] = {
    ContentType.IMAGE: _to_bytes,
    ContentType.PLAIN_TEXT: _to_text,
    ContentType.URL: _to_url,
    ContentType.DATA: _to_bytes,
}


def bridge(content_type: ContentType, value: Any) -> Any:
    """Convert ``value`` to ``content_type``'s native type or raise BridgeError."""
    return BRIDGES[content_type](value)


# ----------------------------- Identifiers -----------------------------------

_EXACT: Dict[str, ContentType] = {
    "public.image": ContentType.IMAGE,
    "public.plain-text": ContentType.PLAIN_TEXT,
    "public.utf8-plain-text": ContentType.PLAIN_TEXT,
    "public.text": ContentType.PLAIN_TEXT,
    "text/plain": ContentType.PLAIN_TEXT,
    "public.url": ContentType.URL,
    "public.file-url": ContentType.URL,
    "text/uri-list": ContentType.URL,
    "public.data": ContentType.DATA,
    "application/octet-stream": ContentType.DATA,
}

_PREFIX: List[Tuple[str, ContentType]] = [
    ("image/", ContentType.IMAGE),
    ("text/", ContentType.PLAIN_TEXT),
]


def content_type_for(
    type_id: Optional[str], config: Optional[ArtboardConfig] = None
) -> Optional[ContentType]:
    """Map a host type identifier (UTI or MIME type) to a ContentType."""
    t = (type_id or "").strip().lower()
    if not t:
        return None
    ct = _EXACT.get(t)
    if ct is not None:
        return ct
    if (config or ArtboardConfig()).is_image_type(t):
        return ContentType.IMAGE
    for prefix, pct in _PREFIX:
        if t.startswith(prefix):
            return pct
    return None


def infer_image_ext(head: bytes) -> Optional[str]:
    """Sniff an image file extension from the first bytes of its data."""
    if head.startswith(b"\xff\xd8\xff"):
        return ".jpg"
    if head.startswith(b"\x89PNG\r\n\x1a\n"):
        return ".png"
    if head.startswith(b"GIF87a") or head.startswith(b"GIF89a"):
        return ".gif"
    if head.startswith(b"RIFF") and head[8:12] == b"WEBP":
        return ".webp"
    # ISO Base Media File (HEIC/HEIF): look for the ftyp box
    if len(head) >= 12 and head[4:8] == b"ftyp":
        if head[8:12] in (b"heic", b"heif", b"mif1", b"msf1", b"hevc"):
            return ".heic"
    if head.startswith(b"BM"):
        return ".bmp"
    if head.startswith(b"II*\x00") or head.startswith(b"MM\x00*"):
        return ".tiff"
    return None
