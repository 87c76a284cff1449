"""
URL canonicalization for background content.

`image_url` maps a URL to the one that should actually be fetched:

  1. a viewer URL carrying an embedded image reference (``?imgurl=...``)
     resolves to the decoded embedded URL;
  2. a file URL is re-rooted under the *current* local-storage root, since
     that root can move between process runs;
  3. anything else resolves to its base URL when one is given, else itself.

No network access and no exceptions for string input.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Tuple
from urllib.parse import unquote, urlparse

from .config import ArtboardConfig
from .storage import StorageRootLocator, application_support_url, root_url

LOGGER = logging.getLogger(__name__)

DEFAULT_ALIAS_KEY = ArtboardConfig.alias_query_key


def looks_like_url(text: Optional[str]) -> bool:
    """True when ``text`` parses as an absolute URL with a location."""
    if not text or any(ch.isspace() for ch in text):
        return False
    try:
        parsed = urlparse(text)
    except ValueError:
        return False
    if not parsed.scheme:
        return False
    if parsed.scheme == "file":
        return bool(parsed.path)
    return bool(parsed.netloc)


def is_file_url(url: str) -> bool:
    try:
        return urlparse(url).scheme == "file"
    except ValueError:
        return False


def last_path_component(url: str) -> str:
    try:
        path = urlparse(url).path
    except ValueError:
        path = url.split("?", 1)[0].split("#", 1)[0]
    return path.rstrip("/").rsplit("/", 1)[-1]


def parse_query_pairs(query: Optional[str]) -> Iterator[Tuple[str, str]]:
    """Yield ``(key, value)`` for each ``&``-separated pair.

    Segments that do not split into exactly two parts on ``=`` are skipped.
    Values are returned still percent-encoded.
    """
    for segment in (query or "").split("&"):
        parts = segment.split("=")
        if len(parts) != 2:
            if segment:
                LOGGER.debug("urls.query.skip_segment %r", segment)
            continue
        yield parts[0], parts[1]


def embedded_image_url(url: str, alias_key: str = DEFAULT_ALIAS_KEY) -> Optional[str]:
    """Return the decoded URL behind ``alias_key`` in the query, if any."""
    try:
        query = urlparse(url).query
    except ValueError:
        return None
    for key, value in parse_query_pairs(query):
        if key != alias_key:
            continue
        candidate = unquote(value)
        if looks_like_url(candidate):
            return candidate
    return None


def image_url(
    url: str,
    *,
    storage_root: Optional[StorageRootLocator] = None,
    base_url: Optional[str] = None,
    alias_key: Optional[str] = None,
) -> str:
    """Return the URL that should be fetched or displayed for ``url``."""
    embedded = embedded_image_url(url, alias_key or DEFAULT_ALIAS_KEY)
    if embedded:
        LOGGER.debug("urls.canonical.embedded %s -> %s", url, embedded)
        return embedded

    if is_file_url(url):
        # Queried on every call: the root may have moved since the URL was made.
        locate = storage_root or application_support_url
        root = root_url(locate())
        rerooted = f"{root}/{last_path_component(url)}"
        LOGGER.debug("urls.canonical.rerooted %s -> %s", url, rerooted)
        return rerooted

    return base_url or url


def storable_reference(url: str) -> str:
    """What to persist for ``url``: only the trailing component of file URLs."""
    if is_file_url(url):
        return last_path_component(url)
    return url
