"""
Local storage for spilled background images.

The storage root is process-external state: it can move between runs, so
callers keep only the trailing path component of anything stored here and
re-root it through `artboard.urls.image_url` before each use. Nothing in
this module caches the root.
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import unquote, urlparse

from .config import ArtboardConfig
from .exceptions import StorageError

LOGGER = logging.getLogger(__name__)

DEFAULT_STORAGE_DIR = os.path.join("~", ".local", "share", "artboard")

StorageRootLocator = Callable[[], str]
Encoder = Callable[[bytes], Optional[bytes]]


def application_support_dir(config: Optional[ArtboardConfig] = None) -> Path:
    """Return the current writable storage directory, creating it best-effort."""
    conf = config or ArtboardConfig.from_env()
    raw = conf.storage_dir or DEFAULT_STORAGE_DIR
    path = Path(os.path.expanduser(raw)).resolve()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        # Still hand back the path; the write will fail and report absence.
        LOGGER.debug("storage.root.mkdir_fail %s: %s", path, e)
    return path


def application_support_url(config: Optional[ArtboardConfig] = None) -> str:
    """Default storage-root locator: the storage directory as a file URL."""
    return application_support_dir(config).as_uri()


def path_from_file_url(url: str) -> Path:
    parsed = urlparse(url)
    return Path(unquote(parsed.path))


def root_url(root: str) -> str:
    """Accept a locator result given either as a file URL or a plain path."""
    if urlparse(root).scheme == "file":
        return root.rstrip("/")
    return Path(os.path.expanduser(root)).resolve().as_uri().rstrip("/")


def storage_directory(locate: StorageRootLocator) -> Path:
    """Resolve the locator's current root to a directory path.

    Raises StorageError when the locator fails or returns nothing.
    """
    try:
        root = locate()
    except Exception as e:
        raise StorageError(f"storage root unavailable: {e}") from e
    if not root:
        raise StorageError("storage root locator returned nothing")
    return path_from_file_url(root_url(root))


def _checked_name(name: str) -> str:
    # a stored name is a single path component under the root
    seps = [s for s in (os.sep, os.altsep, "/") if s]
    if name in {".", ".."} or "\x00" in name or any(s in name for s in seps):
        raise StorageError(f"invalid storage name {name!r}")
    return name


def store_in_filesystem(
    data: bytes,
    name: Optional[str] = None,
    *,
    storage_root: Optional[StorageRootLocator] = None,
    encode: Optional[Encoder] = None,
) -> Optional[str]:
    """Write ``data`` under the storage root and return its file URL.

    ``encode`` is the opaque codec step (identity when omitted). Returns None
    when the name or root is unusable, encoding yields nothing, or the write
    fails.
    """
    fname = name or f"{time.time()}"
    try:
        fname = _checked_name(fname)
        directory = storage_directory(storage_root or application_support_url)
    except StorageError as e:
        LOGGER.warning("Cannot store %s: %s", fname, e)
        return None

    try:
        payload = encode(data) if encode else data
    except Exception as e:
        LOGGER.warning("Encoding %s for storage failed: %s", fname, e)
        return None
    if payload is None:
        LOGGER.debug("storage.encode_empty name=%s", fname)
        return None

    path = directory / fname
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.write(payload)
    except OSError as e:
        LOGGER.warning("Failed to store %s in %s: %s", fname, directory, e)
        return None
    LOGGER.info("Stored %d bytes at %s", len(payload), path)
    return path.as_uri()
