"""
Item providers: dropped or pasted content offering typed representations.

A provider advertises the content types it can materialize (`can_load`,
which never does I/O) and decodes one of them on request (`load`). Each
concrete provider keeps an explicit ContentType -> loader table; there is
no reflection-based dispatch.

`load` reports through ``completion(value, error)`` at most once.
"""

from __future__ import annotations

import logging
import mimetypes
import os
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Tuple, Union

import requests

from ..config import ArtboardConfig
from ..exceptions import ArtboardError
from ..fetch import fetch_bytes
from ..storage import path_from_file_url
from ..urls import image_url, is_file_url, last_path_component, looks_like_url
from .types import ContentType, content_type_for, infer_image_ext

LOGGER = logging.getLogger(__name__)

Completion = Callable[[Optional[Any], Optional[BaseException]], None]
Loader = Callable[[], Any]


class ItemProvider(Protocol):
    """Minimal provider seam the resolution pipeline requires."""

    def can_load(self, content_type: ContentType) -> bool: ...

    def load(self, content_type: ContentType, completion: Completion) -> None: ...


class BaseItemProvider:
    def __init__(self) -> None:
        self._loaders: Dict[ContentType, Loader] = {}

    def register(self, content_type: ContentType, loader: Loader) -> None:
        self._loaders[content_type] = loader

    @property
    def content_types(self) -> Tuple[ContentType, ...]:
        return tuple(self._loaders)

    def can_load(self, content_type: ContentType) -> bool:
        return content_type in self._loaders

    def load(self, content_type: ContentType, completion: Completion) -> None:
        loader = self._loaders.get(content_type)
        if loader is None:
            completion(
                None,
                ArtboardError(f"{type(self).__name__} cannot load {content_type.value}"),
            )
            return
        try:
            value = loader()
        except Exception as e:
            LOGGER.debug(
                "content.provider.load_fail %s %s: %s",
                type(self).__name__,
                content_type.value,
                e,
            )
            completion(None, e)
            return
        completion(value, None)

    def __repr__(self) -> str:
        kinds = ",".join(ct.value for ct in self._loaders)
        return f"{type(self).__name__}({kinds})"


class DataItemProvider(BaseItemProvider):
    """In-memory representations, e.g. the contents of a pasteboard.

    Keys may be ContentType members or host type identifiers (UTIs or MIME
    types); unknown identifiers are ignored.
    """

    def __init__(
        self,
        representations: Mapping[Union[ContentType, str], Any],
        config: Optional[ArtboardConfig] = None,
    ):
        super().__init__()
        for key, value in representations.items():
            ct = key if isinstance(key, ContentType) else content_type_for(key, config)
            if ct is None:
                LOGGER.debug("content.provider.unknown_type %r", key)
                continue
            if not self.can_load(ct):
                self.register(ct, lambda v=value: v)


class TextItemProvider(BaseItemProvider):
    """Plain text; also offered as a URL when the text is one."""

    def __init__(self, text: str):
        super().__init__()
        self.text = text
        self.register(ContentType.PLAIN_TEXT, lambda: text)
        stripped = text.strip()
        if looks_like_url(stripped):
            self.register(ContentType.URL, lambda: stripped)


class FileItemProvider(BaseItemProvider):
    """A local file. Always offers its file URL; images and text by content.

    The file head is sniffed once at construction so `can_load` stays free
    of I/O. Text is produced as raw bytes and needs a bridged load.
    """

    def __init__(
        self, path: Union[str, os.PathLike], config: Optional[ArtboardConfig] = None
    ):
        super().__init__()
        self.path = Path(path).expanduser().resolve()
        self.register(ContentType.URL, self.path.as_uri)

        head = b""
        try:
            with open(self.path, "rb") as fh:
                head = fh.read(16)
        except OSError as e:
            LOGGER.debug("content.provider.file_unreadable %s: %s", self.path, e)
            return
        if infer_image_ext(head):
            self.register(ContentType.IMAGE, self.path.read_bytes)
        else:
            mime, _ = mimetypes.guess_type(self.path.name)
            ct = content_type_for(mime, config) if mime else None
            if ct is ContentType.PLAIN_TEXT:
                self.register(ContentType.PLAIN_TEXT, self.path.read_bytes)
        self.register(ContentType.DATA, self.path.read_bytes)


class RemoteImageProvider(BaseItemProvider):
    """An http(s) URL. Offers the URL, and the image bytes when the canonical
    URL names an image file. Fetching is a single attempt with no retry."""

    def __init__(
        self,
        url: str,
        *,
        session: Optional[requests.Session] = None,
        config: Optional[ArtboardConfig] = None,
    ):
        super().__init__()
        self.url = url
        self._session = session
        self._config = config or ArtboardConfig()
        self.image_target: Optional[str] = None
        self.register(ContentType.URL, lambda: url)

        target = image_url(url, alias_key=self._config.alias_query_key)
        mime, _ = mimetypes.guess_type(last_path_component(target))
        if mime and content_type_for(mime, self._config) is ContentType.IMAGE:
            self.image_target = target
            self.register(ContentType.IMAGE, self._fetch_image)

    def _fetch_image(self) -> bytes:
        return fetch_bytes(
            self.image_target or self.url, session=self._session, config=self._config
        )


def provider_for(
    item: str,
    *,
    session: Optional[requests.Session] = None,
    config: Optional[ArtboardConfig] = None,
) -> BaseItemProvider:
    """Best provider for a textual item: an http(s) URL, an existing path, or text."""
    if item.startswith("http://") or item.startswith("https://"):
        return RemoteImageProvider(item, session=session, config=config)
    if is_file_url(item):
        return FileItemProvider(path_from_file_url(item), config=config)
    if os.path.exists(os.path.expanduser(item)):
        return FileItemProvider(item, config=config)
    return TextItemProvider(item)
