"""
In-memory art document fed by the content resolution pipeline.

Holds the current `Background` (replaced wholesale on each change), the
fetched background image, and labelled elements. All mutation is expected
on the pipeline's delivery context; drops and fetches hand their results
back there.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

import requests

from .config import ArtboardConfig
from .content.pipeline import ContentResolutionPipeline
from .content.providers import ItemProvider
from .content.types import ContentType, infer_image_ext
from .fetch import BackgroundFetcher
from .glyphs import leading_emoji
from .models.background import Background
from .naming import index_matching, uniqued
from .storage import (
    Encoder,
    StorageRootLocator,
    application_support_url,
    store_in_filesystem,
)
from .urls import image_url, looks_like_url

LOGGER = logging.getLogger(__name__)


class BackgroundStatus(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    FAILED = "failed"


@dataclass(frozen=True)
class Element:
    id: int
    text: str
    label: str
    x: int = 0
    y: int = 0
    size: int = 40


class ArtDocument:
    def __init__(
        self,
        pipeline: ContentResolutionPipeline,
        *,
        session: Optional[requests.Session] = None,
        storage_root: Optional[StorageRootLocator] = None,
    ):
        self.pipeline = pipeline
        self.config: ArtboardConfig = pipeline.config
        self._storage_root: StorageRootLocator = storage_root or (
            lambda: application_support_url(self.config)
        )
        self._fetcher = BackgroundFetcher(
            pipeline.executor, pipeline.context, session=session, config=self.config
        )
        self._fetching_url: Optional[str] = None
        self._next_id = 0

        self.background: Background = Background.blank()
        self.background_image: Optional[bytes] = None
        self.background_status = BackgroundStatus.IDLE
        self.elements: List[Element] = []
        self.pending_drops = 0

    # ----- Background -----

    def canonical_url(self, url: str) -> str:
        return image_url(
            url, storage_root=self._storage_root, alias_key=self.config.alias_query_key
        )

    def set_background(self, background: Background) -> None:
        url = self.canonical_url(background.url) if background.is_remote else None
        self._replace_background(background, url)

    def _replace_background(
        self, background: Background, fetch_url: Optional[str]
    ) -> None:
        self.background = background
        self.background_image = None
        self._fetching_url = None
        self.background_status = BackgroundStatus.IDLE

        if background.is_inline:
            self.background_image = background.image_data
        elif fetch_url:
            self._fetching_url = fetch_url
            self.background_status = BackgroundStatus.FETCHING
            self._fetcher.fetch(fetch_url, self._background_fetched)

    def _background_fetched(self, url: str, data: Optional[bytes]) -> None:
        if url != self._fetching_url:
            # the background changed while this fetch was in flight
            LOGGER.debug("document.background.stale_fetch %s", url)
            return
        self._fetching_url = None
        if data:
            self.background_image = data
            self.background_status = BackgroundStatus.IDLE
        else:
            self.background_status = BackgroundStatus.FAILED

    def spill_background(
        self, name: Optional[str] = None, *, encode: Optional[Encoder] = None
    ) -> Optional[str]:
        """Move inline background bytes to local storage and reference them by URL.

        Returns the stored location, or None (document unchanged) when there
        is nothing inline or storage fails.
        """
        data = self.background.image_data
        if data is None:
            return None
        fname = name or f"{time.time()}{infer_image_ext(data[:16]) or ''}"
        url = store_in_filesystem(
            data, fname, storage_root=self._storage_root, encode=encode
        )
        if url is None:
            return None
        self.background = Background.remote(url)
        self.background_status = BackgroundStatus.IDLE
        return url

    # ----- Elements -----

    @property
    def labels(self) -> List[str]:
        return [e.label for e in self.elements]

    def add_element(
        self,
        text: str,
        *,
        label: Optional[str] = None,
        x: int = 0,
        y: int = 0,
        size: int = 40,
    ) -> Element:
        self._next_id += 1
        element = Element(
            id=self._next_id,
            text=text,
            label=uniqued(label or text, self.labels),
            x=x,
            y=y,
            size=size,
        )
        self.elements.append(element)
        return element

    def element_for(self, element_id: int) -> Optional[Element]:
        for e in self.elements:
            if e.id == element_id:
                return e
        return None

    def remove_element(self, element: Element) -> bool:
        idx = index_matching(self.elements, element)
        if idx is None:
            return False
        del self.elements[idx]
        return True

    # ----- Drops -----

    def drop(self, providers: Iterable[ItemProvider], *, x: int = 0, y: int = 0) -> bool:
        """Resolve dropped providers: image, then plain text, then URL.

        Text that is a URL becomes a remote background, text starting with
        an emoji adds that emoji as an element, and other text is ignored.
        """

        def _remote(url: str) -> None:
            canonical = self.canonical_url(url)
            self._replace_background(Background.remote(canonical), canonical)

        def _dropped(content_type: ContentType, value) -> None:
            self.pending_drops -= 1
            if content_type is ContentType.IMAGE:
                self.set_background(Background.inline(value))
            elif content_type is ContentType.URL:
                _remote(value)
            elif looks_like_url(value.strip()):
                _remote(value.strip())
            else:
                glyph = leading_emoji(value)
                if glyph is None:
                    LOGGER.debug("document.drop.ignored_text %r", value[:40])
                    return
                self.add_element(glyph, x=x, y=y)

        started = self.pipeline.resolve(providers, _dropped)
        LOGGER.debug("document.drop started=%s", started)
        if started is None:
            return False
        self.pending_drops += 1
        return True

