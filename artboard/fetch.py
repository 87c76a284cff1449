"""
Single best-effort fetch of background content.

`fetch_bytes` performs one GET (http/https via requests) or one file read
(file URLs). There is no retry or backoff; a failure raises FetchError and
callers decide how to degrade.

`BackgroundFetcher` runs that fetch off the owner thread and posts the
outcome back onto the delivery context.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from typing import Callable, Optional

import requests

from .config import ArtboardConfig
from .exceptions import FetchError
from .storage import path_from_file_url
from .urls import is_file_url

LOGGER = logging.getLogger(__name__)


def fetch_bytes(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    config: Optional[ArtboardConfig] = None,
) -> bytes:
    conf = config or ArtboardConfig()
    if is_file_url(url):
        path = path_from_file_url(url)
        LOGGER.info("Reading %s", path)
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise FetchError(f"cannot read {path}: {e}", url=url) from e

    if not (url.startswith("http://") or url.startswith("https://")):
        raise FetchError(f"unsupported URL scheme: {url}", url=url)

    if session is not None:
        return _get(session, url, conf)
    with requests.Session() as http:
        return _get(http, url, conf)


def _get(http: requests.Session, url: str, conf: ArtboardConfig) -> bytes:
    LOGGER.info("GET %s", url)
    try:
        resp = http.get(
            url,
            timeout=conf.fetch_timeout,
            headers={"User-Agent": conf.user_agent},
        )
    except requests.RequestException as e:
        LOGGER.warning("GET %s failed: %s", url, e)
        raise FetchError(f"GET failed: {e}", url=url) from e
    code = getattr(resp, "status_code", 0)
    LOGGER.debug("GET %s returned status %d", url, code)
    if code >= 400:
        LOGGER.error("GET %s failed with code %d", url, code)
        raise FetchError(f"HTTP {code}", url=url)
    return resp.content


class BackgroundFetcher:
    """Fetch a background URL on a worker and report back on the delivery context."""

    def __init__(
        self,
        executor: Executor,
        context,
        *,
        session: Optional[requests.Session] = None,
        config: Optional[ArtboardConfig] = None,
    ):
        self._executor = executor
        self._context = context
        self._session = session
        self._config = config or ArtboardConfig()

    def fetch(
        self,
        url: str,
        on_done: Callable[[str, Optional[bytes]], None],
    ) -> None:
        """Start one fetch of ``url``; ``on_done(url, data_or_None)`` runs on the context."""

        def _work() -> None:
            data: Optional[bytes]
            try:
                data = fetch_bytes(url, session=self._session, config=self._config)
            except (FetchError, requests.RequestException) as e:
                LOGGER.warning("Background fetch of %s failed: %s", url, e)
                data = None
            self._context.post(on_done, url, data)

        LOGGER.debug("fetch.background.start %s", url)
        self._executor.submit(_work)
