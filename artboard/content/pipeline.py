"""
Priority-ordered, asynchronous content resolution.

Given providers in priority order and a requested ContentType, the pipeline
picks the first provider that can produce the type, decodes it on a worker
thread and posts the value to the delivery context. The boolean result of
each `load_*` call says whether a decode was started, not whether it
finished.

Best effort: a selected provider that fails, yields nothing, or never
completes produces no callback. There is no retry and no fallback to the
next capable provider; callers needing guaranteed feedback impose their own
timeout.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Callable, Iterable, Optional, Sequence

from ..config import ArtboardConfig
from ..exceptions import BridgeError
from .context import ExecutionContext, SerialQueue
from .providers import ItemProvider
from .types import DROP_PRIORITY, ContentType, bridge, is_native

LOGGER = logging.getLogger(__name__)

Converter = Callable[[Any], Any]


class ContentResolutionPipeline:
    def __init__(
        self,
        context: Optional[ExecutionContext] = None,
        *,
        executor: Optional[Executor] = None,
        config: Optional[ArtboardConfig] = None,
    ):
        self.config = config or ArtboardConfig()
        self.context: ExecutionContext = context or SerialQueue()
        self._owns_executor = executor is None
        self.executor: Executor = executor or ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix="artboard-decode",
        )

    # ----- Selection -----

    @staticmethod
    def select(
        providers: Iterable[ItemProvider], content_type: ContentType
    ) -> Optional[ItemProvider]:
        """First provider, in list order, that can produce ``content_type``."""
        for provider in providers:
            if provider.can_load(content_type):
                return provider
        return None

    # ----- Public API -----

    def load_objects(
        self,
        providers: Iterable[ItemProvider],
        content_type: ContentType,
        using: Callable[[Any], None],
    ) -> bool:
        """Direct decode: deliver values the provider yields natively."""

        def _direct(value: Any) -> Any:
            if is_native(content_type, value):
                return value
            LOGGER.debug(
                "content.pipeline.not_native %s got %s",
                content_type.value,
                type(value).__name__,
            )
            return None

        return self._start(providers, content_type, using, _direct)

    def load_bridged_objects(
        self,
        providers: Iterable[ItemProvider],
        content_type: ContentType,
        using: Callable[[Any], None],
    ) -> bool:
        """Bridged decode: convert the provider's value before delivery."""

        def _bridged(value: Any) -> Any:
            return bridge(content_type, value)

        return self._start(providers, content_type, using, _bridged)

    def load_first_object(
        self,
        providers: Iterable[ItemProvider],
        content_type: ContentType,
        using: Callable[[Any], None],
    ) -> bool:
        return self.load_objects(providers, content_type, using)

    def load_first_bridged_object(
        self,
        providers: Iterable[ItemProvider],
        content_type: ContentType,
        using: Callable[[Any], None],
    ) -> bool:
        return self.load_bridged_objects(providers, content_type, using)

    def resolve(
        self,
        providers: Iterable[ItemProvider],
        using: Callable[[ContentType, Any], None],
        *,
        priority: Sequence[ContentType] = DROP_PRIORITY,
    ) -> Optional[ContentType]:
        """Start a bridged load of the highest-priority type any provider offers.

        ``using(content_type, value)`` runs on the delivery context. Returns
        the type whose load was started, or None.
        """
        candidates = tuple(providers)
        for content_type in priority:

            def _deliver(value: Any, ct: ContentType = content_type) -> None:
                using(ct, value)

            if self.load_bridged_objects(candidates, content_type, _deliver):
                return content_type
        return None

    # ----- Internals -----

    def _start(
        self,
        providers: Iterable[ItemProvider],
        content_type: ContentType,
        using: Callable[[Any], None],
        convert: Converter,
    ) -> bool:
        provider = self.select(providers, content_type)
        if provider is None:
            LOGGER.debug("content.pipeline.no_provider %s", content_type.value)
            return False
        LOGGER.debug(
            "content.pipeline.selected %s for %s", provider, content_type.value
        )

        lock = threading.Lock()
        completed = False

        def _completion(value: Optional[Any], error: Optional[BaseException]) -> None:
            nonlocal completed
            with lock:
                if completed:
                    LOGGER.debug("content.pipeline.duplicate_completion %s", provider)
                    return
                completed = True
            if error is not None:
                LOGGER.debug("content.pipeline.decode_fail %s: %s", provider, error)
                return
            if value is None:
                return
            try:
                out = convert(value)
            except BridgeError as e:
                LOGGER.debug("content.pipeline.bridge_fail %s: %s", provider, e)
                return
            if out is not None:
                self.context.post(using, out)

        self.executor.submit(self._decode, provider, content_type, _completion)
        return True

    @staticmethod
    def _decode(
        provider: ItemProvider,
        content_type: ContentType,
        completion: Callable[[Optional[Any], Optional[BaseException]], None],
    ) -> None:
        try:
            provider.load(content_type, completion)
        except Exception as e:
            LOGGER.debug("content.pipeline.load_raised %s: %s", provider, e)
            completion(None, e)

    # ----- Lifecycle -----

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor:
            self.executor.shutdown(wait=wait)

    def __enter__(self) -> "ContentResolutionPipeline":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.shutdown()
