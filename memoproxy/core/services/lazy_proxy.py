"""Virtual (lazy initialization) proxy.

Defers building a heavyweight service until the first request actually
needs it, then delegates every call to the same instance.
"""

import asyncio
import inspect
import logging
import time
from typing import Awaitable, Callable, Optional, Union

from memoproxy.domain.events.cache_events import ServiceInitialized
from memoproxy.domain.interfaces.event_publisher import EventPublisher
from memoproxy.domain.interfaces.service import RequestT, ResultT, Service

logger = logging.getLogger(__name__)

ServiceFactory = Callable[
    [], Union[Service[RequestT, ResultT], Awaitable[Service[RequestT, ResultT]]]
]


class LazyServiceProxy(Service[RequestT, ResultT]):
    """Builds the real service from a factory on first use."""

    def __init__(
        self,
        factory: ServiceFactory,
        publisher: Optional[EventPublisher] = None,
        name: Optional[str] = None,
    ):
        """Initializes the proxy without building the real service.

        Args:
            factory: Zero-argument callable (sync or async) returning the service.
            publisher: Optional sink for the ServiceInitialized event.
            name: Name used in logs and events.
        """
        self._factory = factory
        self._publisher = publisher
        self.name = name or getattr(factory, "__name__", "LazyService")
        self._service: Optional[Service[RequestT, ResultT]] = None
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._service is not None

    async def _get_service(self) -> Service[RequestT, ResultT]:
        if self._service is not None:
            return self._service
        async with self._lock:
            # Another caller may have built it while we waited for the lock.
            if self._service is None:
                logger.info(f"Initializing lazily created service '{self.name}'...")
                start_time = time.perf_counter()
                try:
                    service = self._factory()
                    if inspect.isawaitable(service):
                        service = await service
                except Exception as e:
                    logger.error(f"Failed to initialize service '{self.name}': {e}", exc_info=True)
                    self._emit(start_time, error=f"{type(e).__name__}: {e}")
                    raise
                self._service = service
                self._emit(start_time)
        return self._service

    def _emit(self, start_time: float, error: Optional[str] = None) -> None:
        event = ServiceInitialized(
            service=self.name,
            init_ms=(time.perf_counter() - start_time) * 1000,
            error=error,
        )
        logger.debug(f"EVENT: {event}")
        if self._publisher is not None:
            self._publisher.publish(event)

    # --- Service Interface Implementation ---

    async def perform(self, request: RequestT) -> ResultT:
        service = await self._get_service()
        return await service.perform(request)

    def __repr__(self) -> str:
        return f"LazyServiceProxy(name={self.name!r}, initialized={self.initialized})"
