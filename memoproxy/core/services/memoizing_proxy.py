"""Memoizing (caching) proxy.

Implements the same Service capability as the real service it wraps. Each
call derives a key from the request; a hit is answered from the store, a
miss is delegated to the real service and its result stored once.
Concurrent misses for the same key share a single real invocation.
"""

import asyncio
import logging
import time
from typing import Any, Callable, Dict, Optional

from memoproxy.core.services.key_derivation import KeyDeriver
from memoproxy.domain.events.cache_events import (
    CacheHit, CacheMiss, DomainEvent, RealServiceFailed,
    RequestCoalesced, ResultCached, ResultNotCached,
)
from memoproxy.domain.interfaces.cache import CacheStore, MISSING
from memoproxy.domain.interfaces.event_publisher import EventPublisher
from memoproxy.domain.interfaces.service import RequestT, ResultT, Service
from memoproxy.domain.models.common import CacheKey, ProxyStats
from memoproxy.infrastructure.cache.memory_store import InMemoryCacheStore

logger = logging.getLogger(__name__)

FailurePredicate = Callable[[Any], bool]


def _never_fails(result: Any) -> bool:
    return False


class MemoizingProxy(Service[RequestT, ResultT]):
    """Caches the results of a real service per derived request key."""

    def __init__(
        self,
        real: Service[RequestT, ResultT],
        key_deriver: KeyDeriver,
        store: Optional[CacheStore] = None,
        cache_failures: bool = True,
        is_failure: Optional[FailurePredicate] = None,
        publisher: Optional[EventPublisher] = None,
        name: Optional[str] = None,
    ):
        """Initializes the proxy.

        Args:
            real: The service to delegate misses to. Shared, never copied.
            key_deriver: Pure function turning a request into a CacheKey.
            store: Store holding this proxy's results. A fresh unbounded
                in-memory store is created when omitted; it must not be
                shared with other components.
            cache_failures: Whether results flagged by `is_failure` are
                stored. When False they are returned but the next call for
                the same key reaches the real service again.
            is_failure: Predicate recognising a failure result. By default
                no result counts as a failure.
            publisher: Optional sink for hit/miss domain events.
            name: Name used in logs, events and statistics.
        """
        self._real = real
        self._derive_key = key_deriver
        self._store = store if store is not None else InMemoryCacheStore()
        self.cache_failures = cache_failures
        self._is_failure = is_failure or _never_fails
        self._publisher = publisher
        self.name = name or f"{type(real).__name__}Proxy"

        self._in_flight: Dict[CacheKey, "asyncio.Future[ResultT]"] = {}
        self._waiters: Dict[CacheKey, int] = {}
        self._hits = 0
        self._misses = 0
        self._coalesced = 0
        self._failures = 0

        logger.info(
            f"MemoizingProxy '{self.name}' initialized: key_deriver={key_deriver!r}, "
            f"store={self._store!r}, cache_failures={cache_failures}"
        )

    @property
    def stats(self) -> ProxyStats:
        return ProxyStats(
            hits=self._hits,
            misses=self._misses,
            coalesced=self._coalesced,
            failures=self._failures,
            size=len(self._store),
        )

    def is_cached(self, request: RequestT) -> bool:
        """Returns whether a result for this request is already stored."""
        return self._derive_key(request) in self._store

    def _publish(self, event: DomainEvent) -> None:
        logger.debug(f"EVENT: {event}")
        if self._publisher is not None:
            self._publisher.publish(event)

    # --- Service Interface Implementation ---

    async def perform(self, request: RequestT) -> ResultT:
        key = self._derive_key(request)

        while True:
            cached = self._store.get(key)
            if cached is not MISSING:
                self._hits += 1
                logger.debug(f"[{self.name}] cache hit for key: {key}")
                self._publish(CacheHit(proxy=self.name, key=key))
                return cached

            in_flight = self._in_flight.get(key)
            if in_flight is None:
                return await self._load(key, request)

            self._coalesced += 1
            self._waiters[key] = self._waiters.get(key, 0) + 1
            logger.debug(f"[{self.name}] joining in-flight call for key: {key}")
            self._publish(RequestCoalesced(proxy=self.name, key=key))
            try:
                # Shielded so a cancelled waiter does not cancel the shared call.
                return await asyncio.shield(in_flight)
            except asyncio.CancelledError:
                if not in_flight.cancelled():
                    raise
                # The owning call was cancelled, not this one: load again.
                logger.debug(f"[{self.name}] in-flight call for key {key} was cancelled; retrying.")

    async def _load(self, key: CacheKey, request: RequestT) -> ResultT:
        """Delegates a miss to the real service and stores the outcome.

        The shared future is always resolved before this returns or raises,
        so coalesced waiters never outlive the owning call.
        """
        self._misses += 1
        logger.debug(f"[{self.name}] cache miss for key: {key}. Calling real service.")
        self._publish(CacheMiss(proxy=self.name, key=key))

        future: "asyncio.Future[ResultT]" = asyncio.get_running_loop().create_future()
        self._in_flight[key] = future
        start_time = time.perf_counter()
        try:
            try:
                result = await self._real.perform(request)
            except Exception as e:
                self._failures += 1
                waiters = self._waiters.get(key, 0)
                logger.warning(
                    f"[{self.name}] real service failed for key {key}: {type(e).__name__}: {e}. "
                    f"Nothing cached; propagating to caller and {waiters} waiter(s)."
                )
                self._fail(future, e)
                self._publish(RealServiceFailed(
                    proxy=self.name, key=key, error_type=type(e).__name__,
                    error_message=str(e), waiters=waiters,
                ))
                raise

            latency_ms = (time.perf_counter() - start_time) * 1000
            if self.cache_failures or not self._is_failure(result):
                if self._store.add(key, result):
                    logger.debug(f"[{self.name}] stored result for key: {key} ({latency_ms:.1f}ms)")
                    self._publish(ResultCached(proxy=self.name, key=key, latency_ms=latency_ms))
            else:
                logger.info(f"[{self.name}] failure result for key {key} not cached; next call will retry.")
                self._publish(ResultNotCached(proxy=self.name, key=key, reason="failure_result"))
        except Exception as e:
            self._fail(future, e)
            raise
        except BaseException:
            # Cancellation (or interpreter exit): waiters retry instead.
            future.cancel()
            raise
        finally:
            self._in_flight.pop(key, None)
            self._waiters.pop(key, None)

        future.set_result(result)
        return result

    @staticmethod
    def _fail(future: "asyncio.Future[Any]", error: Exception) -> None:
        if future.done():
            return
        future.set_exception(error)
        # Mark retrieved; waiters (if any) still receive the exception.
        future.exception()

    def __repr__(self) -> str:
        return f"MemoizingProxy(name={self.name!r}, real={self._real!r}, stats={self.stats})"
