"""Domain Events related to proxied calls and caching.

Examples include events for cache hits, misses, coalesced requests and
failures of the real service behind a proxy.
"""

from dataclasses import dataclass, field
import time
from typing import Optional

from memoproxy.domain.models.common import CacheKey

# Base Event Class
@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass

# --- Cache Events ---

@dataclass
class CacheHit(DomainEvent):
    """Event triggered when a request is answered from the cache."""
    proxy: str
    key: CacheKey
    timestamp: float = field(default_factory=time.time)

@dataclass
class CacheMiss(DomainEvent):
    """Event triggered when a request has to be delegated to the real service."""
    proxy: str
    key: CacheKey
    timestamp: float = field(default_factory=time.time)

@dataclass
class RequestCoalesced(DomainEvent):
    """Event triggered when a request joins an identical in-flight call."""
    proxy: str
    key: CacheKey
    timestamp: float = field(default_factory=time.time)

@dataclass
class ResultCached(DomainEvent):
    """Event triggered when a real result is stored under its key."""
    proxy: str
    key: CacheKey
    latency_ms: float
    timestamp: float = field(default_factory=time.time)

@dataclass
class ResultNotCached(DomainEvent):
    """Event triggered when a real result is returned but deliberately not stored."""
    proxy: str
    key: CacheKey
    reason: str # e.g., 'failure_result'
    timestamp: float = field(default_factory=time.time)

@dataclass
class RealServiceFailed(DomainEvent):
    """Event triggered when the real service raises instead of returning."""
    proxy: str
    key: CacheKey
    error_type: str
    error_message: str
    waiters: int = 0
    timestamp: float = field(default_factory=time.time)

@dataclass
class ServiceInitialized(DomainEvent):
    """Event triggered when a lazily created service is built."""
    service: str
    init_ms: float
    error: Optional[str] = None
    timestamp: float = field(default_factory=time.time)
