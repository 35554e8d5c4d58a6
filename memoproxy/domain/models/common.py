"""Defines common Value Objects used across the proxy contexts.

These objects represent requests, results and cache keys, ensuring
consistency and type safety between services and their proxies.
"""

from dataclasses import dataclass, field
from typing import Hashable, NewType, Tuple

# === Core Value Objects ===

CacheNamespace = NewType("CacheNamespace", str)  # Prefix for categorizing cache keys (e.g., 'payment')

# === Caching Context ===

@dataclass(frozen=True)
class CacheKey:
    """Structured, hashable key for a cache entry.

    Parts are kept as a tuple rather than joined into a string so that
    values containing a delimiter can never collide with other values.
    """
    namespace: CacheNamespace
    parts: Tuple[Hashable, ...] = ()

    def __str__(self) -> str:
        if not self.parts:
            return self.namespace
        return f"{self.namespace}{self.parts!r}"

@dataclass(frozen=True)
class ProxyStats:
    """Snapshot of a memoizing proxy's counters."""
    hits: int = 0
    misses: int = 0
    coalesced: int = 0
    failures: int = 0
    size: int = 0

    @property
    def total_requests(self) -> int:
        return self.hits + self.misses + self.coalesced

# === Payment Context ===

@dataclass(frozen=True)
class PaymentRequest:
    """A request to charge an amount in a currency."""
    amount: float
    currency: str

@dataclass(frozen=True)
class PaymentResult:
    """Outcome reported by the payment gateway."""
    success: bool
    amount: float
    currency: str

# === Remote Data Context ===

@dataclass(frozen=True)
class LargeDataRequest:
    """Parameterless request for the remote data set."""

@dataclass(frozen=True)
class LargeDataPayload:
    """Payload returned by the remote data service."""
    data: Tuple[int, ...] = field(default_factory=tuple)
