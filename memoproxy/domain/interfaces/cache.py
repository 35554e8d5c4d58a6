"""Interface for cache stores.

Defines the contract for the mapping a memoizing proxy keeps its results
in. The store is also the configuration point for eviction policy.
"""

import abc
from typing import Any, Iterator

# Import relevant domain models
from ..models.common import CacheKey

# Returned by get() when a key is absent; results themselves may be None.
MISSING: Any = object()


class CacheStore(abc.ABC):
    """Abstract Base Class for a key -> result mapping."""

    @abc.abstractmethod
    def get(self, key: CacheKey) -> Any:
        """Retrieves the result stored under a key.

        Args:
            key: The cache key to retrieve.

        Returns:
            The stored result, or MISSING if the key is absent.
        """
        pass

    @abc.abstractmethod
    def add(self, key: CacheKey, value: Any) -> bool:
        """Stores a result under a key unless one is already present.

        Args:
            key: The cache key to store the result under.
            value: The result to store.

        Returns:
            True if the value was inserted, False if the key already existed.
        """
        pass

    @abc.abstractmethod
    def __contains__(self, key: object) -> bool:
        pass

    @abc.abstractmethod
    def __len__(self) -> int:
        pass

    @abc.abstractmethod
    def keys(self) -> Iterator[CacheKey]:
        """Iterates over the stored keys, oldest first."""
        pass
