"""In-memory implementation of the CacheStore interface.

Entries live for the lifetime of the store. An optional entry bound turns
on eviction of the oldest insertion first; without it the store only grows.
"""

import logging
from collections import OrderedDict
from typing import Any, Iterator, Optional

from memoproxy.domain.interfaces.cache import CacheStore, MISSING
from memoproxy.domain.models.common import CacheKey

logger = logging.getLogger(__name__)

class InMemoryCacheStore(CacheStore):
    """Insertion-ordered dictionary store with an optional size bound."""

    def __init__(self, max_entries: Optional[int] = None):
        """Initializes the store.

        Args:
            max_entries: Maximum number of entries to keep. None keeps every
                entry for the lifetime of the store.
        """
        if max_entries is not None and max_entries < 1:
            raise ValueError(f"max_entries must be positive or None, got {max_entries}")
        self.max_entries = max_entries
        self._entries: "OrderedDict[CacheKey, Any]" = OrderedDict()
        self.evictions = 0
        logger.debug(f"InMemoryCacheStore initialized (max_entries={max_entries})")

    def _prune(self) -> None:
        """Evicts the oldest entries while over the size bound."""
        if self.max_entries is None:
            return
        while len(self._entries) > self.max_entries:
            oldest_key, _ = self._entries.popitem(last=False)
            self.evictions += 1
            logger.debug(f"Evicted oldest cache entry: key={oldest_key}")

    # --- CacheStore Interface Implementation ---

    def get(self, key: CacheKey) -> Any:
        return self._entries.get(key, MISSING)

    def add(self, key: CacheKey, value: Any) -> bool:
        if key in self._entries:
            return False
        self._entries[key] = value
        self._prune()
        return True

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> Iterator[CacheKey]:
        return iter(list(self._entries))

    def __repr__(self) -> str:
        return f"InMemoryCacheStore(size={len(self)}, max_entries={self.max_entries})"
