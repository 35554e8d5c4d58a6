"""Cache Store Implementation.

Provides concrete implementations of the CacheStore interface used by
memoizing proxies to hold their results.
Bounded Context: Cache Management
"""
