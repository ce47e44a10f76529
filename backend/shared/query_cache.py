"""
In-process read cache for document store queries.

Reads go through the cache keyed by a stable query identity (a tuple such
as ("biblestudygroups",)). Writes go through PendingMutation, which patches
the cached value speculatively, then either invalidates it on success so the
next read reconciles with the store, or restores the exact snapshot taken
before the patch.

The cache is never a source of truth: it is process-local, dropped on
restart, and entries expire after a short TTL. There is no locking; the last mutation to confirm or roll back wins.
"""

import copy
import logging
import time
from enum import Enum
from typing import Any, Callable, Generic, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

QueryKey = tuple[Hashable, ...]

T = TypeVar("T")
R = TypeVar("R")

_MISSING: Any = object()


class QueryCache:
    """
    Read-through cache of query results keyed by query identity.

    With ttl_seconds set, entries older than the TTL are dropped on access
    and count as misses, so writes made outside this process show up
    within one TTL.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[QueryKey, Any] = {}
        self._stored_at: dict[QueryKey, float] = {}

    def __contains__(self, key: QueryKey) -> bool:
        self._expire(key)
        return key in self._entries

    def get(self, key: QueryKey, default: Any = None) -> Any:
        self._expire(key)
        return self._entries.get(key, default)

    def set(self, key: QueryKey, value: Any) -> None:
        self._entries[key] = value
        self._stored_at[key] = self._clock()

    def _expire(self, key: QueryKey) -> None:
        if self._ttl is None or key not in self._entries:
            return
        if self._clock() - self._stored_at[key] >= self._ttl:
            logger.debug(f"Query cache entry for {key} expired")
            del self._entries[key]
            del self._stored_at[key]

    def fetch(self, key: QueryKey, loader: Callable[[], T]) -> T:
        """
        Return the cached value for key, loading and storing it on a miss.

        Loader errors propagate and leave the cache untouched.
        """
        if key in self:
            logger.debug(f"Query cache hit for {key}")
            return self._entries[key]

        logger.debug(f"Query cache miss for {key}")
        value = loader()
        self.set(key, value)
        return value

    def invalidate(self, prefix: QueryKey) -> int:
        """
        Drop every entry whose key starts with prefix.

        Returns:
            Number of entries removed.
        """
        stale = [key for key in self._entries if key[: len(prefix)] == prefix]
        for key in stale:
            del self._entries[key]
            del self._stored_at[key]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cached queries under {prefix}")
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()
        self._stored_at.clear()

    def snapshot(self, key: QueryKey) -> Any:
        """Deep copy of the current entry, or a missing marker."""
        if key not in self:
            return _MISSING
        return copy.deepcopy(self._entries[key])

    def restore(self, key: QueryKey, snapshot: Any) -> None:
        """Put back a value captured by snapshot()."""
        if snapshot is _MISSING:
            self._entries.pop(key, None)
            self._stored_at.pop(key, None)
        else:
            self.set(key, snapshot)


class MutationState(str, Enum):
    """Lifecycle of a pending mutation."""

    PENDING = "pending"
    APPLIED = "applied"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


class PendingMutation(Generic[T]):
    """
    A speculative change to one cached query.

    Usage:
        mutation = PendingMutation(cache, ("biblestudygroups",), add_member)
        mutation.run(lambda: repository.add_member(group_id, user_id))

    The transform receives the cached value and returns the patched value.
    It is skipped when nothing is cached for the key yet. On success the
    invalidation prefix (defaults to the key itself) is dropped so the next
    read refetches from the store.
    """

    def __init__(
        self,
        cache: QueryCache,
        key: QueryKey,
        transform: Callable[[T], T],
        invalidate: Optional[QueryKey] = None,
    ) -> None:
        self._cache = cache
        self._key = key
        self._transform = transform
        self._invalidate = invalidate if invalidate is not None else key
        self._snapshot: Any = _MISSING
        self.state = MutationState.PENDING

    def apply(self) -> None:
        """Capture the snapshot and apply the optimistic patch."""
        if self.state != MutationState.PENDING:
            raise RuntimeError(f"Mutation already {self.state.value}")

        self._snapshot = self._cache.snapshot(self._key)
        if self._snapshot is not _MISSING:
            current = self._cache.get(self._key)
            self._cache.set(self._key, self._transform(current))
        self.state = MutationState.APPLIED

    def confirm(self) -> None:
        """Mark the write as durable and force the next read to reconcile."""
        self._cache.invalidate(self._invalidate)
        self.state = MutationState.CONFIRMED

    def rollback(self) -> None:
        """Restore the exact value seen before apply()."""
        self._cache.restore(self._key, self._snapshot)
        self.state = MutationState.ROLLED_BACK
        logger.warning(f"Rolled back optimistic update of {self._key}")

    def run(self, write: Callable[[], R]) -> R:
        """
        Apply, perform the remote write, then confirm or roll back.

        Exceptions raised by write are re-raised after the rollback.
        """
        self.apply()
        try:
            result = write()
        except Exception:
            self.rollback()
            raise
        self.confirm()
        return result
