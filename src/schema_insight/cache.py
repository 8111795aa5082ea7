"""
Caching of analysis results for Schema Insight.

Results are memoized in-process, keyed by a fingerprint of the schema
collection (ids + newest modification time). A key change is the only
invalidation: nothing expires on its own.
"""

from collections import OrderedDict
from typing import Any, Optional, Sequence

from .logging_config import get_logger
from .models import Schema

logger = get_logger(__name__)


class ResultCache:
    """
    In-memory cache for analysis results.

    Features:
    - Content-addressed keys (see :func:`compute_cache_key`)
    - Optional size bound with oldest-first eviction
    - Explicit clearing

    The cache holds object references, so a hit returns the identical
    result instance that was stored.
    """

    def __init__(self, max_entries: int = 0, enabled: bool = True):
        """
        Initialize cache.

        Args:
            max_entries: Maximum number of entries kept (0 = unbounded)
            enabled: Whether caching is enabled
        """
        if max_entries < 0:
            raise ValueError("max_entries must be non-negative")
        self.enabled = enabled
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, Any]" = OrderedDict()

        if self.enabled:
            bound = max_entries or "unbounded"
            logger.debug(f"Result cache initialized (max_entries={bound})")
        else:
            logger.debug("Result cache disabled")

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        if not self.enabled:
            return None

        value = self._entries.get(key)
        if value is not None:
            logger.debug(f"Cache hit: {key[:48]}")
        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set value in cache, evicting the oldest entries beyond max_entries.

        Args:
            key: Cache key
            value: Value to cache
        """
        if not self.enabled:
            return

        self._entries.pop(key, None)
        self._entries[key] = value
        logger.debug(f"Cache set: {key[:48]}")

        while self.max_entries and len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Cache evicted: {evicted[:48]}")

    def clear(self) -> None:
        """Clear all cache entries."""
        self._entries.clear()
        logger.info("Cache cleared")

    def keys(self) -> list[str]:
        return list(self._entries)

    def stats(self) -> dict:
        """
        Get cache statistics.

        Returns:
            Dictionary with cache stats
        """
        return {
            "enabled": self.enabled,
            "size": len(self._entries),
            "max_entries": self.max_entries,
            "keys": self.keys(),
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


def compute_cache_key(schemas: Sequence[Schema]) -> str:
    """
    Fingerprint of a schema collection for result memoization.

    Sorted schema ids joined by ",", then "-" and the newest
    last-modified time in epoch milliseconds (0 when none is known).
    Content edits are assumed to bump last_modified.

    Args:
        schemas: Schema collection

    Returns:
        Cache key string
    """
    ids = ",".join(sorted(schema.id for schema in schemas))
    newest = max((schema.metadata.last_modified_ms for schema in schemas), default=0)
    return f"{ids}-{newest}"
