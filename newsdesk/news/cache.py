"""Short-TTL in-memory feed cache, keyed by category (e.g. "feed-tech")."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from ..config.settings import settings
from .models import Article, SourceStatus

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Last aggregated snapshot for one key."""

    articles: list[Article]
    timestamp: datetime
    sources: list[SourceStatus] = field(default_factory=list)


def cache_key(category: str) -> str:
    return f"feed-{category}"


class FeedCache:
    """
    Process-local cache of aggregation results.

    An entry is only served while it is younger than the TTL. Expired
    entries are dropped on read, so they stay absent until the next set().
    """

    def __init__(
        self,
        ttl: timedelta = timedelta(seconds=settings.feed_cache_ttl_seconds),
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.ttl = ttl
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self.clock() - entry.timestamp >= self.ttl:
            logger.debug("[CACHE] Expired: %s", key)
            del self._entries[key]
            return None

        return entry

    def set(self, key: str, articles: list[Article], sources: list[SourceStatus]) -> None:
        self._entries[key] = CacheEntry(
            articles=articles,
            timestamp=self.clock(),
            sources=sources,
        )

    def age(self, key: str) -> Optional[timedelta]:
        """Age of the stored entry, without expiring it; None if absent."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        return self.clock() - entry.timestamp

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
