"""Feed pipeline: cache lookup, aggregation on miss, cache store."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from ..config.settings import Settings, settings as default_settings
from ..news.aggregator import Aggregator
from ..news.cache import CacheEntry, FeedCache, cache_key
from ..news.feed_loader import SourceRegistry, load_sources
from ..news.fetcher import FeedFetcher
from ..news.hero import HeroSelector, load_signals
from ..news.models import ALL_CATEGORY, Article, SourceStatus

logger = logging.getLogger(__name__)


@dataclass
class FeedResult:
    """What the transport layer gets back for one feed request."""

    articles: list[Article]
    last_updated: datetime
    sources: list[SourceStatus] = field(default_factory=list)
    cached: bool = False


class FeedPipeline:
    """
    Serves category feeds, aggregating only on a cache miss.

    Concurrent misses for the same category each run their own
    aggregation cycle; whichever finishes last owns the cache entry.
    """

    def __init__(
        self,
        registry: SourceRegistry,
        aggregator: Aggregator,
        cache: FeedCache,
        max_limit: int = default_settings.max_feed_limit,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.registry = registry
        self.aggregator = aggregator
        self.cache = cache
        self.max_limit = max_limit
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    async def get_feed(self, category: str = ALL_CATEGORY, limit: Optional[int] = None) -> FeedResult:
        """
        Return the ranked feed for a category.

        Args:
            category: "all" or one of the source categories
            limit: Max articles in the response (capped at max_limit).
                Does not affect what is cached.
        """
        limit = self._clamp_limit(limit)
        key = cache_key(category)

        cached = self._read_cache(key)
        if cached is not None:
            return FeedResult(
                articles=cached.articles[:limit],
                last_updated=cached.timestamp,
                sources=cached.sources,
                cached=True,
            )

        sources = self.registry.sources_for_category(category)
        logger.info("[PIPELINE] Cache miss for %s, aggregating %d sources", key, len(sources))
        result = await self.aggregator.aggregate(sources)

        self._write_cache(key, result.articles, result.source_statuses)

        return FeedResult(
            articles=result.articles[:limit],
            last_updated=self.clock(),
            sources=result.source_statuses,
            cached=False,
        )

    def _clamp_limit(self, limit: Optional[int]) -> int:
        if limit is None:
            return self.max_limit
        return max(0, min(limit, self.max_limit))

    def _read_cache(self, key: str) -> Optional[CacheEntry]:
        # A broken cache only costs latency
        try:
            return self.cache.get(key)
        except Exception as e:
            logger.warning("[PIPELINE] Cache read failed for %s, treating as miss: %s", key, e)
            return None

    def _write_cache(self, key: str, articles: list[Article], sources: list[SourceStatus]) -> None:
        try:
            self.cache.set(key, articles, sources)
        except Exception as e:
            logger.warning("[PIPELINE] Cache write failed for %s: %s", key, e)


def build_pipeline(config: Optional[Settings] = None) -> FeedPipeline:
    """Build the default object graph. Called once per process."""
    config = config or default_settings

    registry = load_sources(config.feeds_file, config.default_source_priority)
    hero_selector = HeroSelector(
        signals=load_signals(config.hero_signals_file),
        priority_of=registry.priority_of,
        candidate_limit=config.hero_candidate_limit,
    )
    fetcher = FeedFetcher(
        timeout=config.feed_fetch_timeout,
        max_items=config.max_items_per_source,
        full_description_max=config.full_description_max,
        description_max=config.description_max,
        user_agent=config.user_agent,
    )
    cache = FeedCache(ttl=timedelta(seconds=config.feed_cache_ttl_seconds))

    return FeedPipeline(
        registry=registry,
        aggregator=Aggregator(fetcher, hero_selector),
        cache=cache,
        max_limit=config.max_feed_limit,
    )
