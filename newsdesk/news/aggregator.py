"""Multi-source aggregation: concurrent fetch, merge, recency sort, interleave."""

import asyncio
import logging
from typing import Optional, Protocol, Sequence

from .hero import HeroSelector
from .models import AggregationResult, Article, FeedSource, SourceStatus

logger = logging.getLogger(__name__)


class ArticleFetcher(Protocol):
    async def fetch_and_normalise(self, source: FeedSource) -> list[Article]:
        """Return the normalised articles for one source, raising on failure."""


def sort_by_recency(articles: Sequence[Article]) -> list[Article]:
    """Newest first; ties keep their incoming order."""
    return sorted(articles, key=lambda a: a.published_at, reverse=True)


def interleave_by_source(articles: Sequence[Article]) -> list[Article]:
    """
    Round-robin merge across sources.

    Articles are grouped by source id (groups ordered by first appearance,
    order within a group preserved), then one is taken from each group in
    turn until all are drained.
    """
    by_source: dict[str, list[Article]] = {}
    for article in articles:
        by_source.setdefault(article.source.id, []).append(article)

    interleaved: list[Article] = []
    queues = list(by_source.values())
    depth = max((len(q) for q in queues), default=0)
    for i in range(depth):
        for queue in queues:
            if i < len(queue):
                interleaved.append(queue[i])
    return interleaved


class Aggregator:
    """
    Fans a fetch out to every source and merges the results.

    Every fetch is awaited to completion regardless of sibling failures;
    a failed source contributes an error status and no articles.
    """

    def __init__(self, fetcher: ArticleFetcher, hero_selector: Optional[HeroSelector] = None):
        self.fetcher = fetcher
        self.hero_selector = hero_selector

    async def aggregate(self, sources: Sequence[FeedSource]) -> AggregationResult:
        results = await asyncio.gather(
            *(self.fetcher.fetch_and_normalise(source) for source in sources),
            return_exceptions=True,
        )

        pool: list[Article] = []
        statuses: list[SourceStatus] = []
        for source, result in zip(sources, results):
            if isinstance(result, BaseException):
                logger.warning("[AGGREGATOR] Source %s failed: %s", source.id, result)
                statuses.append(SourceStatus(id=source.id, name=source.name, status="error", article_count=0))
                continue
            pool.extend(result)
            statuses.append(SourceStatus(id=source.id, name=source.name, status="ok", article_count=len(result)))

        failed = sum(1 for s in statuses if s.status == "error")
        logger.info(
            "[AGGREGATOR] Fetched %d articles from %d sources (%d failed)",
            len(pool),
            len(sources) - failed,
            failed,
        )

        articles = interleave_by_source(sort_by_recency(pool))
        if self.hero_selector is not None:
            articles = self.hero_selector.select(articles)

        return AggregationResult(articles=articles, source_statuses=statuses)
