"""Feed ingestion and ranking pipeline."""

from .aggregator import Aggregator, interleave_by_source, sort_by_recency
from .cache import CacheEntry, FeedCache, cache_key
from .exceptions import FeedConfigError, FeedFetchError, NewsdeskError
from .feed_loader import SourceRegistry, load_sources
from .fetcher import FeedFetcher, normalise_entries
from .hero import HeroScore, HeroSelector, HeroSignals, load_signals
from .models import (
    ALL_CATEGORY,
    CATEGORIES,
    AggregationResult,
    Article,
    ArticleSource,
    FeedSource,
    SourceStatus,
    is_valid_category,
)

__all__ = [
    "ALL_CATEGORY",
    "CATEGORIES",
    "AggregationResult",
    "Aggregator",
    "Article",
    "ArticleSource",
    "CacheEntry",
    "FeedCache",
    "FeedConfigError",
    "FeedFetchError",
    "FeedFetcher",
    "FeedSource",
    "HeroScore",
    "HeroSelector",
    "HeroSignals",
    "NewsdeskError",
    "SourceRegistry",
    "SourceStatus",
    "cache_key",
    "interleave_by_source",
    "is_valid_category",
    "load_signals",
    "load_sources",
    "normalise_entries",
    "sort_by_recency",
]
