"""Tests for newsdesk.news.cache module."""

from datetime import timedelta

import pytest

from newsdesk.news.cache import FeedCache, cache_key
from newsdesk.news.models import SourceStatus

from conftest import NOW


@pytest.fixture
def cache(clock) -> FeedCache:
    return FeedCache(ttl=timedelta(minutes=5), clock=clock)


@pytest.fixture
def statuses():
    return [SourceStatus(id="verge", name="The Verge", status="ok", article_count=1)]


class TestFeedCache:
    def test_set_then_get(self, cache, make_article, statuses) -> None:
        articles = [make_article("a")]
        cache.set("feed-tech", articles, statuses)

        entry = cache.get("feed-tech")

        assert entry is not None
        assert entry.articles == articles
        assert entry.sources == statuses
        assert entry.timestamp == NOW

    def test_missing_key(self, cache) -> None:
        assert cache.get("feed-tech") is None

    def test_hit_just_inside_ttl(self, cache, clock, make_article, statuses) -> None:
        cache.set("feed-tech", [make_article("a")], statuses)
        clock.advance(minutes=4, seconds=59)
        assert cache.get("feed-tech") is not None

    def test_expired_entry_is_absent(self, cache, clock, make_article, statuses) -> None:
        cache.set("feed-tech", [make_article("a")], statuses)
        clock.advance(minutes=5)
        assert cache.get("feed-tech") is None

    def test_stays_absent_until_next_set(self, cache, clock, make_article, statuses) -> None:
        cache.set("feed-tech", [make_article("a")], statuses)
        clock.advance(minutes=6)
        assert cache.get("feed-tech") is None
        assert cache.get("feed-tech") is None

        cache.set("feed-tech", [make_article("b")], statuses)
        entry = cache.get("feed-tech")
        assert [a.id for a in entry.articles] == ["b"]

    def test_set_replaces_entry_and_timestamp(self, cache, clock, make_article, statuses) -> None:
        cache.set("feed-tech", [make_article("a")], statuses)
        clock.advance(minutes=4)
        cache.set("feed-tech", [make_article("b")], [])
        clock.advance(minutes=4)

        entry = cache.get("feed-tech")
        assert [a.id for a in entry.articles] == ["b"]
        assert entry.sources == []
        assert entry.timestamp == NOW + timedelta(minutes=4)

    def test_keys_are_independent(self, cache, make_article, statuses) -> None:
        cache.set("feed-tech", [make_article("a")], statuses)
        assert cache.get("feed-uk") is None
        assert cache.get("feed-tech") is not None

    def test_age_and_clear(self, cache, clock, make_article, statuses) -> None:
        assert cache.age("feed-tech") is None
        cache.set("feed-tech", [make_article("a")], statuses)
        clock.advance(seconds=30)
        assert cache.age("feed-tech") == timedelta(seconds=30)

        cache.clear()
        assert len(cache) == 0
        assert cache.get("feed-tech") is None

    def test_default_ttl_is_five_minutes(self) -> None:
        assert FeedCache().ttl == timedelta(minutes=5)


class TestCacheKey:
    def test_format(self) -> None:
        assert cache_key("tech") == "feed-tech"
        assert cache_key("all") == "feed-all"
