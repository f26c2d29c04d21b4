"""Shared fixtures: a controllable clock and an article factory."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from newsdesk.news.models import Article, ArticleSource, FeedSource

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_article():
    def _make(
        article_id: str,
        source_id: str = "src",
        published_at: datetime = NOW,
        title: Optional[str] = None,
        description: str = "",
        image_url: Optional[str] = None,
        category: str = "uk",
    ) -> Article:
        return Article(
            id=article_id,
            title=title or f"Story {article_id}",
            description=description,
            full_description=description,
            url=f"https://example.com/{source_id}/{article_id}",
            source=ArticleSource(id=source_id, name=source_id.upper()),
            category=category,
            published_at=published_at,
            image_url=image_url,
        )

    return _make


@pytest.fixture
def make_source():
    def _make(source_id: str, category: str = "uk") -> FeedSource:
        return FeedSource(
            id=source_id,
            name=source_id.upper(),
            url=f"https://feeds.example.com/{source_id}.xml",
            category=category,
        )

    return _make
