"""Pydantic response models for the web API.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..news.models import Article, FeedSource, SourceStatus
from .pipeline import FeedResult


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ArticleSourceData(ApiModel):
    id: str
    name: str


class ArticleData(ApiModel):
    """One normalised article."""

    id: str
    title: str
    description: str
    full_description: str
    url: str
    image_url: Optional[str] = None
    source: ArticleSourceData
    category: str
    published_at: datetime
    author: Optional[str] = None

    @classmethod
    def from_article(cls, article: Article) -> "ArticleData":
        return cls(
            id=article.id,
            title=article.title,
            description=article.description,
            full_description=article.full_description,
            url=article.url,
            image_url=article.image_url,
            source=ArticleSourceData(id=article.source.id, name=article.source.name),
            category=article.category,
            published_at=article.published_at,
            author=article.author,
        )


class SourceStatusData(ApiModel):
    """Per-source health for the cycle that produced the feed."""

    id: str
    name: str
    status: Literal["ok", "error"]
    article_count: int

    @classmethod
    def from_status(cls, status: SourceStatus) -> "SourceStatusData":
        return cls(
            id=status.id,
            name=status.name,
            status=status.status,
            article_count=status.article_count,
        )


class FeedResponse(ApiModel):
    """Response body for GET /feeds."""

    articles: list[ArticleData]
    last_updated: datetime
    sources: list[SourceStatusData] = []

    @classmethod
    def from_result(cls, result: FeedResult) -> "FeedResponse":
        return cls(
            articles=[ArticleData.from_article(a) for a in result.articles],
            last_updated=result.last_updated,
            sources=[SourceStatusData.from_status(s) for s in result.sources],
        )


class CategoryInfo(ApiModel):
    """Category info for the category selector."""

    id: str
    label: str


class SourceInfo(ApiModel):
    """A registered feed source and its hero priority."""

    id: str
    name: str
    url: str
    category: str
    logo: Optional[str] = None
    priority: float

    @classmethod
    def from_source(cls, source: FeedSource, priority: float) -> "SourceInfo":
        return cls(
            id=source.id,
            name=source.name,
            url=source.url,
            category=source.category,
            logo=source.logo,
            priority=priority,
        )
