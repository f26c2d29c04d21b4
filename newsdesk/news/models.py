"""Data models for feed sources, articles and per-cycle source health."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

# Fixed category enumeration; "all" is a sentinel that selects every source.
ALL_CATEGORY = "all"

CATEGORIES: list[tuple[str, str]] = [
    (ALL_CATEGORY, "All"),
    ("tech", "Tech"),
    ("finance", "Finance"),
    ("uk", "UK"),
    ("world", "World"),
    ("sport", "Sport"),
    ("culture", "Culture"),
    ("science", "Science"),
]

SOURCE_CATEGORIES = frozenset(cid for cid, _ in CATEGORIES if cid != ALL_CATEGORY)


def is_valid_category(category: str) -> bool:
    """True for "all" or any of the fixed source categories."""
    return category == ALL_CATEGORY or category in SOURCE_CATEGORIES


@dataclass(frozen=True)
class FeedSource:
    """One RSS/Atom endpoint from the source catalogue."""

    id: str
    name: str
    url: str
    category: str
    logo: Optional[str] = None


@dataclass(frozen=True)
class ArticleSource:
    """The source reference embedded in every article."""

    id: str
    name: str


@dataclass
class Article:
    """Normalised story derived from a single feed entry."""

    id: str
    title: str
    description: str  # first paragraph, ~150 chars
    full_description: str  # up to 800 chars, paragraphs kept
    url: str
    source: ArticleSource
    category: str
    published_at: datetime  # UTC; fetch time when upstream has no date
    image_url: Optional[str] = None
    author: Optional[str] = None


@dataclass
class SourceStatus:
    """Health record for one source in one aggregation cycle."""

    id: str
    name: str
    status: str  # "ok" | "error"
    article_count: int = 0


@dataclass
class AggregationResult:
    """Merged, ranked articles plus one status per requested source."""

    articles: list[Article] = field(default_factory=list)
    source_statuses: list[SourceStatus] = field(default_factory=list)
