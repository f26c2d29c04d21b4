"""Hero article selection.

Scores the front of the aggregated feed with weighted heuristics and
promotes the single best candidate to position 0. The lexical signal
lists are configuration data (hero_signals.yaml); the weights and
recency bands are fixed policy.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Sequence

import yaml

from ..config.settings import settings
from .exceptions import FeedConfigError
from .feed_loader import DEFAULT_SOURCE_PRIORITY
from .models import Article

logger = logging.getLogger(__name__)

WEIGHTS = {
    "source": 1.5,
    "breaking": 3.0,
    "major_event": 2.0,
    "important_topic": 1.5,
    "image": 0.5,
    "recency": 1.0,
}

BREAKING_POINTS = 10
MAJOR_EVENT_POINTS = 5
IMPORTANT_TOPIC_POINTS = 5
IMAGE_POINTS = 5

# (max age in hours, score); anything older scores 1
RECENCY_BANDS: list[tuple[float, int]] = [
    (1, 10),
    (2, 9),
    (4, 8),
    (6, 7),
    (12, 5),
    (24, 3),
]
STALE_RECENCY_SCORE = 1


@dataclass
class HeroSignals:
    """Compiled lexical pattern lists."""

    breaking: list[re.Pattern] = field(default_factory=list)
    major_event: list[re.Pattern] = field(default_factory=list)
    important_topic: list[re.Pattern] = field(default_factory=list)


@dataclass
class HeroScore:
    """Score breakdown for one candidate."""

    source_weight: float
    breaking_score: int
    major_event_score: int
    important_topic_score: int
    has_image: int
    recency_score: int
    total: float


def load_signals(path: Optional[Path] = None) -> HeroSignals:
    """
    Load and compile the hero signal lists from YAML.

    Raises:
        FeedConfigError: If the file is missing or holds an invalid pattern.
    """
    if path is None:
        path = settings.hero_signals_file

    if not path.exists():
        raise FeedConfigError(f"Hero signal file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    compiled = {}
    for name in ("breaking", "major_event", "important_topic"):
        try:
            compiled[name] = [re.compile(p, re.IGNORECASE) for p in data.get(name) or []]
        except re.error as e:
            raise FeedConfigError(f"Invalid {name} pattern in {path.name}: {e}") from e

    logger.info(
        "[HERO] Loaded %d breaking, %d major-event, %d topic signals",
        len(compiled["breaking"]),
        len(compiled["major_event"]),
        len(compiled["important_topic"]),
    )
    return HeroSignals(**compiled)


def match_count(text: str, patterns: Sequence[re.Pattern]) -> int:
    """Number of patterns that match at least once."""
    return sum(1 for pattern in patterns if pattern.search(text))


def recency_score(published_at: datetime, now: datetime) -> int:
    age_hours = (now - published_at).total_seconds() / 3600
    for max_age, score in RECENCY_BANDS:
        if age_hours < max_age:
            return score
    return STALE_RECENCY_SCORE


class HeroSelector:
    """Picks the lead article from the first `candidate_limit` entries."""

    def __init__(
        self,
        signals: HeroSignals,
        priority_of: Optional[Callable[[str], float]] = None,
        candidate_limit: int = settings.hero_candidate_limit,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.signals = signals
        self.priority_of = priority_of or (lambda _source_id: DEFAULT_SOURCE_PRIORITY)
        self.candidate_limit = candidate_limit
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def score(self, article: Article, now: Optional[datetime] = None) -> HeroScore:
        if now is None:
            now = self.clock()
        text = f"{article.title} {article.description or ''}"

        source_weight = self.priority_of(article.source.id)
        breaking = match_count(text, self.signals.breaking) * BREAKING_POINTS
        major_event = match_count(text, self.signals.major_event) * MAJOR_EVENT_POINTS
        important_topic = match_count(text, self.signals.important_topic) * IMPORTANT_TOPIC_POINTS
        has_image = IMAGE_POINTS if article.image_url else 0
        recency = recency_score(article.published_at, now)

        total = (
            source_weight * WEIGHTS["source"]
            + breaking * WEIGHTS["breaking"]
            + major_event * WEIGHTS["major_event"]
            + important_topic * WEIGHTS["important_topic"]
            + has_image * WEIGHTS["image"]
            + recency * WEIGHTS["recency"]
        )

        return HeroScore(
            source_weight=source_weight,
            breaking_score=breaking,
            major_event_score=major_event,
            important_topic_score=important_topic,
            has_image=has_image,
            recency_score=recency,
            total=total,
        )

    def select(self, articles: Sequence[Article]) -> list[Article]:
        """
        Return the articles with the best-scoring candidate first.

        Everything else keeps its relative order. The first candidate wins
        ties, so an already-selected list is returned unchanged.
        """
        articles = list(articles)
        if len(articles) <= 1:
            return articles

        now = self.clock()
        candidates = articles[: self.candidate_limit]

        best_index = 0
        best_score = self.score(candidates[0], now).total
        for i in range(1, len(candidates)):
            total = self.score(candidates[i], now).total
            if total > best_score:
                best_score = total
                best_index = i

        if best_index == 0:
            return articles

        hero = articles[best_index]
        logger.debug("[HERO] Promoted %s (%s) with score %.1f", hero.id, hero.source.id, best_score)
        return [hero] + articles[:best_index] + articles[best_index + 1:]
