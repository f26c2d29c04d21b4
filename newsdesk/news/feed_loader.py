"""Load the feed source catalogue from JSON configuration."""

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from .exceptions import FeedConfigError
from .models import ALL_CATEGORY, SOURCE_CATEGORIES, FeedSource

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_PRIORITY = 5.0


class SourceRegistry:
    """
    Static catalogue of feed sources and their hero priority weights.

    Reference data only: lookups never raise. An unknown category yields
    no sources and an unknown source id yields the default priority.
    """

    def __init__(
        self,
        sources: Iterable[FeedSource],
        priorities: Optional[dict[str, float]] = None,
        default_priority: float = DEFAULT_SOURCE_PRIORITY,
    ):
        self._sources = tuple(sources)
        self._by_id = {s.id: s for s in self._sources}
        self._priorities = dict(priorities or {})
        self.default_priority = default_priority

    def __len__(self) -> int:
        return len(self._sources)

    def all(self) -> list[FeedSource]:
        return list(self._sources)

    def get(self, source_id: str) -> Optional[FeedSource]:
        return self._by_id.get(source_id)

    def sources_for_category(self, category: str) -> list[FeedSource]:
        """Return every source for "all", otherwise exact category matches."""
        if category == ALL_CATEGORY:
            return list(self._sources)
        return [s for s in self._sources if s.category == category]

    def priority_of(self, source_id: str) -> float:
        return self._priorities.get(source_id, self.default_priority)


def load_sources(
    path: Optional[Path] = None,
    default_priority: float = DEFAULT_SOURCE_PRIORITY,
) -> SourceRegistry:
    """
    Load the source registry from a feeds JSON file.

    Args:
        path: Path to feeds.json. Defaults to the bundled catalogue.
        default_priority: Weight for sources without a "priority" key.

    Returns:
        SourceRegistry of enabled sources. Empty if the file is missing.

    Raises:
        FeedConfigError: If an entry is missing fields, repeats an id or
            names an unknown category.
    """
    if path is None:
        path = Path(__file__).parent.parent / "config" / "feeds.json"

    if not path.exists():
        logger.warning("[FEEDS] Feed file not found: %s", path)
        return SourceRegistry([], default_priority=default_priority)

    with open(path) as f:
        data = json.load(f)

    sources: list[FeedSource] = []
    priorities: dict[str, float] = {}
    for entry in data.get("feeds", []):
        if not entry.get("enabled", True):
            continue
        try:
            source = FeedSource(
                id=entry["id"],
                name=entry["name"],
                url=entry["url"],
                category=entry["category"],
                logo=entry.get("logo"),
            )
        except KeyError as e:
            raise FeedConfigError(f"Feed entry missing field {e}: {entry}") from e

        if source.category not in SOURCE_CATEGORIES:
            raise FeedConfigError(
                f"Feed {source.id!r} has unknown category {source.category!r}"
            )
        if any(s.id == source.id for s in sources):
            raise FeedConfigError(f"Duplicate feed id: {source.id!r}")

        sources.append(source)
        if entry.get("priority") is not None:
            priorities[source.id] = float(entry["priority"])

    logger.info("[FEEDS] Loaded %d enabled feeds from %s", len(sources), path.name)
    return SourceRegistry(sources, priorities, default_priority)
