"""RSS/Atom fetching and normalisation for a single feed source.

Network I/O is async (httpx); parsing is handed to feedparser on the
already-downloaded body. Any failure for a source surfaces as
FeedFetchError so the aggregator can mark that one source as errored.
"""

import asyncio
import io
import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

import feedparser
import httpx

from ..config.settings import settings
from .exceptions import FeedFetchError
from .models import Article, ArticleSource, FeedSource
from .text import (
    create_article_id,
    extract_full_content,
    extract_image_url,
    extract_short_description,
    parse_published_date,
)

logger = logging.getLogger(__name__)


def normalise_entries(
    source: FeedSource,
    entries: Iterable[dict[str, Any]],
    now: Optional[datetime] = None,
    max_items: int = 10,
    full_description_max: int = 800,
    description_max: int = 150,
) -> list[Article]:
    """
    Turn parsed feed entries into Articles for one source.

    Entries without a title or link are skipped; at most max_items
    articles are returned. Entries without a usable date are stamped
    with `now`.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    articles: list[Article] = []
    for entry in entries:
        if len(articles) >= max_items:
            break

        title = (entry.get("title") or "").strip()
        link = (entry.get("link") or "").strip()
        if not title or not link:
            continue

        full_description = extract_full_content(entry, full_description_max)
        articles.append(
            Article(
                id=create_article_id(link, source.id),
                title=title,
                description=extract_short_description(full_description, description_max),
                full_description=full_description,
                url=link,
                source=ArticleSource(id=source.id, name=source.name),
                category=source.category,
                published_at=parse_published_date(entry) or now,
                image_url=extract_image_url(entry),
                author=entry.get("author") or None,
            )
        )

    return articles


class FeedFetcher:
    """
    Fetches one feed and returns its normalised articles.

    A fresh httpx.AsyncClient is opened per fetch. `transport` is passed
    through to it (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        timeout: float = settings.feed_fetch_timeout,
        max_items: int = settings.max_items_per_source,
        full_description_max: int = settings.full_description_max,
        description_max: int = settings.description_max,
        user_agent: str = settings.user_agent,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.max_items = max_items
        self.full_description_max = full_description_max
        self.description_max = description_max
        self._headers = {"User-Agent": user_agent}
        self._transport = transport

    async def fetch_and_normalise(self, source: FeedSource) -> list[Article]:
        """
        Fetch, parse and normalise a single source.

        Raises:
            FeedFetchError: On network error, HTTP error status, timeout
                or an unparseable feed.
        """
        resp = await self._download(source)
        entries = self._parse(source, resp)
        articles = normalise_entries(
            source,
            entries,
            max_items=self.max_items,
            full_description_max=self.full_description_max,
            description_max=self.description_max,
        )
        logger.debug("[FETCHER] %s: %d articles", source.id, len(articles))
        return articles

    async def _download(self, source: FeedSource) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                timeout=self.timeout,
                headers=self._headers,
                transport=self._transport,
            ) as client:
                resp = await asyncio.wait_for(client.get(source.url), timeout=self.timeout)
            resp.raise_for_status()
        except asyncio.TimeoutError as e:
            raise FeedFetchError(f"Timed out fetching feed {source.id} after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise FeedFetchError(f"Failed to fetch feed {source.id}: {source.url} ({e})") from e
        return resp

    def _parse(self, source: FeedSource, resp: httpx.Response) -> list[dict[str, Any]]:
        # Stream, never raw bytes: feedparser treats a bare string as a path or URL
        headers = {}
        if "content-type" in resp.headers:
            # Content is already decompressed by httpx, so only the charset is passed on
            headers["content-type"] = resp.headers["content-type"]
        feed = feedparser.parse(io.BytesIO(resp.content), response_headers=headers)
        entries = getattr(feed, "entries", None) or []

        if getattr(feed, "bozo", False):
            exc = getattr(feed, "bozo_exception", None)
            if not entries:
                raise FeedFetchError(f"Invalid RSS/Atom feed {source.id}: {source.url} ({exc})")
            # Best effort: keep whatever parsed
            logger.warning("[FETCHER] Malformed feed for %s, using %d entries: %s", source.id, len(entries), exc)
        elif not entries and not feed.get("version"):
            raise FeedFetchError(f"Unrecognised feed format {source.id}: {source.url}")

        return entries
