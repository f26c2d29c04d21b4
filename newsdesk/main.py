#!/usr/bin/env python3
"""
Newsdesk command line.

Runs one aggregation cycle and prints the ranked feed, or serves the API.

Usage:
    python -m newsdesk.main                      # All categories
    python -m newsdesk.main --category uk        # One category
    python -m newsdesk.main --limit 10 --json    # API-shaped JSON
    python -m newsdesk.main --serve              # Run the web API
"""

import argparse
import asyncio
import logging
import sys

from .app.models import FeedResponse
from .app.pipeline import FeedResult, build_pipeline
from .config.settings import settings
from .news.models import ALL_CATEGORY, CATEGORIES


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Aggregate RSS/Atom news feeds into one ranked stream"
    )

    parser.add_argument(
        "--category",
        default=ALL_CATEGORY,
        choices=[cid for cid, _ in CATEGORIES],
        help=f"Category to fetch (default: {ALL_CATEGORY})",
    )

    parser.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Number of articles to show (default: 20)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the feed as API-shaped JSON",
    )

    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the web API instead of a single fetch",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Port for --serve (default: {settings.port})",
    )

    return parser.parse_args(argv)


def format_feed(result: FeedResult) -> str:
    """Render a feed result as a plain-text listing."""
    lines = []
    if not result.articles:
        lines.append("No articles available right now.")
    else:
        hero = result.articles[0]
        lines.append("=" * 60)
        lines.append(f"HERO: {hero.title}")
        lines.append(f"      {hero.source.name} - {hero.published_at:%Y-%m-%d %H:%M}")
        if hero.description:
            lines.append(f"      {hero.description}")
        lines.append("=" * 60)
        for i, article in enumerate(result.articles[1:], start=2):
            lines.append(
                f"{i:3d}. {article.published_at:%H:%M} [{article.source.name}] {article.title}"
            )

    ok = [s for s in result.sources if s.status == "ok"]
    failed = [s for s in result.sources if s.status == "error"]
    lines.append("")
    lines.append(f"Sources: {len(ok)} ok, {len(failed)} failed")
    for status in failed:
        lines.append(f"   x {status.name} ({status.id})")
    return "\n".join(lines)


async def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    pipeline = build_pipeline(settings)
    result = await pipeline.get_feed(args.category, args.limit)

    if args.json:
        print(FeedResponse.from_result(result).model_dump_json(by_alias=True, indent=2))
    else:
        print(format_feed(result))

    return 0


def serve(port: int) -> None:
    import uvicorn

    uvicorn.run("newsdesk.app.main:app", host=settings.host, port=port)


def cli() -> None:
    """CLI entry point."""
    args = parse_args()
    if args.serve:
        serve(args.port)
        return
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
