"""FastAPI web application serving aggregated news feeds."""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Query, Request

from ..config.settings import settings
from ..news.models import ALL_CATEGORY, CATEGORIES, is_valid_category
from .models import CategoryInfo, FeedResponse, SourceInfo
from .pipeline import FeedPipeline, build_pipeline

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pipeline (and so one cache) per process
    app.state.pipeline = build_pipeline(settings)
    logger.info("Feed pipeline ready with %d sources", len(app.state.pipeline.registry))
    yield


app = FastAPI(title="Newsdesk", lifespan=lifespan)


def get_pipeline(request: Request) -> FeedPipeline:
    return request.app.state.pipeline


def _require_category(category: str) -> str:
    # A blank ?category= means "all"
    category = category.strip() or ALL_CATEGORY
    if not is_valid_category(category):
        valid = ", ".join(cid for cid, _ in CATEGORIES)
        raise HTTPException(status_code=400, detail=f"Unknown category {category!r}. Expected one of: {valid}")
    return category


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# ============================================================================
# Feeds
# ============================================================================


@app.get("/feeds", response_model=FeedResponse)
@app.get("/api/feeds", response_model=FeedResponse)
async def get_feeds(
    category: str = ALL_CATEGORY,
    limit: int = Query(settings.max_feed_limit, ge=0),
    pipeline: FeedPipeline = Depends(get_pipeline),
):
    """Return the ranked, interleaved article stream for a category.

    Per-source failures show up in `sources`; they never fail the request.
    """
    category = _require_category(category)
    result = await pipeline.get_feed(category, limit)

    return FeedResponse.from_result(result)


@app.get("/api/categories", response_model=list[CategoryInfo])
async def list_categories():
    """Return the available categories for the selector."""
    return [CategoryInfo(id=cid, label=label) for cid, label in CATEGORIES]


@app.get("/api/sources", response_model=list[SourceInfo])
async def list_sources(
    category: str = ALL_CATEGORY,
    pipeline: FeedPipeline = Depends(get_pipeline),
):
    """Return the registered feed sources with their hero priority."""
    category = _require_category(category)
    registry = pipeline.registry
    return [
        SourceInfo.from_source(source, registry.priority_of(source.id))
        for source in registry.sources_for_category(category)
    ]


if __name__ == "__main__":
    uvicorn.run(
        "newsdesk.app.main:app",
        host=settings.host,
        port=settings.port,
    )
