"""HTTP service exposing the batch pipeline."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import ConfigModel
from ..exceptions import ItemNotFoundError, PipelineError
from ..pipeline import BatchPipeline, FeedDigest, ProcessedItem

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feeds", tags=["feeds"])


def get_pipeline(request: Request) -> BatchPipeline:
    return request.app.state.pipeline


@router.get("/all", response_model=FeedDigest)
async def get_all_feeds(pipeline: BatchPipeline = Depends(get_pipeline)):
    """Fetch, extract and summarize every item of every configured source."""
    try:
        return await pipeline.process_all()
    except PipelineError as e:
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to process feeds", "message": str(e)},
        )


@router.get("/item/{guid:path}", response_model=ProcessedItem)
async def get_feed_item(guid: str, pipeline: BatchPipeline = Depends(get_pipeline)):
    """Process the single item whose guid matches."""
    try:
        return await pipeline.process_one(guid)
    except ItemNotFoundError:
        return JSONResponse(status_code=404, content={"error": "Item not found"})
    except PipelineError:
        return JSONResponse(status_code=500, content={"error": "Failed to fetch item"})


def create_app(config: ConfigModel, pipeline: Optional[BatchPipeline] = None) -> FastAPI:
    """Build the FastAPI application around one pipeline."""
    app = FastAPI(
        title="feedbrief",
        description="Summarized news feeds",
        version=__version__,
    )
    app.state.config = config
    app.state.pipeline = pipeline or BatchPipeline(config)
    app.include_router(router)
    return app
