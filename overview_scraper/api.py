"""
HTTP API for the overview scraper.
Maps query-string/body parameters onto SearchOptions and returns serialized outcomes.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from overview_scraper import __version__
from overview_scraper.config import config as default_config
from overview_scraper.models import SearchOptions, utc_timestamp
from overview_scraper.schemas import BatchRequest, BatchResponse, OverviewResponse
from overview_scraper.scraper import OverviewScraper

logger = logging.getLogger(__name__)

SERVICE_NAME = "AI Overview API"


def _error(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error, **extra})


def create_app(scraper: Optional[OverviewScraper] = None, settings=default_config) -> FastAPI:
    """
    Build the API around one scraper instance.

    The scraper's browser session is released on application shutdown.
    """
    scraper = scraper or OverviewScraper.from_config(settings)
    started_at = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {SERVICE_NAME} v{__version__}")
        yield
        logger.info("Shutting down gracefully...")
        try:
            await scraper.close()
            logger.info("Cleanup completed")
        except Exception as e:
            logger.error(f"Error during cleanup: {e}")

    app = FastAPI(title=SERVICE_NAME, version=__version__, lifespan=lifespan)
    app.state.scraper = scraper

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        client = request.client.host if request.client else "-"
        logger.info(f"{request.method} {request.url.path} - IP: {client}")
        return await call_next(request)

    @app.get("/")
    async def index():
        return {
            "success": True,
            "service": SERVICE_NAME,
            "version": __version__,
            "description": f"API for scraping {scraper.site.name} AI Overview results",
            "endpoints": {
                "health": "GET /api/health",
                "aiOverview": "GET /api/ai-overview?q=your+query&gl=US&hl=en",
                "batchAiOverview": "POST /api/ai-overview/batch",
            },
            "limits": {"maxBatchSize": settings.max_batch_size},
            "timestamp": utc_timestamp(),
        }

    @app.get("/api/health")
    async def health():
        return {
            "success": True,
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": __version__,
            "browser": "alive" if scraper.session.is_alive else "idle",
            "timestamp": utc_timestamp(),
            "uptime": round(time.monotonic() - started_at, 3),
        }

    @app.get("/api/ai-overview", response_model=OverviewResponse)
    async def ai_overview(q: Optional[str] = None, gl: Optional[str] = None, hl: Optional[str] = None,
                          num: Optional[int] = None, start: Optional[int] = None, pws: Optional[int] = None):
        if not q or not q.strip():
            return _error(400, 'Query parameter "q" is required',
                          example="/api/ai-overview?q=seo+agency&gl=US&hl=en")

        options = SearchOptions.from_mapping({"gl": gl, "hl": hl, "num": num, "start": start, "pws": pws})
        logger.info(f'Processing AI Overview request for: "{q}"')
        outcome = await scraper.scrape_one(q.strip(), options)
        return outcome.to_dict()

    @app.post("/api/ai-overview/batch", response_model=BatchResponse)
    async def ai_overview_batch(body: BatchRequest):
        queries = [q.strip() for q in (body.queries or []) if q and q.strip()]
        if not queries:
            return _error(400, "Array of queries is required",
                          example={"queries": ["seo agency", "digital marketing"],
                                   "options": {"gl": "US", "hl": "en"}, "delay": 3000})
        if len(queries) > settings.max_batch_size:
            return _error(400, f"Maximum {settings.max_batch_size} queries allowed per batch request")
        if body.delay < 0:
            return _error(400, "delay must be a non-negative number of milliseconds")

        try:
            options = SearchOptions.from_mapping(body.options)
        except (TypeError, ValueError) as e:
            return _error(400, f"Invalid options: {e}")

        logger.info(f"Processing batch AI Overview request for {len(queries)} queries")
        outcomes = await scraper.scrape_batch(queries, options, delay=body.delay / 1000)
        return {
            "success": True,
            "totalQueries": len(queries),
            "results": [outcome.to_dict() for outcome in outcomes],
            "timestamp": utc_timestamp(),
        }

    return app
