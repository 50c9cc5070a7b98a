"""
FastAPI application — main entry point.

Provides the feed query, manual refresh and health endpoints, and runs
the periodic refresh worker for the lifetime of the app.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from digest.core.config import get_config
from digest.core.primitives.fetchers.manager import FetcherManager
from digest.core.services import FeedQueryService
from digest.core.storage import FeedStore
from digest.workers.refresh_worker import load_worker_config, run_worker, setup_logging

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent


def _resolve_static_dir(configured: str | None) -> Path | None:
    if not configured:
        return None
    path = Path(configured)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path if path.is_dir() else None


def create_app(
    manager: FetcherManager | None = None,
    store: FeedStore | None = None,
    start_worker: bool = True,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        manager: Refresh orchestrator; built from config if None.
        store: Feed store; a new empty store if None.
        start_worker: Run the periodic refresh worker during the app lifespan.

    Returns:
        Configured FastAPI app.
    """
    store = store or (manager.store if manager else FeedStore())
    manager = manager or FetcherManager(store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan — start and stop the refresh worker."""
        shutdown_event = asyncio.Event()
        worker_task: asyncio.Task | None = None

        if start_worker:
            worker_config = load_worker_config()
            worker_task = asyncio.create_task(run_worker(worker_config, manager, shutdown_event))
            logger.info("Refresh worker started")

        yield

        logger.info("Shutting down...")
        shutdown_event.set()
        if worker_task is not None:
            await worker_task

    app = FastAPI(
        title="Tech Digest",
        description="Aggregated, time-windowed tech feed",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.manager = manager
    app.state.query = FeedQueryService(store)

    @app.get("/api/feed")
    async def read_feed(request: Request, source: str | None = None):
        """Read the current feed, optionally filtered by source tag."""
        page = request.app.state.query.read(source)
        return page.to_dict()

    @app.post("/api/refresh")
    async def refresh_feed(request: Request):
        """Run one refresh cycle synchronously."""
        try:
            await request.app.state.manager.refresh()
        except Exception as e:
            logger.error(f"Manual refresh failed: {e}", exc_info=True)
            return JSONResponse(status_code=500, content={"success": False, "error": str(e)})
        return {"success": True, "message": "Feed refreshed"}

    @app.get("/health")
    async def health(request: Request):
        """Liveness check."""
        snapshot = request.app.state.store.current()
        return {"status": "ok", "lastUpdated": snapshot.last_updated.isoformat()}

    static_dir = _resolve_static_dir((get_config().get("api") or {}).get("static_dir"))
    if static_dir is not None:
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


setup_logging(load_worker_config().log_level)

app = create_app()
