"""FastAPI application for the scenario API."""

import asyncio
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from app.container import Container
from app.errors import ScenarioError, StoreUnavailable
from etl import SnapshotRefresher
from settings import SNAPSHOT_REFRESH_INTERVAL
from web.api.errors import error_body, status_for
from web.http.routes import router


async def _refresh_loop(container: Container, interval: float) -> None:
    """Refresh snapshots in-process every ``interval`` seconds."""
    refresher = SnapshotRefresher(container.db)
    while True:
        try:
            report = await asyncio.to_thread(refresher.run)
            if not report.ok:
                logger.warning("Scheduled refresh: {} failed stage(s)", len(report.failures))
        except Exception as e:
            logger.warning("Snapshot refresh loop error: {}", e)
        await asyncio.sleep(interval)


def create_app(container: Container | None = None, refresh_interval: float = SNAPSHOT_REFRESH_INTERVAL) -> FastAPI:
    """Build the app. A container passed in is initialized but not closed by the app."""
    owns_container = container is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        c = (container or Container()).init()
        app.state.container = c
        task = asyncio.create_task(_refresh_loop(c, refresh_interval)) if refresh_interval > 0 else None
        logger.info("Scenario API started (snapshot refresh every {}s)", refresh_interval or "-")
        yield
        if task is not None:
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
        if owns_container:
            c.close()

    app = FastAPI(
        title="Scenario Discovery API",
        description="Search, trending and category endpoints for investment scenarios",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.include_router(router, prefix="/api")

    @app.exception_handler(ScenarioError)
    async def scenario_error_handler(request: Request, exc: ScenarioError) -> JSONResponse:
        if isinstance(exc, StoreUnavailable):
            logger.error("{} {}: {}", request.method, request.url.path, exc.message)
        else:
            logger.debug("{} {}: {}", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status_for(exc), content=error_body(exc), headers={"Cache-Control": "no-store"})

    return app
