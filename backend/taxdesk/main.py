"""FastAPI application factory."""

import asyncio
import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taxdesk.config import get_settings
from taxdesk.infrastructure.dependencies import get_session_events, get_tax_record_session
from taxdesk.infrastructure.logging.log_config import setup_logging
from taxdesk.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _initial_load() -> None:
    """Run the first load; store failures already end in the session error state."""
    try:
        await get_tax_record_session().load()
    except Exception:
        logger.exception("Initial load crashed")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, start the initial load."""
    settings = get_settings()
    setup_logging()

    load_task: asyncio.Task | None = None
    if settings.load_on_startup:
        # The API is served while the load runs; /session reports "loading".
        load_task = asyncio.create_task(_initial_load())

    yield

    # Shutdown
    if load_task is not None and not load_task.done():
        load_task.cancel()
        try:
            await load_task
        except asyncio.CancelledError:
            pass
    await get_session_events().shutdown()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "taxdesk.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
