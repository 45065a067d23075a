"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from tracker.container import build_container
from tracker.presentation import router as tracker_router


@asynccontextmanager
async def cloudnova_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration from settings
    - Construction of the in-memory Tracker container (state is lost on
      shutdown)
    """
    configure_logging(get_settings().log_level)
    app.state.tracker = build_container()

    yield

    app.state.tracker = None


app = FastAPI(
    title=get_settings().app_name,
    description="Users and the tasks they own, kept in memory",
    version=__version__,
    debug=get_settings().debug,
    lifespan=cloudnova_lifespan,
)

# Include Tracker bounded context routes
app.include_router(tracker_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
