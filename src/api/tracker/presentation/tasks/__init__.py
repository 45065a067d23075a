"""Task routes and models."""

from tracker.presentation.tasks.routes import router

__all__ = ["router"]
