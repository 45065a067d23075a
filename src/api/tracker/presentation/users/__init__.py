"""User routes and models."""

from tracker.presentation.users.routes import router

__all__ = ["router"]
