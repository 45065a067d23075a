"""FastAPI dependencies for the Tracker bounded context.

The container is built during application startup and kept on
``app.state.tracker``; these providers hand its services to route handlers.
"""

from fastapi import Request

from tracker.application.services import TaskService, UserService
from tracker.container import TrackerContainer


def get_tracker_container(request: Request) -> TrackerContainer:
    """Get the TrackerContainer built at startup.

    Raises:
        RuntimeError: If the application lifespan has not run
    """
    container = getattr(request.app.state, "tracker", None)
    if container is None:
        raise RuntimeError(
            "Tracker container not initialized. Ensure app startup completed successfully."
        )
    return container


def get_user_service(request: Request) -> UserService:
    """Get the shared UserService instance."""
    return get_tracker_container(request).user_service


def get_task_service(request: Request) -> TaskService:
    """Get the shared TaskService instance."""
    return get_tracker_container(request).task_service
