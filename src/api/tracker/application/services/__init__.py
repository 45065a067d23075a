"""Application services for Tracker bounded context.

Application services orchestrate domain aggregates and repositories to
fulfill use cases. They are the "front door" to the Tracker context.
"""

from tracker.application.services.task_service import TaskService
from tracker.application.services.user_service import UserService

__all__ = [
    "TaskService",
    "UserService",
]
