"""Domain-Oriented Observability for Tracker application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from tracker.application.observability.task_service_probe import (
    DefaultTaskServiceProbe,
    TaskServiceProbe,
)
from tracker.application.observability.user_service_probe import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)

__all__ = [
    "UserServiceProbe",
    "DefaultUserServiceProbe",
    "TaskServiceProbe",
    "DefaultTaskServiceProbe",
]
