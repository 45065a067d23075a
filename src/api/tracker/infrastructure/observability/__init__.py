"""Domain-Oriented Observability for Tracker infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from tracker.infrastructure.observability.repository_probe import (
    DefaultTaskRepositoryProbe,
    DefaultUserRepositoryProbe,
    TaskRepositoryProbe,
    UserRepositoryProbe,
)

__all__ = [
    "UserRepositoryProbe",
    "DefaultUserRepositoryProbe",
    "TaskRepositoryProbe",
    "DefaultTaskRepositoryProbe",
]
