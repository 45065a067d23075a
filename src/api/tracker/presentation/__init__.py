"""Tracker presentation layer - aggregate-based organization.

Organizes presentation concerns by domain aggregate (users, tasks) following
vertical slicing and DDD principles. Each aggregate package contains its own
routes and models.
"""

from __future__ import annotations

from fastapi import APIRouter

from tracker.presentation import tasks, users

router = APIRouter(
    prefix="/api",
)

# Include all aggregate routers
router.include_router(users.router)
router.include_router(tasks.router)

__all__ = ["router"]
