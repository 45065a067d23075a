"""Shared fixtures for Tracker unit tests."""

from __future__ import annotations

import itertools
from datetime import UTC, datetime, timedelta

import pytest

from tracker.container import TrackerContainer, build_container
from tracker.domain.aggregates import Task, User
from tracker.domain.value_objects import UserId

BASE_TIME = datetime(2025, 1, 1, 9, 0, tzinfo=UTC)


class TickingClock:
    """Clock advancing one second on every reading."""

    def __init__(self, start: datetime = BASE_TIME):
        self._ticks = itertools.count()
        self._start = start

    def __call__(self) -> datetime:
        return self._start + timedelta(seconds=next(self._ticks))


def build_user(
    username: str = "alice",
    email: str | None = None,
    first_name: str = "Alice",
    last_name: str = "Liddell",
) -> User:
    """Build a valid user candidate."""
    return User.new(
        username=username,
        email=email or f"{username}@example.com",
        first_name=first_name,
        last_name=last_name,
    )


def build_task(
    owner_id: UserId | None,
    title: str = "Write report",
    description: str = "Quarterly numbers",
    status=None,
    priority=None,
) -> Task:
    """Build a valid task candidate."""
    return Task.new(
        title=title,
        description=description,
        owner_id=owner_id,
        status=status,
        priority=priority,
    )


@pytest.fixture
def clock() -> TickingClock:
    """Provide a deterministic, strictly increasing clock."""
    return TickingClock()


@pytest.fixture
def container(clock: TickingClock) -> TrackerContainer:
    """Provide a fully wired, empty Tracker container."""
    return build_container(clock=clock)


@pytest.fixture
def make_user():
    """Provide the user candidate factory."""
    return build_user


@pytest.fixture
def make_task():
    """Provide the task candidate factory."""
    return build_task
