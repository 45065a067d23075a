"""Concurrency tests for Tracker services.

These drive the real services from a thread pool and check the invariants
that must hold however the threads interleave.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from shared_kernel.exceptions import CoreError
from tracker.ports.exceptions import DuplicateUsernameError, UserNotFoundError

pytestmark = pytest.mark.concurrency


def outcome(call, *args):
    try:
        return call(*args)
    except CoreError as e:
        return e


class TestUniqueness:
    """Concurrent registrations."""

    def test_same_username_created_once(self, container, make_user):
        users = container.user_service
        candidates = [
            make_user("alice", email=f"alice{i}@example.com") for i in range(20)
        ]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda c: outcome(users.create_user, c), candidates))

        created = [r for r in results if not isinstance(r, Exception)]
        assert len(created) == 1
        assert all(
            isinstance(r, DuplicateUsernameError)
            for r in results
            if isinstance(r, Exception)
        )
        assert users.get_user_count() == 1

    def test_ids_unique_under_contention(self, container, make_user):
        users = container.user_service

        with ThreadPoolExecutor(max_workers=8) as pool:
            created = list(
                pool.map(lambda i: users.create_user(make_user(f"user{i:03d}")), range(50))
            )

        assert sorted(user.id.value for user in created) == list(range(1, 51))


class TestCascadeVersusCreate:
    """A user deletion racing task creation must never orphan a task."""

    def test_no_orphan_tasks(self, container, make_user, make_task):
        users = container.user_service
        tasks = container.task_service

        for round_number in range(10):
            owner = users.create_user(make_user(f"owner{round_number}"))

            with ThreadPoolExecutor(max_workers=6) as pool:
                creations = [
                    pool.submit(outcome, tasks.create_task, make_task(owner.id))
                    for _ in range(10)
                ]
                deletion = pool.submit(users.delete_user, owner.id)
                results = [future.result() for future in creations]
                deletion.result()

            assert all(
                not isinstance(r, Exception) or isinstance(r, UserNotFoundError)
                for r in results
            )
            orphans = [
                task
                for task in container.task_repository.find_all()
                if not container.user_repository.exists_by_id(task.owner_id)
            ]
            assert orphans == []

        assert len(container.owner_locks) == 0


class TestOwnerMoveVersusDelete:
    """Moving tasks to a user while that user is deleted must never orphan a task."""

    def test_no_orphan_tasks(self, container, make_user, make_task):
        users = container.user_service
        tasks = container.task_service

        for round_number in range(10):
            source = users.create_user(make_user(f"source{round_number}"))
            target = users.create_user(make_user(f"target{round_number}"))
            moved = [tasks.create_task(make_task(source.id)) for _ in range(10)]

            with ThreadPoolExecutor(max_workers=6) as pool:
                updates = [
                    pool.submit(
                        outcome, tasks.update_task, task.id, make_task(target.id)
                    )
                    for task in moved
                ]
                deletion = pool.submit(users.delete_user, target.id)
                results = [future.result() for future in updates]
                deletion.result()

            assert all(
                not isinstance(r, Exception) or isinstance(r, UserNotFoundError)
                for r in results
            )
            remaining = container.task_repository.find_all()
            assert all(task.owner_id == source.id for task in remaining)
            assert len(remaining) == sum(
                isinstance(r, UserNotFoundError) for r in results
            )
            users.delete_user(source.id)

        assert container.task_repository.count() == 0
        assert len(container.owner_locks) == 0


class TestTaskUpdates:
    """Concurrent updates to one task."""

    def test_status_updates_all_land(self, container, make_user, make_task):
        owner = container.user_service.create_user(make_user())
        task = container.task_service.create_task(make_task(owner.id))
        statuses = ["TODO", "IN_PROGRESS", "COMPLETED"] * 10

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(
                pool.map(
                    lambda s: container.task_service.update_task_status(task.id, s),
                    statuses,
                )
            )

        final = container.task_service.get_task_by_id(task.id)
        assert final.status.value in statuses
        assert final.created_at == task.created_at
        assert container.task_service.get_total_task_count() == 1
