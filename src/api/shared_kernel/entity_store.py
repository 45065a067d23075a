"""Thread-safe in-memory keyed storage for aggregates.

The store is the only place where identities are allocated. Allocation and
slot insertion happen under the same lock, so an identity is never observed
before its value is stored and is never handed out twice.

This is part of the Shared Kernel - every repository builds on it.
"""

from __future__ import annotations

import itertools
import threading
from collections.abc import Callable, Hashable
from datetime import UTC, datetime
from typing import Generic, Protocol, Self, TypeVar

from shared_kernel.exceptions import InvalidArgumentError, NotFoundError


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class StoredEntity(Protocol):
    """Shape an aggregate must have to be kept in an EntityStore.

    Aggregates are immutable; the store stamps identity and timestamps by
    asking the aggregate for a modified copy.
    """

    @property
    def id(self) -> Hashable | None:
        """Identity, or None for a candidate that was never stored."""
        ...

    @property
    def created_at(self) -> datetime | None:
        """Creation timestamp stamped by the store."""
        ...

    def with_identity(self, entity_id: Hashable, created_at: datetime) -> Self:
        """Return a copy carrying the given identity and creation time."""
        ...

    def with_timestamps(
        self, created_at: datetime | None, updated_at: datetime
    ) -> Self:
        """Return a copy carrying the given timestamps."""
        ...


K = TypeVar("K", bound=Hashable)
E = TypeVar("E", bound=StoredEntity)


class EntityStore(Generic[K, E]):
    """Keyed collection with monotonic identity allocation.

    Single-key operations are linearizable: every read and write runs under
    one re-entrant lock. ``list()`` returns a snapshot; because identities
    only increase and updates replace values in place, the snapshot is in
    ascending identity order.

    Args:
        entity_name: Entity kind used in error payloads (e.g. "user")
        id_factory: Wraps an allocated integer into the store's key type
        clock: Source of timestamps (defaults to UTC now)
        first_id: First integer handed to ``id_factory``
    """

    def __init__(
        self,
        entity_name: str,
        id_factory: Callable[[int], K],
        clock: Callable[[], datetime] | None = None,
        first_id: int = 1,
    ) -> None:
        if first_id < 1:
            raise InvalidArgumentError("first_id must be a positive number", "first_id")
        self._entity_name = entity_name
        self._id_factory = id_factory
        self._clock = clock or utc_now
        self._sequence = itertools.count(first_id)
        self._items: dict[K, E] = {}
        self._lock = threading.RLock()

    @property
    def entity_name(self) -> str:
        """Entity kind this store holds."""
        return self._entity_name

    def insert(self, value: E) -> E:
        """Allocate an identity for ``value`` and store it.

        Args:
            value: Aggregate to store; its id is ignored unless it collides

        Returns:
            The stored aggregate carrying its new identity and timestamps

        Raises:
            InvalidArgumentError: If ``value`` carries an id already stored
        """
        with self._lock:
            if value.id is not None and value.id in self._items:
                raise InvalidArgumentError(
                    f"{self._entity_name.capitalize()} with id {value.id} already exists",
                    field="id",
                )
            entity_id = self._id_factory(next(self._sequence))
            stored = value.with_identity(entity_id, self._clock())
            self._items[entity_id] = stored
            return stored

    def update(self, value: E) -> E:
        """Replace a stored aggregate wholesale.

        The stored creation time is kept; the update time is refreshed.

        Raises:
            NotFoundError: If ``value.id`` is not stored
        """
        with self._lock:
            current = self._items.get(value.id) if value.id is not None else None
            if current is None:
                raise NotFoundError(self._entity_name, "id", value.id)
            stored = value.with_timestamps(
                created_at=current.created_at,
                updated_at=self._clock(),
            )
            self._items[value.id] = stored
            return stored

    def remove(self, entity_id: K) -> bool:
        """Remove the aggregate with ``entity_id``; True if one was removed."""
        with self._lock:
            return self._items.pop(entity_id, None) is not None

    def get(self, entity_id: K | None) -> E | None:
        """Return the aggregate with ``entity_id``, or None."""
        if entity_id is None:
            return None
        with self._lock:
            return self._items.get(entity_id)

    def exists(self, entity_id: K | None) -> bool:
        """Check whether an aggregate with ``entity_id`` is stored."""
        if entity_id is None:
            return False
        with self._lock:
            return entity_id in self._items

    def list(self) -> list[E]:
        """Return a snapshot of every stored aggregate."""
        with self._lock:
            return list(self._items.values())

    def count(self) -> int:
        """Return the number of stored aggregates."""
        with self._lock:
            return len(self._items)

    def remove_where(self, predicate: Callable[[E], bool]) -> int:
        """Remove every aggregate matching ``predicate``.

        Returns:
            Number of aggregates removed
        """
        with self._lock:
            doomed = [key for key, value in self._items.items() if predicate(value)]
            for key in doomed:
                del self._items[key]
            return len(doomed)

    def clear(self) -> None:
        """Drop every aggregate. The identity sequence is not reset."""
        with self._lock:
            self._items.clear()
