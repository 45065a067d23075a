"""Per-key locking for multi-step operations on shared stores.

Store operations are atomic one key at a time. Operations that read one
aggregate and then write another (check an owner exists, then insert a task
for it) need a wider critical section; KeyedLocks provides it per aggregate
identity so unrelated owners never contend.
"""

from __future__ import annotations

import threading
from collections.abc import Hashable, Iterator
from contextlib import ExitStack, contextmanager


class _Entry:
    """A key's lock and the number of callers holding or waiting on it."""

    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.holders = 0


class KeyedLocks:
    """Registry handing out one re-entrant lock per key.

    Locks are re-entrant so an operation holding a key may call another
    operation that takes the same key (user deletion calling the bulk task
    delete for that owner). An entry lives only while some caller holds or
    waits on it, so keys taken from requests for owners that never existed
    do not accumulate.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[Hashable, _Entry] = {}

    def _checkout(self, key: Hashable) -> _Entry:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.holders += 1
            return entry

    def _checkin(self, key: Hashable, entry: _Entry) -> None:
        with self._guard:
            entry.holders -= 1
            if entry.holders == 0:
                del self._entries[key]

    @contextmanager
    def _holding(self, key: Hashable) -> Iterator[None]:
        entry = self._checkout(key)
        try:
            with entry.lock:
                yield
        finally:
            self._checkin(key, entry)

    @contextmanager
    def hold(self, *keys: Hashable | None) -> Iterator[None]:
        """Hold the locks of every given key for the duration of the block.

        None keys are skipped and duplicates collapse. Locks are taken in
        ascending key order so two callers holding overlapping key sets
        cannot deadlock; keys passed together must be mutually comparable.
        """
        unique = sorted({key for key in keys if key is not None})
        with ExitStack() as stack:
            for key in unique:
                stack.enter_context(self._holding(key))
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
