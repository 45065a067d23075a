"""Unit tests for KeyedLocks."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from shared_kernel.concurrency import KeyedLocks
from tracker.domain.value_objects import UserId


class TestRegistryLifetime:
    """Tests that entries live only while a key is held."""

    def test_empty_after_hold_exits(self):
        locks = KeyedLocks()
        with locks.hold(1, 2):
            assert len(locks) == 2
        assert len(locks) == 0

    def test_skips_none_and_duplicates(self):
        locks = KeyedLocks()
        with locks.hold(None, 3, 3):
            assert len(locks) == 1
        assert len(locks) == 0

    def test_empty_after_exception(self):
        locks = KeyedLocks()
        with pytest.raises(RuntimeError):
            with locks.hold(1):
                raise RuntimeError("boom")
        assert len(locks) == 0

    def test_many_distinct_keys_do_not_accumulate(self):
        locks = KeyedLocks()
        for key in range(500):
            with locks.hold(UserId(key + 1)):
                pass
        assert len(locks) == 0

    def test_entry_kept_while_another_caller_waits(self):
        locks = KeyedLocks()
        waiting = threading.Event()
        entered = threading.Event()

        def contender():
            waiting.set()
            with locks.hold("owner"):
                entered.set()

        with ThreadPoolExecutor(max_workers=1) as pool:
            with locks.hold("owner"):
                future = pool.submit(contender)
                waiting.wait(timeout=5)
                time.sleep(0.01)
                assert not entered.is_set()
            future.result(timeout=5)

        assert entered.is_set()
        assert len(locks) == 0


class TestHold:
    """Tests for hold."""

    def test_is_reentrant(self):
        locks = KeyedLocks()
        with locks.hold(1):
            with locks.hold(1):
                assert len(locks) == 1
            assert len(locks) == 1
        assert len(locks) == 0

    def test_released_after_exception(self):
        locks = KeyedLocks()
        with pytest.raises(RuntimeError):
            with locks.hold(1):
                raise RuntimeError("boom")

        def reenter():
            with locks.hold(1):
                return True

        with ThreadPoolExecutor(max_workers=1) as pool:
            assert pool.submit(reenter).result(timeout=5) is True

    def test_orders_user_ids_numerically(self):
        locks = KeyedLocks()
        order = []
        original = locks._checkout

        def recording_checkout(key):
            order.append(key)
            return original(key)

        locks._checkout = recording_checkout
        with locks.hold(UserId(10), UserId(9)):
            pass

        assert order == [UserId(9), UserId(10)]

    def test_serializes_holders_of_the_same_key(self):
        locks = KeyedLocks()
        inside = 0
        peak = 0
        guard = threading.Lock()

        def work(_):
            nonlocal inside, peak
            with locks.hold("owner"):
                with guard:
                    inside += 1
                    peak = max(peak, inside)
                time.sleep(0.001)
                with guard:
                    inside -= 1

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(work, range(50)))

        assert peak == 1
        assert len(locks) == 0

    def test_overlapping_key_sets_do_not_deadlock(self):
        locks = KeyedLocks()

        def forward(_):
            with locks.hold(1, 2):
                time.sleep(0.0005)

        def backward(_):
            with locks.hold(2, 1):
                time.sleep(0.0005)

        with ThreadPoolExecutor(max_workers=4) as pool:
            futures = [pool.submit(forward, i) for i in range(50)]
            futures += [pool.submit(backward, i) for i in range(50)]
            for future in futures:
                future.result(timeout=10)

        assert len(locks) == 0
