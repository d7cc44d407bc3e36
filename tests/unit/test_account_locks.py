"""
Unit tests for AccountLockRegistry.
"""

import threading

import pytest

from tradesim.services import AccountLockRegistry
from tradesim.core.exceptions import LockTimeoutError


class TestAccountLockRegistry:
    def test_acquire_and_release(self):
        locks = AccountLockRegistry(timeout_seconds=0.1)

        with locks.acquire("acct-1"):
            assert locks.is_locked("acct-1")

        assert not locks.is_locked("acct-1")

    def test_same_account_times_out(self):
        """
        GIVEN a thread holding account acct-1
        WHEN another thread tries to acquire it with a short timeout
        THEN LockTimeoutError is raised in that thread
        """
        locks = AccountLockRegistry(timeout_seconds=0.05)
        errors = []

        def contender():
            try:
                with locks.acquire("acct-1"):
                    pass
            except LockTimeoutError as e:
                errors.append(e)

        with locks.acquire("acct-1"):
            t = threading.Thread(target=contender)
            t.start()
            t.join(timeout=5)

        assert len(errors) == 1
        assert errors[0].code == "TIMEOUT"
        assert errors[0].retryable is True

    def test_other_accounts_do_not_contend(self):
        locks = AccountLockRegistry(timeout_seconds=0.05)

        with locks.acquire("acct-1"):
            with locks.acquire("acct-2"):
                assert locks.is_locked("acct-2")

    def test_lock_released_on_exception(self):
        locks = AccountLockRegistry(timeout_seconds=0.05)

        with pytest.raises(ValueError):
            with locks.acquire("acct-1"):
                raise ValueError("boom")

        with locks.acquire("acct-1"):
            pass

    def test_explicit_timeout_overrides_default(self):
        locks = AccountLockRegistry(timeout_seconds=60)
        errors = []

        def contender():
            try:
                with locks.acquire("acct-1", timeout=0.01):
                    pass
            except LockTimeoutError as e:
                errors.append(e)

        with locks.acquire("acct-1"):
            t = threading.Thread(target=contender)
            t.start()
            t.join(timeout=5)

        assert len(errors) == 1
