"""Per-account mutual exclusion for ledger mutations."""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from tradesim.core.exceptions import LockTimeoutError

logger = logging.getLogger(__name__)


class AccountLockRegistry:
    """
    One lock per account, created on first use.

    Mutations of the same account are serialized; different accounts never
    contend. The registry itself is shared process-wide.
    """

    def __init__(self, timeout_seconds: float = 2.0):
        self._timeout = timeout_seconds
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    def _lock_for(self, account_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(account_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[account_id] = lock
            return lock

    @contextmanager
    def acquire(self, account_id: str, timeout: Optional[float] = None) -> Iterator[None]:
        """
        Hold the account's lock for the duration of the block.

        Raises LockTimeoutError if the lock is not acquired within the timeout.
        """
        wait = self._timeout if timeout is None else timeout
        lock = self._lock_for(account_id)
        if not lock.acquire(timeout=wait):
            logger.warning("Lock timeout on account %s after %.2fs", account_id, wait)
            raise LockTimeoutError(account_id, wait)
        try:
            yield
        finally:
            lock.release()

    def is_locked(self, account_id: str) -> bool:
        """Return True if some caller currently holds the account's lock."""
        return self._lock_for(account_id).locked()
