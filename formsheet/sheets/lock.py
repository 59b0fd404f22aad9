from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from ..errors import LockTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 30.0

_registry_guard = threading.Lock()
_document_locks: dict[str, "DocumentLock"] = {}


class DocumentLock:
    def __init__(self, timeout: float = DEFAULT_LOCK_TIMEOUT) -> None:
        self.timeout = timeout
        self._lock = threading.RLock()

    @contextmanager
    def hold(self, timeout: float | None = None) -> Iterator[None]:
        wait = self.timeout if timeout is None else timeout
        if not self._lock.acquire(timeout=wait):
            logger.error("Timed out after %.1fs waiting for the document lock.", wait)
            raise LockTimeoutError(f"Could not obtain the document lock within {wait:g} seconds.")
        try:
            yield
        finally:
            self._lock.release()


def document_lock(document_id: str, timeout: float = DEFAULT_LOCK_TIMEOUT) -> DocumentLock:
    """Process-wide lock shared by every writer of ``document_id``.

    The most recent caller's ``timeout`` becomes the default wait for all holders.
    """
    with _registry_guard:
        lock = _document_locks.get(document_id)
        if lock is None:
            lock = DocumentLock(timeout=timeout)
            _document_locks[document_id] = lock
        else:
            lock.timeout = timeout
        return lock
