from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from ..core.config import MAX_PENDING_EXTERNAL_LINKS
from ..core.deep_links import is_valid_link


class PendingLinkQueue:
    def __init__(
        self,
        *,
        capacity: int = MAX_PENDING_EXTERNAL_LINKS,
        lock_timeout_seconds: float = 1.0,
        lock: threading.Lock | None = None,
    ) -> None:
        self._capacity = max(1, int(capacity))
        self._lock_timeout_seconds = max(0.0, float(lock_timeout_seconds))
        self._lock = lock if lock is not None else threading.Lock()
        self._pending: list[str] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def size(self) -> int:
        with self._locked() as acquired:
            if not acquired:
                return 0
            return len(self._pending)

    @contextmanager
    def _locked(self) -> Iterator[bool]:
        acquired = self._lock.acquire(timeout=self._lock_timeout_seconds)
        try:
            yield acquired
        finally:
            if acquired:
                self._lock.release()

    def enqueue(self, urls: Iterable[str] | None) -> None:
        if not urls:
            return
        try:
            with self._locked() as acquired:
                if not acquired:
                    return
                for url in urls:
                    if not is_valid_link(url):
                        continue
                    if url in self._pending:
                        continue
                    self._pending.append(url)
                    overflow = len(self._pending) - self._capacity
                    if overflow > 0:
                        del self._pending[:overflow]
        except Exception:
            return

    def take_all(self) -> list[str]:
        try:
            with self._locked() as acquired:
                if not acquired:
                    return []
                taken, self._pending = self._pending, []
                return taken
        except Exception:
            return []

    def snapshot(self) -> list[str]:
        with self._locked() as acquired:
            if not acquired:
                return []
            return list(self._pending)
