"""Per-path FIFO locks for collection files.

Every read and write against a collection file goes through one of these so
that Flask's request threads cannot interleave operations on the same file.
Only protects within a single process.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator


class _PathQueue:
    """Ticket queue for one path: tickets are served in the order issued."""

    __slots__ = ("cond", "next_ticket", "serving")

    def __init__(self, guard: threading.Lock):
        self.cond = threading.Condition(guard)
        self.next_ticket = 0
        self.serving = 0

    @property
    def pending(self) -> int:
        return self.next_ticket - self.serving


class PathLockTable:
    def __init__(self):
        self._guard = threading.Lock()
        self._queues: Dict[str, _PathQueue] = {}

    @staticmethod
    def _key(path) -> str:
        return str(Path(path).absolute())

    def acquire(self, path) -> None:
        key = self._key(path)
        with self._guard:
            queue = self._queues.get(key)
            if queue is None:
                queue = self._queues[key] = _PathQueue(self._guard)
            ticket = queue.next_ticket
            queue.next_ticket += 1
            while queue.serving != ticket:
                queue.cond.wait()

    def release(self, path) -> None:
        key = self._key(path)
        with self._guard:
            queue = self._queues.get(key)
            if queue is None or queue.pending == 0:
                raise RuntimeError(f"lock for {key} is not held")
            queue.serving += 1
            if queue.pending == 0:
                del self._queues[key]
            else:
                queue.cond.notify_all()

    @contextmanager
    def locked(self, path) -> Iterator[None]:
        self.acquire(path)
        try:
            yield
        finally:
            self.release(path)

    def pending(self, path) -> int:
        """Holder plus waiters currently queued for *path*."""
        with self._guard:
            queue = self._queues.get(self._key(path))
            return queue.pending if queue else 0

    def __len__(self) -> int:
        with self._guard:
            return len(self._queues)
