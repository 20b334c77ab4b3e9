"""One-shot deferred callback scheduler shared by the hosts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from heapq import heappop, heappush

TaskCallback = Callable[[], None]


@dataclass(slots=True)
class _Task:
    task_id: int
    due_ms: int
    callback: TaskCallback


class Scheduler:
    """Millisecond-resolution one-shot scheduler.

    Callbacks run in due order; ties run in scheduling order. A callback
    may schedule further callbacks, which run on a later ``run_due`` call
    even when already due, so a self re-arming callback cannot spin.
    """

    def __init__(self) -> None:
        self._now_ms = 0
        self._next_task_id = 1
        self._queue: list[tuple[int, int, _Task]] = []

    @property
    def now_ms(self) -> int:
        return self._now_ms

    @property
    def queued_task_count(self) -> int:
        """Return count of pending callbacks."""
        return len(self._queue)

    @property
    def next_due_ms(self) -> int | None:
        """Due time of the earliest pending callback, if any."""
        if not self._queue:
            return None
        return self._queue[0][0]

    def call_later(self, now_ms: int, delay_seconds: float, callback: TaskCallback) -> int:
        """Schedule a one-shot callback ``delay_seconds`` after ``now_ms``."""
        if delay_seconds < 0.0:
            raise ValueError("delay_seconds must be >= 0")
        due_ms = now_ms + int(round(delay_seconds * 1000.0))
        task = _Task(task_id=self._next_task_id, due_ms=due_ms, callback=callback)
        self._next_task_id += 1
        heappush(self._queue, (task.due_ms, task.task_id, task))
        return task.task_id

    def run_due(self, now_ms: int) -> int:
        """Run callbacks due at or before ``now_ms`` and return how many ran."""
        if now_ms < self._now_ms:
            raise ValueError("now_ms cannot move backwards")
        self._now_ms = now_ms
        horizon = self._next_task_id
        executed = 0
        deferred: list[tuple[int, int, _Task]] = []
        while self._queue and self._queue[0][0] <= now_ms:
            entry = heappop(self._queue)
            if entry[1] >= horizon:
                deferred.append(entry)
                continue
            entry[2].callback()
            executed += 1
        for entry in deferred:
            heappush(self._queue, entry)
        return executed

    def clear(self) -> None:
        """Drop every pending callback."""
        self._queue.clear()
