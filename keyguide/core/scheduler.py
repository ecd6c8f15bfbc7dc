"""One-shot timers used by the highlight engines.

Engines never talk to an event loop directly. They receive a :class:`Scheduler`
and ask it for ``call_later(delay_ms, callback)``; the returned handle can be
cancelled. :class:`QtScheduler` runs timers on the Qt event loop,
:class:`ManualScheduler` runs them on a virtual clock advanced by the caller.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Callable, List, Optional, Protocol, Set, Tuple

from PySide6.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class TimerHandle(Protocol):
    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callback) -> TimerHandle: ...


# ---------------------------------------------------------------------------
# Qt event loop
# ---------------------------------------------------------------------------

class _QtTimerHandle:
    def __init__(self, owner: "QtScheduler", timer: QTimer) -> None:
        self._owner = owner
        self._timer = timer
        self._done = False

    @property
    def active(self) -> bool:
        return not self._done

    def cancel(self) -> None:
        if self._done:
            return
        self._done = True
        self._timer.stop()
        self._owner._release(self._timer)

    def _fired(self) -> None:
        self._done = True
        self._owner._release(self._timer)


class QtScheduler:
    """Schedules callbacks with single-shot ``QTimer`` objects.

    Requires a ``QCoreApplication`` (or ``QApplication``) and a running event
    loop for timers to fire.
    """

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent
        # Keep Python references so pending timers are not garbage-collected.
        self._timers: Set[QTimer] = set()

    def call_later(self, delay_ms: int, callback: Callback) -> _QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        handle = _QtTimerHandle(self, timer)

        def _fire() -> None:
            handle._fired()
            callback()

        timer.timeout.connect(_fire)
        self._timers.add(timer)
        timer.start(max(0, int(delay_ms)))
        return handle

    @property
    def pending(self) -> int:
        return len(self._timers)

    def _release(self, timer: QTimer) -> None:
        if timer in self._timers:
            self._timers.discard(timer)
            timer.deleteLater()


# ---------------------------------------------------------------------------
# Virtual clock
# ---------------------------------------------------------------------------

class _ManualTimerHandle:
    def __init__(self, deadline: int, callback: Callback) -> None:
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False
        self.fired = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic scheduler driven by :meth:`advance`.

    Timers fire in deadline order; timers sharing a deadline fire in the order
    they were scheduled. Callbacks may schedule further timers, which fire
    within the same :meth:`advance` call if they fall due before its end.
    """

    def __init__(self) -> None:
        self._now = 0
        self._seq = itertools.count()
        self._queue: List[Tuple[int, int, _ManualTimerHandle]] = []

    @property
    def now(self) -> int:
        """Virtual time in milliseconds."""
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if h.active)

    def call_later(self, delay_ms: int, callback: Callback) -> _ManualTimerHandle:
        handle = _ManualTimerHandle(self._now + max(0, int(delay_ms)), callback)
        heapq.heappush(self._queue, (handle.deadline, next(self._seq), handle))
        return handle

    def advance(self, ms: int) -> int:
        """Move the clock forward by *ms* and fire due timers. Returns fired count."""
        target = self._now + max(0, int(ms))
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            deadline, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = deadline
            handle.fired = True
            handle.callback()
            fired += 1
        self._now = target
        if fired:
            logger.debug("Fired %d timer(s), clock at %d ms", fired, self._now)
        return fired
