"""Ghost typing: a timed demonstration that types a session by itself."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from keyguide.core.scheduler import Scheduler, TimerHandle
from keyguide.core.session import PracticeSession

logger = logging.getLogger(__name__)


class GhostTypist:
    """Presses the expected key of *session* every ``1000 / speed`` ms."""

    def __init__(
        self,
        session: PracticeSession,
        scheduler: Scheduler,
        speed: float = 2.0,
        on_step: Optional[Callable[[str], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
    ) -> None:
        if speed <= 0:
            raise ValueError(f"speed must be positive, got {speed}")
        self._session = session
        self._scheduler = scheduler
        self._interval_ms = int(round(1000 / speed))
        self._on_step = on_step
        self._on_complete = on_complete
        self._timer: Optional[TimerHandle] = None
        self._playing = False
        self._finished = False

    @property
    def playing(self) -> bool:
        return self._playing

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    def start(self) -> None:
        """Begin or resume typing. Does nothing once the session has been typed."""
        if self._playing or self._finished:
            return
        self._playing = True
        self._timer = self._scheduler.call_later(self._interval_ms, self._step)

    def pause(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._playing = False

    def _step(self) -> None:
        self._timer = None
        key = self._session.next_char
        if key is not None:
            self._session.key_press(key)
            if self._on_step is not None:
                self._on_step(key)
        if self._session.is_complete():
            self._playing = False
            self._finished = True
            logger.info("Ghost typing finished")
            if self._on_complete is not None:
                self._on_complete()
            return
        self._timer = self._scheduler.call_later(self._interval_ms, self._step)
