"""Timed, one-at-a-time disclosure of an ordered list of keys."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from keyguide.core.scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

REVEAL_DELAY_MS = 1000


@dataclass(frozen=True)
class RevealState:
    revealed_count: int
    total: int

    @property
    def is_complete(self) -> bool:
        return self.revealed_count >= self.total


class ProgressiveRevealer:
    """Reveals an ordered list of keys one at a time.

    A single one-shot timer is pending while keys remain hidden; when it fires
    one more key is revealed and the next timer is scheduled. The pending
    timer is cancelled by :meth:`reset` and :meth:`close`.
    """

    def __init__(
        self,
        keys: Sequence[str],
        scheduler: Scheduler,
        reveal_delay: int = REVEAL_DELAY_MS,
    ) -> None:
        self._keys: List[str] = list(keys)
        self._scheduler = scheduler
        self._reveal_delay = reveal_delay
        self._revealed = 0
        self._timer: Optional[TimerHandle] = None
        self._closed = False
        self._schedule_next()

    @property
    def keys(self) -> List[str]:
        return list(self._keys)

    @property
    def reveal_delay(self) -> int:
        return self._reveal_delay

    @property
    def revealed_count(self) -> int:
        return self._revealed

    @property
    def revealed_keys(self) -> List[str]:
        return self._keys[: self._revealed]

    @property
    def is_complete(self) -> bool:
        return self._revealed >= len(self._keys)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def state(self) -> RevealState:
        return RevealState(revealed_count=self._revealed, total=len(self._keys))

    def is_revealed(self, index: int) -> bool:
        return index < self._revealed

    def reset(self) -> None:
        """Hide every key again and restart the reveal chain."""
        self._cancel_timer()
        self._revealed = 0
        self._closed = False
        self._schedule_next()

    def close(self) -> None:
        """Stop revealing; call when the owning session ends."""
        self._cancel_timer()
        self._closed = True

    def _schedule_next(self) -> None:
        if self._closed or self.is_complete or self._timer is not None:
            return
        self._timer = self._scheduler.call_later(self._reveal_delay, self._on_timeout)

    def _on_timeout(self) -> None:
        self._timer = None
        if self._closed:
            return
        self._revealed += 1
        logger.debug("Revealed %d/%d keys", self._revealed, len(self._keys))
        self._schedule_next()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
