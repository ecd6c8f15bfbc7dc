"""Practice session: runs the highlight engines over a list of tasks."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from keyguide.core.drills import Drill
from keyguide.core.highlight import (
    CorrectKeyCallback,
    HighlightState,
    IncorrectKeyCallback,
    NextKeyTracker,
)
from keyguide.core.metrics import TaskResult, TypingMetrics
from keyguide.core.reveal import ProgressiveRevealer
from keyguide.core.scheduler import Scheduler
from keyguide.core.sequence import SequenceAdvancer
from keyguide.core.settings import HighlightSettings
from keyguide.core.zones import Zone, ZoneClassifier

logger = logging.getLogger(__name__)

TaskCompleteCallback = Callable[[TaskResult], None]


class PracticeSession:
    """Drives the highlight engines through a list of practice tasks.

    A :class:`SequenceAdvancer` over the tasks tracks the current one. Inside
    a task the session owns the position: every correct key moves it forward
    by one and the zone of the new expected key is highlighted. A task is
    finished once its last character is typed; empty tasks finish at once.
    """

    def __init__(
        self,
        tasks: Sequence[str],
        scheduler: Scheduler,
        settings: Optional[HighlightSettings] = None,
        start_index: int = 0,
        on_correct_key: Optional[CorrectKeyCallback] = None,
        on_incorrect_key: Optional[IncorrectKeyCallback] = None,
        on_task_complete: Optional[TaskCompleteCallback] = None,
    ) -> None:
        self._tasks = list(tasks)
        self._scheduler = scheduler
        self._settings = settings or HighlightSettings()
        self._on_correct_key = on_correct_key
        self._on_incorrect_key = on_incorrect_key
        self._on_task_complete = on_task_complete

        self._advancer = SequenceAdvancer(self._tasks)
        for _ in range(start_index):
            self._advancer.advance()
        self._zones = ZoneClassifier()
        self._tracker: Optional[NextKeyTracker] = None
        self._revealer: Optional[ProgressiveRevealer] = None
        self._results: List[TaskResult] = []
        self._metrics = TypingMetrics()
        self._task_correct = 0
        self._task_errors = 0

        self._load_task()

    @classmethod
    def from_drill(
        cls,
        drill: Drill,
        scheduler: Scheduler,
        settings: Optional[HighlightSettings] = None,
        **kwargs,
    ) -> "PracticeSession":
        """Start a session over a drill, one task per drill step."""
        return cls(drill.practice_tasks(), scheduler, settings=settings, **kwargs)

    # -- properties -------------------------------------------------------

    @property
    def index(self) -> int:
        """Index of the current task (0-based)."""
        return self._advancer.current_index

    @property
    def total_tasks(self) -> int:
        return len(self._tasks)

    @property
    def start_time(self) -> float:
        return self._metrics.started

    @property
    def settings(self) -> HighlightSettings:
        return self._settings

    @property
    def results(self) -> List[TaskResult]:
        return list(self._results)

    @property
    def metrics(self) -> TypingMetrics:
        return self._metrics

    @property
    def total_correct(self) -> int:
        return self._metrics.correct

    @property
    def tracker(self) -> Optional[NextKeyTracker]:
        return self._tracker

    @property
    def revealer(self) -> Optional[ProgressiveRevealer]:
        return self._revealer

    @property
    def active_zone(self) -> Optional[Zone]:
        return self._zones.active_zone

    @property
    def position(self) -> int:
        """Position inside the current task."""
        return self._tracker.current_position if self._tracker is not None else 0

    @property
    def highlight_state(self) -> HighlightState:
        if self._tracker is None:
            return HighlightState()
        return self._tracker.state

    @property
    def next_char(self) -> Optional[str]:
        """Character expected next, as written in the task (not case-normalized)."""
        if self._tracker is None:
            return None
        text = self._tracker.target_text
        pos = self._tracker.current_position
        return text[pos] if pos < len(text) else None

    def current_task(self) -> Optional[str]:
        return self._advancer.highlighted_key

    def is_complete(self) -> bool:
        return self._advancer.is_complete

    # -- input ------------------------------------------------------------

    def key_press(self, key: str) -> Optional[bool]:
        """Route a key press into the current task.

        Returns True/False for a correct/incorrect key and ``None`` once the
        session is complete.
        """
        if self._tracker is None:
            return None
        outcome = self._tracker.handle_key_press(key)
        if outcome is None:
            return None
        if outcome:
            self._task_correct += 1
            self._tracker.set_position(self._tracker.current_position + 1)
            if self._tracker.next_key is None:
                self._finish_task()
            else:
                self._zones.highlight_zone(self._tracker.next_key)
        else:
            self._task_errors += 1
        return outcome

    def close(self) -> None:
        """Release timers held by the session."""
        if self._revealer is not None:
            self._revealer.close()

    # -- task lifecycle ---------------------------------------------------

    def _load_task(self) -> None:
        self.close()
        self._revealer = None

        while True:
            self._task_correct = 0
            self._task_errors = 0
            text = self._advancer.highlighted_key
            if text is None:
                self._tracker = None
                self._zones.clear_zone()
                logger.info("Session complete: %d tasks", len(self._results))
                return
            if text:
                break
            # nothing to type
            self._record_result()
            self._advancer.advance()

        self._tracker = NextKeyTracker(
            text,
            self._scheduler,
            case_sensitive=self._settings.case_sensitive,
            on_correct_key=self._on_correct_key,
            on_incorrect_key=self._on_incorrect_key,
            press_clear_ms=self._settings.press_clear_ms,
        )
        if self._settings.progressive_reveal:
            self._revealer = ProgressiveRevealer(
                list(text), self._scheduler, reveal_delay=self._settings.reveal_delay_ms
            )
        self._zones.highlight_zone(self._tracker.next_key)

    def _finish_task(self) -> None:
        self._record_result()
        self._advancer.advance()
        self._load_task()

    def _record_result(self) -> None:
        result = self._metrics.add_task(self._task_correct, self._task_errors)
        self._results.append(result)
        logger.info(
            "Task %d/%d done: accuracy %.1f%%, %d errors",
            self._advancer.current_index + 1,
            len(self._tasks),
            result.accuracy,
            result.errors,
        )
        if self._on_task_complete is not None:
            self._on_task_complete(result)

    # -- aggregates -------------------------------------------------------

    def aggregate_accuracy(self) -> float:
        """Correct presses as a percentage of all presses in finished tasks."""
        return self._metrics.accuracy()

    def aggregate_cpm(self) -> float:
        return self._metrics.cpm()

    def aggregate_wpm(self) -> float:
        """Net WPM; every error costs a word."""
        return self._metrics.net_wpm()

    def aggregate_gross_wpm(self) -> float:
        return self._metrics.gross_wpm()

    def aggregate_errors(self) -> int:
        return self._metrics.errors
