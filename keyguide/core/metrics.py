"""Accuracy and speed figures for a practice session."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

# Conventional word length used by WPM figures.
CHARS_PER_WORD = 5


@dataclass
class TaskResult:
    """Result of a single finished task."""

    accuracy: float
    wpm: float
    cpm: float
    errors: int


class TypingMetrics:
    """Running totals of key presses since the session started.

    Every press counts once: a correct press moves the learner forward, an
    incorrect one is an error. Rates are per minute of wall-clock time.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._started = clock()
        self.presses = 0
        self.correct = 0
        self.errors = 0

    @property
    def started(self) -> float:
        return self._started

    def add_task(self, correct: int, errors: int) -> TaskResult:
        """Fold a finished task into the totals and return its result."""
        self.presses += correct + errors
        self.correct += correct
        self.errors += errors
        attempts = correct + errors
        return TaskResult(
            accuracy=100.0 * correct / attempts if attempts else 0.0,
            wpm=self.net_wpm(),
            cpm=self.cpm(),
            errors=errors,
        )

    def minutes(self) -> float:
        return max((self._clock() - self._started) / 60.0, 1e-6)

    def accuracy(self) -> float:
        if not self.presses:
            return 0.0
        return 100.0 * self.correct / self.presses

    def cpm(self) -> float:
        return self.correct / self.minutes()

    def gross_wpm(self) -> float:
        return self.presses / CHARS_PER_WORD / self.minutes()

    def net_wpm(self) -> float:
        # each error costs one whole word
        penalised = self.presses - CHARS_PER_WORD * self.errors
        return max(0.0, penalised / CHARS_PER_WORD / self.minutes())
