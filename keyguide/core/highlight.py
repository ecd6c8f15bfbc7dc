"""Next-key highlighting for guided typing.

The tracker follows a target text at a position owned by the caller (the
session driver moves it as the learner completes characters). It exposes the
key to highlight next and records which presses were correct.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional

from keyguide.core.scheduler import Scheduler

logger = logging.getLogger(__name__)

PRESS_CLEAR_MS = 200

CorrectKeyCallback = Callable[[str], None]
IncorrectKeyCallback = Callable[[str, str], None]


@dataclass
class HighlightState:
    """Snapshot of what the keyboard should show."""

    next_key: Optional[str] = None
    correct_keys: List[str] = field(default_factory=list)
    incorrect_keys: List[str] = field(default_factory=list)
    pressed_key: Optional[str] = None


def expected_key(target_text: str, position: int, case_sensitive: bool = False) -> Optional[str]:
    """Return the normalized character at *position*, or ``None`` past the end.

    The text is indexed by code point.
    """
    if 0 <= position < len(target_text):
        char = target_text[position]
        return char if case_sensitive else char.lower()
    return None


class NextKeyTracker:
    """Tracks the expected next key and the history of presses against it."""

    def __init__(
        self,
        target_text: str,
        scheduler: Scheduler,
        current_position: int = 0,
        case_sensitive: bool = False,
        on_correct_key: Optional[CorrectKeyCallback] = None,
        on_incorrect_key: Optional[IncorrectKeyCallback] = None,
        press_clear_ms: int = PRESS_CLEAR_MS,
    ) -> None:
        self._target_text = target_text
        self._position = current_position
        self._case_sensitive = case_sensitive
        self._scheduler = scheduler
        self._press_clear_ms = press_clear_ms
        self.on_correct_key = on_correct_key
        self.on_incorrect_key = on_incorrect_key
        self._state = HighlightState()
        self.recompute()

    # -- externally owned inputs ------------------------------------------

    @property
    def target_text(self) -> str:
        return self._target_text

    @property
    def current_position(self) -> int:
        return self._position

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    def set_target_text(self, text: str) -> None:
        if text != self._target_text:
            self._target_text = text
            self.recompute()

    def set_position(self, position: int) -> None:
        if position != self._position:
            self._position = position
            self.recompute()

    def set_case_sensitive(self, case_sensitive: bool) -> None:
        if case_sensitive != self._case_sensitive:
            self._case_sensitive = case_sensitive
            self.recompute()

    def recompute(self) -> None:
        """Derive ``next_key`` from the current text, position and case flag."""
        self._state.next_key = expected_key(self._target_text, self._position, self._case_sensitive)

    # -- state ------------------------------------------------------------

    @property
    def state(self) -> HighlightState:
        """Copy of the current highlight state."""
        return replace(
            self._state,
            correct_keys=list(self._state.correct_keys),
            incorrect_keys=list(self._state.incorrect_keys),
        )

    @property
    def next_key(self) -> Optional[str]:
        return self._state.next_key

    @property
    def pressed_key(self) -> Optional[str]:
        return self._state.pressed_key

    # -- operations -------------------------------------------------------

    def handle_key_press(self, key: str) -> Optional[bool]:
        """Check *key* against the expected key.

        Returns True for a correct press, False for a wrong one and ``None``
        when nothing is expected (finished or empty text).
        """
        expected = self._state.next_key
        if expected is None:
            return None

        normalized = key if self._case_sensitive else key.lower()

        self._state.pressed_key = key
        # Each press gets its own clear timer; an older one may clear a newer press.
        self._scheduler.call_later(self._press_clear_ms, self._clear_pressed)

        if normalized == expected:
            self._state.correct_keys.append(key)
            self._state.incorrect_keys = [k for k in self._state.incorrect_keys if k != key]
            logger.debug("Correct key %r at position %d", key, self._position)
            if self.on_correct_key is not None:
                self.on_correct_key(key)
            return True

        self._state.incorrect_keys.append(key)
        logger.debug("Incorrect key %r at position %d, expected %r", key, self._position, expected)
        if self.on_incorrect_key is not None:
            self.on_incorrect_key(key, expected)
        return False

    def reset(self) -> None:
        """Clear history and highlight. Text and position are left as they are."""
        self._state = HighlightState()

    def _clear_pressed(self) -> None:
        self._state.pressed_key = None
