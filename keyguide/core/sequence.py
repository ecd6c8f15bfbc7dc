"""Word-level practice: step through target keys without checking input."""

from __future__ import annotations

from typing import List, Optional, Sequence


class SequenceAdvancer:
    """Index-based progress over an ordered list of target keys.

    Unlike :class:`~keyguide.core.highlight.NextKeyTracker` it never compares
    input against the target; the caller decides when to :meth:`advance`.
    """

    def __init__(self, target_keys: Sequence[str]) -> None:
        self._keys: List[str] = list(target_keys)
        self._index = 0

    @property
    def target_keys(self) -> List[str]:
        return list(self._keys)

    @property
    def current_index(self) -> int:
        """Index of the highlighted key; equals ``len(target_keys)`` once complete."""
        return self._index

    @property
    def highlighted_key(self) -> Optional[str]:
        """Key at the current index, or ``None`` when complete."""
        if self._index < len(self._keys):
            return self._keys[self._index]
        return None

    @property
    def is_complete(self) -> bool:
        return self._index >= len(self._keys)

    def advance(self) -> None:
        """Move to the next key, stopping at the end of the list."""
        self._index = min(self._index + 1, len(self._keys))

    def reset(self) -> None:
        self._index = 0
