"""Keyboard zone classification for coarse-grained highlighting.

A zone is either one of the three letter rows of a QWERTY keyboard or the hand
that types a letter. Row membership always wins over the hand table, so ``a``
is reported as ``home`` and never as ``left``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, FrozenSet, Optional

logger = logging.getLogger(__name__)


class Zone(str, Enum):
    """Named keyboard regions."""

    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    TOP = "top"
    BOTTOM = "bottom"


HOME_ROW_KEYS: FrozenSet[str] = frozenset("asdfjkl;")
TOP_ROW_KEYS: FrozenSet[str] = frozenset("qwertyuiop")
BOTTOM_ROW_KEYS: FrozenSet[str] = frozenset("zxcvbnm")

HAND_ZONES: Dict[str, Zone] = {
    **{key: Zone.LEFT for key in "qwertasdfgzxcvb"},
    **{key: Zone.RIGHT for key in "yuiophjklnm"},
}

# Checked in order; first match wins.
_ROW_ZONES = (
    (Zone.HOME, HOME_ROW_KEYS),
    (Zone.TOP, TOP_ROW_KEYS),
    (Zone.BOTTOM, BOTTOM_ROW_KEYS),
)


def classify_key(key: str) -> Optional[Zone]:
    """Return the zone of *key*, or ``None`` for keys outside every table."""
    lower = key.lower()
    for zone, keys in _ROW_ZONES:
        if lower in keys:
            return zone
    return HAND_ZONES.get(lower)


class ZoneClassifier:
    """Holds the currently highlighted zone for the rendering layer."""

    def __init__(self) -> None:
        self._active_zone: Optional[Zone] = None

    @property
    def active_zone(self) -> Optional[Zone]:
        """Zone currently highlighted, or ``None``."""
        return self._active_zone

    def highlight_zone(self, key: str) -> Optional[Zone]:
        """Highlight the zone containing *key* and return it."""
        self._active_zone = classify_key(key)
        logger.debug("Zone for %r: %s", key, self._active_zone)
        return self._active_zone

    def clear_zone(self) -> None:
        self._active_zone = None

    @staticmethod
    def is_key_in_zone(key: str, zone: Optional[Zone]) -> bool:
        """Return True if *key* belongs to *zone*.

        Row zones test row membership; hand zones test the hand table. A key
        can therefore be in both ``home`` and ``left`` at once.
        """
        lower = key.lower()
        if zone == Zone.HOME:
            return lower in HOME_ROW_KEYS
        if zone == Zone.TOP:
            return lower in TOP_ROW_KEYS
        if zone == Zone.BOTTOM:
            return lower in BOTTOM_ROW_KEYS
        if zone in (Zone.LEFT, Zone.RIGHT):
            return HAND_ZONES.get(lower) == zone
        return False
