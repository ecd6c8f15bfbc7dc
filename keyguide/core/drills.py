"""Letter, word and sentence drills loaded from YAML.

Each ``drill<N>.yaml`` holds a ``title``, an optional ``kind`` and its
``content`` (a list, or a string with one entry per line). The kind decides
how the content is split into session tasks:

* ``letters`` – one task per character, spaces dropped;
* ``words`` – one task per whitespace-separated word;
* ``sentences`` – one task per entry, typed as written.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

DRILL_KINDS = ("letters", "words", "sentences")
DEFAULT_DRILLS_DIR = Path(__file__).resolve().parent.parent / "data" / "drills"


@dataclass(frozen=True)
class Drill:
    key: str
    name: str
    kind: str
    tasks: List[str]

    def practice_tasks(self) -> List[str]:
        """Split the drill content into the steps a session walks through."""
        if self.kind == "letters":
            return [char for entry in self.tasks for char in entry if not char.isspace()]
        if self.kind == "words":
            return [word for entry in self.tasks for word in entry.split()]
        return list(self.tasks)


def _content_entries(content: Any) -> List[str]:
    if isinstance(content, list):
        entries = [str(item) for item in content]
    else:
        entries = str(content).splitlines()
    return [entry.strip() for entry in entries if entry.strip()]


def parse_drill(key: str, raw: Any, source: str) -> Drill:
    """Validate one parsed YAML document; *source* names it in errors."""
    if not raw or not isinstance(raw, dict):
        raise ValueError(f"{source}: expected YAML with 'title' and 'content'")

    title = raw.get("title")
    if not title or not isinstance(title, str):
        raise ValueError(f"{source}: missing or invalid 'title'")
    kind = raw.get("kind", "letters")
    if kind not in DRILL_KINDS:
        raise ValueError(f"{source}: 'kind' must be one of {', '.join(DRILL_KINDS)}")
    if "content" not in raw or raw["content"] is None:
        raise ValueError(f"{source}: missing 'content'")

    entries = _content_entries(raw["content"])
    if not entries:
        raise ValueError(f"{source}: 'content' has no tasks")
    return Drill(key=key, name=title.strip(), kind=kind, tasks=entries)


def _drill_order(path: Path) -> Tuple[int, str]:
    m = re.fullmatch(r"drill(\d+)", path.stem)
    return (int(m.group(1)) if m else 10**9, path.stem)


class DrillRepository:
    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else DEFAULT_DRILLS_DIR
        if not self._base_dir.exists():
            raise FileNotFoundError(f"Drills directory not found: {self._base_dir}")

        self._drills: Dict[str, Drill] = {}
        for path in sorted(self._base_dir.glob("drill*.yaml"), key=_drill_order):
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
            self._drills[path.stem] = parse_drill(path.stem, raw, path.name)
        if not self._drills:
            raise ValueError(f"No drill files (drill*.yaml) found in {self._base_dir}")
        logger.debug("Loaded %d drills from %s", len(self._drills), self._base_dir)

    def all(self) -> List[Drill]:
        return list(self._drills.values())

    def get(self, key: str) -> Drill:
        return self._drills[key]
