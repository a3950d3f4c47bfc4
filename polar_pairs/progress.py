"""Persisted per-level progress: ratcheted scores and sequential unlocks."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .game import MAX_SCORE

logger = logging.getLogger(__name__)


@dataclass
class LevelProgress:
    unlocked: bool = False
    score: int = 0


class ProgressStore:
    """Score and unlock bookkeeping for an ordered list of levels.

    The store is constructed explicitly and handed to whatever needs it. When
    ``path`` is ``None`` progress lives in memory only.
    """

    def __init__(self, level_order: Sequence[str], path: Optional[Path] = None):
        self.level_order: List[str] = list(level_order)
        self.path = Path(path) if path is not None else None
        self._levels: Dict[str, LevelProgress] = {}
        self._reset_defaults()
        if self.path is not None:
            self.load()

    def _reset_defaults(self) -> None:
        self._levels = {level_id: LevelProgress() for level_id in self.level_order}
        if self.level_order:
            self._levels[self.level_order[0]].unlocked = True

    def load(self) -> None:
        if self.path is None:
            return
        if not self.path.exists():
            logger.info("No progress file at %s, starting fresh", self.path)
            self.save()
            return
        try:
            data = json.loads(self.path.read_text())
            entries = data["levels"]
            for level_id, entry in entries.items():
                if level_id not in self._levels:
                    continue
                progress = self._levels[level_id]
                progress.unlocked = progress.unlocked or bool(entry.get("unlocked", False))
                progress.score = max(0, min(MAX_SCORE, int(entry.get("score", 0))))
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning("Could not read progress file %s: %s", self.path, exc)
            self._reset_defaults()
            self.save()

    def save(self) -> None:
        if self.path is None:
            return
        payload = {
            "levels": {
                level_id: {"unlocked": progress.unlocked, "score": progress.score}
                for level_id, progress in self._levels.items()
            }
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2))

    def _entry(self, level_id: str) -> LevelProgress:
        if level_id not in self._levels:
            raise KeyError(f"Unknown level: {level_id}")
        return self._levels[level_id]

    def is_unlocked(self, level_id: str) -> bool:
        progress = self._levels.get(level_id)
        return bool(progress and progress.unlocked)

    def score(self, level_id: str) -> int:
        progress = self._levels.get(level_id)
        return progress.score if progress else 0

    def next_level(self, level_id: str) -> Optional[str]:
        try:
            index = self.level_order.index(level_id)
        except ValueError:
            return None
        if index + 1 >= len(self.level_order):
            return None
        return self.level_order[index + 1]

    def unlock(self, level_id: str) -> None:
        self._entry(level_id).unlocked = True
        self.save()

    def record_score(self, level_id: str, score: int) -> bool:
        """Keep the best score seen for ``level_id``; return True when it improved.

        A positive score also unlocks the following level.
        """
        progress = self._entry(level_id)
        score = max(0, min(MAX_SCORE, score))
        improved = score > progress.score
        if improved:
            logger.info("Level %s score %d -> %d", level_id, progress.score, score)
            progress.score = score
        else:
            logger.debug(
                "Keeping level %s score %d (new attempt scored %d)",
                level_id,
                progress.score,
                score,
            )
        next_id = self.next_level(level_id)
        if score > 0 and next_id is not None:
            self._levels[next_id].unlocked = True
        self.save()
        return improved

    def unlocked_levels(self) -> List[str]:
        return [level_id for level_id in self.level_order if self._levels[level_id].unlocked]

    def reset(self) -> None:
        self._reset_defaults()
        self.save()
