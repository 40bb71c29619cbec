"""Best-score persistence."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "snake-high-score"


class ScoreStore(Protocol):
    """Holds the single best score across runs."""

    def read(self) -> int: ...

    def write(self, score: int) -> None: ...


class MemoryScoreStore:
    """Process-local store; the fallback when nothing can be persisted."""

    def __init__(self, initial: int = 0) -> None:
        if initial < 0:
            raise ValueError("initial score must be >= 0.")
        self._score = initial

    def read(self) -> int:
        return self._score

    def write(self, score: int) -> None:
        if score < 0:
            raise ValueError("score must be >= 0.")
        self._score = score


class JsonScoreStore(MemoryScoreStore):
    """Key-value JSON file holding the best score under ``snake-high-score``.

    Any failure to read or write the file is logged and the store keeps
    working from its in-memory copy.
    """

    def __init__(self, path: str | Path, key: str = HIGH_SCORE_KEY) -> None:
        super().__init__()
        self.path = Path(path)
        self.key = key
        self._score = self._load()

    def _load(self) -> int:
        if not self.path.exists():
            return 0
        try:
            data = json.loads(self.path.read_text())
        except (OSError, ValueError):
            logger.warning(
                "Could not read high score from %s; starting at 0.", self.path,
            )
            return 0
        value = data.get(self.key, 0) if isinstance(data, dict) else 0
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            logger.warning("Ignoring invalid stored high score %r.", value)
            return 0
        return value

    def write(self, score: int) -> None:
        super().write(score)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({self.key: score}))
        except OSError:
            logger.warning(
                "Could not persist high score to %s; keeping it in memory.",
                self.path,
            )
