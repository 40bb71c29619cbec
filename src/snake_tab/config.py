"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from snake_tab.grid import GRID_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Tunables for one game session.

    Supports JSON serialization so a server can be started from a file.
    """

    grid_size: int = GRID_SIZE
    tick_interval_ms: int = 150
    food_reward: int = 10
    initial_length: int = 3
    seed: int | None = None

    # Best-score persistence; None keeps the score in memory only.
    high_score_path: str | None = None

    def __post_init__(self) -> None:
        if self.grid_size < 4:
            raise ValueError("grid_size must be at least 4.")
        if self.tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be positive.")
        if self.food_reward < 0:
            raise ValueError("food_reward must be >= 0.")
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        # The body trails left from the centre cell.
        if self.initial_length > self.grid_size // 2 + 1:
            raise ValueError(
                "initial_length does not fit the configured grid; "
                "increase grid_size or reduce the length."
            )

    @property
    def tick_interval(self) -> float:
        """Tick period in seconds."""
        return self.tick_interval_ms / 1000.0

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls(**json.loads(Path(path).read_text()))
