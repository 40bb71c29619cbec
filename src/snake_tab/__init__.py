"""Snake Tab — single-player snake engine and browser driver."""

from snake_tab.config import GameConfig
from snake_tab.driver import GameDriver
from snake_tab.engine import GameEngine, GameState, Phase, TickResult
from snake_tab.grid import GRID_SIZE, Grid
from snake_tab.score_store import JsonScoreStore, MemoryScoreStore, ScoreStore
from snake_tab.snake import Direction, Position

__all__ = [
    "GRID_SIZE",
    "Direction",
    "GameConfig",
    "GameDriver",
    "GameEngine",
    "GameState",
    "Grid",
    "JsonScoreStore",
    "MemoryScoreStore",
    "Phase",
    "Position",
    "ScoreStore",
    "TickResult",
]
