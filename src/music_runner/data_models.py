"""
data_models.py: Data structures for the game session and the leaderboard.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .constants import (
    START_Y, PLAYER_X, PLAYER_SIZE, OBSTACLE_WIDTH, OBSTACLE_SPEED
)


class GamePhase(str, Enum):
    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "gameOver"


@dataclass
class Player:
    """The runner. Only the vertical axis moves."""
    y: float = START_Y
    velocity: float = 0.0
    x: float = PLAYER_X
    width: float = PLAYER_SIZE
    height: float = PLAYER_SIZE


@dataclass
class Obstacle:
    """A column with a vertical gap the player has to fit through."""
    x: float
    gap_y: float
    gap_size: float
    width: float = OBSTACLE_WIDTH
    scored: bool = False

    @property
    def gap_end(self) -> float:
        return self.gap_y + self.gap_size


@dataclass
class GameSession:
    """All mutable state of one run, passed explicitly to the engine."""
    phase: GamePhase = GamePhase.MENU
    score: int = 0
    player: Player = field(default_factory=Player)
    obstacles: List[Obstacle] = field(default_factory=list)
    spawn_timer: int = 0
    tick_count: int = 0
    speed: float = OBSTACLE_SPEED

    # Filled in when the run ends
    final_score: Optional[int] = None
    high_score: int = 0
    new_high_score: bool = False
    submitted: bool = False


@dataclass(frozen=True)
class ScoreEntry:
    """A persisted leaderboard row. Rank is derived, never stored."""
    name: str
    score: int
    created_at: str
    id: Optional[int] = None

    def to_public(self) -> dict:
        return {"name": self.name, "score": self.score, "timestamp": self.created_at}
