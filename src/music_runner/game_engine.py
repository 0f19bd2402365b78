"""
game_engine.py: The game loop controller. Owns the session state machine.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Optional

from .constants import (
    GAME_HEIGHT, GAME_WIDTH, GAP_SIZE, GRAVITY, JUMP_STRENGTH, FLOOR_Y,
    OBSTACLE_SPEED, SPAWN_INTERVAL_TICKS, POINTS_PER_OBSTACLE,
    SPEED_RAMP_INTERVAL_TICKS, SPEED_RAMP_STEP
)
from .data_models import GamePhase, GameSession, Player
from .highscore import HighScoreStore
from .physics_core import PhysicsCore

logger = logging.getLogger(__name__)


class GameStateError(Exception):
    """Raised on a transition the state machine does not allow."""


@dataclass
class GameRules:
    """Tunable physics, spawning and scoring for a GameEngine."""
    gravity: float = GRAVITY
    jump_strength: float = JUMP_STRENGTH
    floor_y: float = FLOOR_Y
    playfield_width: float = GAME_WIDTH
    playfield_height: float = GAME_HEIGHT
    gap_size: float = GAP_SIZE
    start_speed: float = OBSTACLE_SPEED
    spawn_interval: int = SPAWN_INTERVAL_TICKS
    points_per_obstacle: int = POINTS_PER_OBSTACLE
    ramp_interval: int = SPEED_RAMP_INTERVAL_TICKS
    ramp_step: float = SPEED_RAMP_STEP
    # True: landing on the floor ends the run and the player may jump mid-air.
    # False: the player runs on the floor and jumps only when grounded.
    floor_is_fatal: bool = True


@dataclass
class GameEngine(PhysicsCore):
    """
    Drives a GameSession one fixed tick at a time.

    The engine holds configuration and collaborators only; every piece of
    per-run state lives on the session, so one engine can serve many sessions.
    """
    rules: GameRules = field(default_factory=GameRules)
    rng: random.Random = field(default_factory=random.Random)
    high_scores: Optional[HighScoreStore] = None
    on_game_over: Optional[Callable[[GameSession], None]] = None

    def new_session(self) -> GameSession:
        session = GameSession(speed=self.rules.start_speed)
        if self.high_scores is not None:
            session.high_score = self.high_scores.load()
        return session

    def start(self, session: GameSession) -> GameSession:
        """menu -> playing"""
        if session.phase != GamePhase.MENU:
            raise GameStateError(f"cannot start from {session.phase.value}")
        self._reset(session)
        session.phase = GamePhase.PLAYING
        return session

    def restart(self, session: GameSession) -> GameSession:
        """gameOver -> playing"""
        if session.phase != GamePhase.GAME_OVER:
            raise GameStateError(f"cannot restart from {session.phase.value}")
        self._reset(session)
        session.phase = GamePhase.PLAYING
        return session

    def _reset(self, session: GameSession):
        session.score = 0
        session.player = Player()
        session.obstacles = []
        session.spawn_timer = 0
        session.tick_count = 0
        session.speed = self.rules.start_speed
        session.final_score = None
        session.new_high_score = False
        session.submitted = False

    def is_grounded(self, player: Player) -> bool:
        if self.rules.floor_is_fatal:
            return player.y > 0
        return player.y >= self.rules.floor_y

    def tick(self, session: GameSession, jump: bool = False) -> GameSession:
        """
        One simulation step. Does nothing unless the session is playing.
        Mutates and returns the session.
        """
        if session.phase != GamePhase.PLAYING:
            return session

        rules = self.rules
        player = session.player
        session.tick_count += 1

        # 1. Player
        if jump:
            player.velocity = self.apply_jump(
                player.velocity, self.is_grounded(player), rules.jump_strength)
        player.y, player.velocity = self.advance_player(
            player.y, player.velocity, rules.gravity, rules.floor_y)

        if rules.floor_is_fatal and player.y >= rules.floor_y:
            return self._end_session(session)

        # 2. Difficulty ramp
        if rules.ramp_interval and session.tick_count % rules.ramp_interval == 0:
            session.speed += rules.ramp_step

        # 3. Spawn and move obstacles
        session.spawn_timer += 1
        if session.spawn_timer > rules.spawn_interval:
            session.obstacles.append(self.spawn_obstacle(
                rules.playfield_height, rules.gap_size, self.rng, rules.playfield_width))
            session.spawn_timer = 0

        session.obstacles = self.advance_obstacles(session.obstacles, session.speed)

        # 4. Collisions
        for obstacle in session.obstacles:
            if self.check_collision(player, obstacle):
                return self._end_session(session)

        # 5. Score
        for obstacle in session.obstacles:
            if not obstacle.scored and obstacle.x + obstacle.width < player.x:
                obstacle.scored = True
                session.score += rules.points_per_obstacle

        return session

    def _end_session(self, session: GameSession) -> GameSession:
        session.phase = GamePhase.GAME_OVER
        session.final_score = session.score

        if session.score > session.high_score:
            session.high_score = session.score
            session.new_high_score = True

        logger.info("Run over after %d ticks. Final score: %d", session.tick_count, session.score)

        if not session.submitted:
            session.submitted = True
            if self.on_game_over is not None:
                self.on_game_over(session)

        if session.new_high_score and self.high_scores is not None:
            self.high_scores.save(session.score)
        return session
