"""
physics_core.py: The deterministic kinematic functions and collision logic.
"""

import random
from typing import List, Tuple

from .constants import (
    GRAVITY, JUMP_STRENGTH, FLOOR_Y, GAME_WIDTH, GAP_MARGIN
)
from .data_models import Player, Obstacle


class PhysicsCore:
    """
    Shared deterministic physics used by the game engine.
    Randomness only enters through the rng passed to spawn_obstacle.
    """

    def advance_player(self, position: float, velocity: float,
                       gravity: float = GRAVITY,
                       floor_y: float = FLOOR_Y) -> Tuple[float, float]:
        """
        Calculates new position and velocity after one tick.
        Position is clamped to [0, floor_y]; landing on the floor stops the fall.
        """
        velocity += gravity
        position += velocity

        if position >= floor_y:
            position = floor_y
            velocity = 0.0
        elif position < 0:
            position = 0.0

        return position, velocity

    def apply_jump(self, velocity: float, is_grounded: bool,
                   jump_strength: float = JUMP_STRENGTH) -> float:
        """Returns the velocity after a jump request."""
        if is_grounded:
            return jump_strength
        return velocity

    def spawn_obstacle(self, playfield_height: float, gap_size: float,
                       rng: random.Random,
                       playfield_width: float = GAME_WIDTH,
                       margin: float = GAP_MARGIN) -> Obstacle:
        """Generates a new obstacle at the right edge of the playfield."""
        highest_gap_y = playfield_height - gap_size - margin
        if highest_gap_y < margin:
            raise ValueError(
                f"gap of {gap_size} does not fit a playfield of height {playfield_height}")

        gap_y = rng.uniform(margin, highest_gap_y)
        return Obstacle(x=float(playfield_width), gap_y=gap_y, gap_size=float(gap_size))

    def advance_obstacles(self, obstacles: List[Obstacle], speed: float) -> List[Obstacle]:
        """Scrolls obstacles left and drops those fully past the left edge."""
        for obstacle in obstacles:
            obstacle.x -= speed

        return [o for o in obstacles if o.x + o.width > 0]

    def check_collision(self, player: Player, obstacle: Obstacle) -> bool:
        """AABB test: overlapping columns collide unless the player fits the gap."""
        overlaps_x = (player.x < obstacle.x + obstacle.width
                      and player.x + player.width > obstacle.x)
        if not overlaps_x:
            return False

        return player.y < obstacle.gap_y or player.y + player.height > obstacle.gap_end
