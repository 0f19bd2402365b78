"""
constants.py: Centralized configuration for the game world and the tick loop.
"""

# -------- Time Config --------
TICK_RATE = 60                  # Simulation ticks per second
TICK_TIME = 1.0 / TICK_RATE     # Fixed time step (Delta Time)
MAX_CATCH_UP_TICKS = 5          # Ticks run at most per render frame
RENDER_FPS = 60

# -------- Game World Config --------
GAME_WIDTH = 800
GAME_HEIGHT = 500
PLAYER_X = 100                  # Fixed player X position
PLAYER_SIZE = 40
FLOOR_Y = GAME_HEIGHT - PLAYER_SIZE
START_Y = 250

# -------- Obstacle Config --------
OBSTACLE_WIDTH = 30
GAP_SIZE = 150
GAP_MARGIN = 50                 # Minimum distance between gap and top/bottom edge
OBSTACLE_SPEED = 5.0            # Horizontal speed (pixels/tick)
SPAWN_INTERVAL_TICKS = 120      # Spawn every 120 ticks (2.0 seconds)

# -------- Difficulty Ramp --------
SPEED_RAMP_INTERVAL_TICKS = 500
SPEED_RAMP_STEP = 0.5

# -------- Physics Config (Pixels / Tick) --------
GRAVITY = 0.6                   # Vertical acceleration (pixels/tick^2)
JUMP_STRENGTH = -12.0           # Instantaneous velocity after a jump (pixels/tick)

# -------- Scoring --------
POINTS_PER_OBSTACLE = 10
MAX_SCORE = 999999
MAX_NAME_LENGTH = 50
LEADERBOARD_SIZE = 10
