"""Music Runner: a side-scrolling arcade game with a shared leaderboard."""

__version__ = "0.1.0"
