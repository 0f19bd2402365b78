"""
score_service.py: Validates finished runs, ranks them and serves the leaderboard.
"""

import logging
from dataclasses import dataclass
from typing import Any, List

from .constants import MAX_NAME_LENGTH, MAX_SCORE, LEADERBOARD_SIZE
from .data_models import ScoreEntry
from .errors import ValidationError, PlayerNotFoundError
from .server_db import Database

logger = logging.getLogger(__name__)

MAX_LIMIT = 100


@dataclass
class SubmitResult:
    rank: int
    stored: ScoreEntry


def validate_submission(name: Any, score: Any) -> tuple[str, int]:
    """Returns the cleaned (name, score) or raises ValidationError."""
    if not isinstance(name, str):
        raise ValidationError(message=f"Invalid name: must be 1-{MAX_NAME_LENGTH} characters")
    name = name.strip()
    if not 1 <= len(name) <= MAX_NAME_LENGTH:
        raise ValidationError(message=f"Invalid name: must be 1-{MAX_NAME_LENGTH} characters")

    # bool is an int subclass; True is not a score
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError(message=f"Invalid score: must be 0-{MAX_SCORE}")
    if not 0 <= score <= MAX_SCORE:
        raise ValidationError(message=f"Invalid score: must be 0-{MAX_SCORE}")

    return name, score


class ScoreService:
    def __init__(self, db: Database):
        self.db = db

    def submit_score(self, name: Any, score: Any) -> SubmitResult:
        name, score = validate_submission(name, score)
        stored, rank = self.db.add_score(name, score)
        logger.info("Score %d saved for %s (rank %d)", score, name, rank)
        return SubmitResult(rank=rank, stored=stored)

    def fetch_top_scores(self, limit: int = LEADERBOARD_SIZE) -> List[ScoreEntry]:
        if not 1 <= limit <= MAX_LIMIT:
            raise ValidationError(message=f"Invalid limit: must be 1-{MAX_LIMIT}")
        return self.db.get_top_scores(limit)

    def fetch_player_best(self, name: str) -> ScoreEntry:
        entry = self.db.get_player_best(name)
        if entry is None:
            raise PlayerNotFoundError()
        return entry

    def delete_all_scores(self) -> int:
        deleted = self.db.delete_all()
        logger.warning("All scores deleted (%d entries)", deleted)
        return deleted
