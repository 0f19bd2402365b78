"""
server_db.py: Database layer for score persistence.
"""

import logging
import sqlite3
import threading
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from .data_models import ScoreEntry
from .errors import StorageError

logger = logging.getLogger(__name__)

DB_FILE = "music_runner.db"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Database:
    """Handles all interaction with the SQLite database."""
    def __init__(self, db_file: str = DB_FILE):
        # check_same_thread=False: FastAPI runs sync routes on a threadpool
        self.conn = sqlite3.connect(db_file, check_same_thread=False)
        self.cur = self.conn.cursor()
        self._lock = threading.Lock()
        self.setup()

    def setup(self):
        """Creates the table and the top-N index if they don't exist."""
        with self._lock:
            self.cur.execute("""
                CREATE TABLE IF NOT EXISTS scores (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    player_name VARCHAR(50) NOT NULL,
                    score INTEGER NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)
            self.cur.execute(
                "CREATE INDEX IF NOT EXISTS idx_scores_score ON scores(score DESC)")
            self.conn.commit()

    def close(self):
        with self._lock:
            self.conn.close()

    def add_score(self, name: str, score: int) -> Tuple[ScoreEntry, int]:
        """
        Appends one entry and returns it with its rank.
        The insert is only committed once the rank is known; nothing is kept on failure.
        """
        created_at = _now()
        with self._lock:
            try:
                self.cur.execute(
                    "INSERT INTO scores (player_name, score, created_at) VALUES (?, ?, ?)",
                    (name, score, created_at))
                entry_id = self.cur.lastrowid
                self.cur.execute("SELECT COUNT(*) FROM scores WHERE score > ?", (score,))
                higher = self.cur.fetchone()[0]
                self.conn.commit()
            except sqlite3.Error as e:
                logger.error("Error saving score: %s", e)
                self._rollback()
                raise StorageError(message="Failed to save score") from e
        entry = ScoreEntry(name=name, score=score, created_at=created_at, id=entry_id)
        return entry, higher + 1

    def _rollback(self):
        try:
            self.conn.rollback()
        except sqlite3.Error as e:
            logger.error("Rollback failed: %s", e)

    def get_top_scores(self, limit: int) -> List[ScoreEntry]:
        """Fetches the top scores, earliest entry first on ties."""
        with self._lock:
            try:
                self.cur.execute("""
                    SELECT id, player_name, score, created_at
                    FROM scores
                    ORDER BY score DESC, created_at ASC, id ASC
                    LIMIT ?
                """, (limit,))
                rows = self.cur.fetchall()
            except sqlite3.Error as e:
                logger.error("Error fetching scores: %s", e)
                raise StorageError(message="Failed to fetch scores") from e
        return [self._to_entry(row) for row in rows]

    def get_player_best(self, name: str) -> Optional[ScoreEntry]:
        """Highest score for an exact name match."""
        with self._lock:
            try:
                self.cur.execute("""
                    SELECT id, player_name, score, created_at
                    FROM scores
                    WHERE player_name = ?
                    ORDER BY score DESC, created_at ASC, id ASC
                    LIMIT 1
                """, (name,))
                row = self.cur.fetchone()
            except sqlite3.Error as e:
                logger.error("Error fetching player score: %s", e)
                raise StorageError(message="Failed to fetch player score") from e
        return self._to_entry(row) if row else None

    def delete_all(self) -> int:
        """Removes every entry. Returns how many were deleted."""
        with self._lock:
            try:
                self.cur.execute("DELETE FROM scores")
                self.conn.commit()
                return self.cur.rowcount
            except sqlite3.Error as e:
                logger.error("Error deleting scores: %s", e)
                raise StorageError(message="Failed to delete scores") from e

    @staticmethod
    def _to_entry(row) -> ScoreEntry:
        entry_id, name, score, created_at = row
        return ScoreEntry(name=name, score=score, created_at=created_at, id=entry_id)
