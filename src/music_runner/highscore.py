"""
highscore.py: Per-machine best score, kept in a small JSON file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".music_runner" / "highscore.json"


class HighScoreStore:
    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else DEFAULT_PATH

    def load(self) -> int:
        """Returns the stored high score, 0 when nothing usable is stored."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return max(int(data.get("high_score", 0)), 0)
        except FileNotFoundError:
            return 0
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, e)
            return 0

    def save(self, score: int) -> bool:
        """Writes the score. A failed write is logged and reported as False."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(".tmp")
            tmp_path.write_text(json.dumps({"high_score": int(score)}), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.warning("Could not save high score to %s: %s", self.path, e)
            return False
        return True
