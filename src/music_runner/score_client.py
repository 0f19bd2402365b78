"""
score_client.py: HTTP client the game uses to reach the leaderboard server.
"""

import logging
import threading
from typing import Dict, List, Optional
from urllib.parse import quote

import httpx

from .constants import LEADERBOARD_SIZE
from .data_models import GameSession

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3001"
_TIMEOUT = httpx.Timeout(5.0, connect=2.0)


class ScoreClientError(Exception):
    """A request failed. message is safe to show to the player."""
    def __init__(self, message: str, status: Optional[int] = None):
        self.message = message
        self.status = status
        super().__init__(message)


class ScoreClient:
    def __init__(self, base_url: str = DEFAULT_API_URL, client: Optional[httpx.Client] = None):
        self._client = client or httpx.Client(base_url=base_url, timeout=_TIMEOUT)

    def close(self):
        self._client.close()

    def _request(self, method: str, path: str, failure: str, **kwargs) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise ScoreClientError(f"{failure}. Please try again.") from e

        if response.is_success:
            return response

        try:
            detail = response.json().get("error")
        except (ValueError, AttributeError):
            detail = None
        logger.error("%s %s returned %d: %s", method, path, response.status_code, detail)
        raise ScoreClientError(detail or f"{failure}. Please try again.", response.status_code)

    def health(self) -> dict:
        return self._request("GET", "/api/health", "Leaderboard unavailable").json()

    def submit_score(self, name: str, score: int) -> int:
        """Submits a finished run and returns its rank."""
        response = self._request(
            "POST", "/api/scores", "Failed to submit score", json={"name": name, "score": score})
        return response.json()["rank"]

    def fetch_top_scores(self, limit: int = LEADERBOARD_SIZE) -> List[dict]:
        response = self._request(
            "GET", "/api/scores", "Failed to load leaderboard", params={"limit": limit})
        return response.json()

    def fetch_player_best(self, name: str) -> Optional[dict]:
        """Best entry for name, or None when the player has no scores."""
        try:
            response = self._request(
                "GET", f"/api/scores/player/{quote(name, safe='')}",
                "Failed to load player score")
        except ScoreClientError as e:
            if e.status == 404:
                return None
            raise
        return response.json()


# ----------------- Leaderboard Sync (background submission) -----------------

class LeaderboardSync:
    """
    Talks to the score server off the render thread.
    Failures only set a message; game state is never touched.
    """

    def __init__(self, client: ScoreClient, player_name: str):
        self.client = client
        self.player_name = player_name

        self.leaderboard: List[Dict] = []
        self.message: Optional[str] = None
        self.last_rank: Optional[int] = None
        self.lock = threading.Lock()

    def refresh(self) -> threading.Thread:
        thread = threading.Thread(target=self._refresh, daemon=True)
        thread.start()
        return thread

    def submit(self, session: GameSession) -> threading.Thread:
        """GameEngine.on_game_over hook. Called once per run."""
        thread = threading.Thread(target=self._submit, args=(session.final_score,), daemon=True)
        thread.start()
        return thread

    def _refresh(self):
        try:
            scores = self.client.fetch_top_scores(LEADERBOARD_SIZE)
        except ScoreClientError as e:
            with self.lock:
                self.message = e.message
            return
        with self.lock:
            self.leaderboard = scores

    def _submit(self, score: int):
        try:
            rank = self.client.submit_score(self.player_name, score)
        except ScoreClientError as e:
            with self.lock:
                self.message = e.message
            return
        with self.lock:
            self.last_rank = rank
            self.message = f"Score submitted! You ranked #{rank}"
        self._refresh()

    def snapshot(self):
        with self.lock:
            return list(self.leaderboard), self.message

    def clear_message(self):
        with self.lock:
            self.message = None
