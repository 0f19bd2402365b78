from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from music_runner.data_models import GameSession
from music_runner.score_client import LeaderboardSync, ScoreClient, ScoreClientError


@pytest.fixture
def score_client(client: TestClient) -> ScoreClient:
    return ScoreClient(client=client)


def mock_client(handler) -> ScoreClient:
    return ScoreClient(client=httpx.Client(
        transport=httpx.MockTransport(handler), base_url="http://test"))


def test_submit_and_fetch_against_app(score_client: ScoreClient) -> None:
    assert score_client.health()["status"] == "ok"
    assert score_client.submit_score("Alice", 300) == 1
    assert score_client.submit_score("Bob", 500) == 1
    assert score_client.submit_score("Carol", 100) == 3

    top = score_client.fetch_top_scores()
    assert [e["name"] for e in top] == ["Bob", "Alice", "Carol"]

    assert score_client.fetch_player_best("Alice")["score"] == 300
    assert score_client.fetch_player_best("Nobody") is None


def test_names_are_url_encoded(score_client: ScoreClient) -> None:
    score_client.submit_score("DJ / Slash?", 42)
    assert score_client.fetch_player_best("DJ / Slash?")["score"] == 42


def test_server_error_message_is_surfaced(score_client: ScoreClient) -> None:
    with pytest.raises(ScoreClientError) as excinfo:
        score_client.submit_score("x" * 51, 10)
    assert excinfo.value.status == 400
    assert excinfo.value.message == "Invalid name: must be 1-50 characters"


def test_transport_failure_becomes_client_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = mock_client(handler)
    with pytest.raises(ScoreClientError) as excinfo:
        client.submit_score("Alice", 10)
    assert excinfo.value.message == "Failed to submit score. Please try again."
    assert excinfo.value.status is None


def test_non_json_error_body_uses_generic_message() -> None:
    client = mock_client(lambda request: httpx.Response(502, text="bad gateway"))
    with pytest.raises(ScoreClientError) as excinfo:
        client.fetch_top_scores()
    assert excinfo.value.message == "Failed to load leaderboard. Please try again."
    assert excinfo.value.status == 502


def test_sync_submits_then_refreshes_leaderboard() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        if request.method == "POST":
            return httpx.Response(201, json={"success": True, "rank": 4})
        return httpx.Response(200, json=[{"name": "Alice", "score": 70}])

    sync = LeaderboardSync(mock_client(handler), "Alice")
    sync.submit(GameSession(final_score=70)).join(timeout=5)

    leaderboard, message = sync.snapshot()
    assert seen == [("POST", "/api/scores"), ("GET", "/api/scores")]
    assert sync.last_rank == 4
    assert message == "Score submitted! You ranked #4"
    assert leaderboard == [{"name": "Alice", "score": 70}]


def test_sync_failure_only_sets_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    sync = LeaderboardSync(mock_client(handler), "Alice")
    session = GameSession(score=70, final_score=70, high_score=70)
    sync.submit(session).join(timeout=5)

    leaderboard, message = sync.snapshot()
    assert message == "Failed to submit score. Please try again."
    assert leaderboard == []
    assert sync.last_rank is None
    assert (session.score, session.final_score, session.high_score) == (70, 70, 70)

    sync.clear_message()
    assert sync.snapshot()[1] is None
