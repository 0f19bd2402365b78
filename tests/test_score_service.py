from __future__ import annotations

import pytest

from music_runner.errors import PlayerNotFoundError, StorageError, ValidationError
from music_runner.score_service import ScoreService


@pytest.mark.parametrize("name", ["", "   ", "x" * 51, None, 42])
def test_bad_names_are_rejected(service: ScoreService, name) -> None:
    with pytest.raises(ValidationError):
        service.submit_score(name, 100)
    assert service.fetch_top_scores() == []


@pytest.mark.parametrize("score", [-1, 1000000, True, 1.5, "10", None])
def test_bad_scores_are_rejected(service: ScoreService, score) -> None:
    with pytest.raises(ValidationError):
        service.submit_score("Alice", score)
    assert service.fetch_top_scores() == []


def test_boundary_values_are_accepted(service: ScoreService) -> None:
    service.submit_score("x" * 50, 0)
    service.submit_score("y", 999999)

    top = service.fetch_top_scores()
    assert [(e.name, e.score) for e in top] == [("y", 999999), ("x" * 50, 0)]


def test_name_is_trimmed(service: ScoreService) -> None:
    result = service.submit_score("  Alice  ", 10)
    assert result.stored.name == "Alice"
    assert service.fetch_player_best("Alice").score == 10


def test_rank_counts_strictly_greater_scores(service: ScoreService) -> None:
    for score in (1000, 2000, 3000):
        service.submit_score("seed", score)

    assert service.submit_score("Bob", 1500).rank == 3
    assert service.submit_score("Top", 5000).rank == 1
    # Ties share a rank
    assert service.submit_score("Tie", 2000).rank == 3


def test_leaderboard_is_sorted_and_limited(service: ScoreService) -> None:
    for i, score in enumerate([5, 80, 12, 80, 0, 33, 7, 99, 41, 60, 2, 18]):
        service.submit_score(f"P{i}", score)

    top = service.fetch_top_scores()
    scores = [e.score for e in top]
    assert len(top) == 10
    assert scores == sorted(scores, reverse=True)
    assert scores[0] == 99

    # Equal scores: earliest submission first
    tied = [e.name for e in top if e.score == 80]
    assert tied == ["P1", "P3"]

    assert len(service.fetch_top_scores(limit=3)) == 3


def test_limit_out_of_range_is_rejected(service: ScoreService) -> None:
    with pytest.raises(ValidationError):
        service.fetch_top_scores(limit=0)
    with pytest.raises(ValidationError):
        service.fetch_top_scores(limit=101)


def test_player_best_is_highest_for_exact_name(service: ScoreService) -> None:
    service.submit_score("Alice", 10)
    service.submit_score("Alice", 70)
    service.submit_score("alice", 900)

    best = service.fetch_player_best("Alice")
    assert best.name == "Alice"
    assert best.score == 70


def test_unknown_player_is_not_found(service: ScoreService) -> None:
    with pytest.raises(PlayerNotFoundError):
        service.fetch_player_best("Nobody")


def test_delete_all_scores(service: ScoreService) -> None:
    service.submit_score("A", 1)
    service.submit_score("B", 2)

    assert service.delete_all_scores() == 2
    assert service.fetch_top_scores() == []
    with pytest.raises(PlayerNotFoundError):
        service.fetch_player_best("A")


def test_storage_failure_is_reported(service: ScoreService, db) -> None:
    db.close()
    with pytest.raises(StorageError):
        service.fetch_top_scores()
    with pytest.raises(StorageError):
        service.submit_score("A", 1)


def test_rank_failure_keeps_nothing(service: ScoreService, rank_fails) -> None:
    with pytest.raises(StorageError):
        service.submit_score("Alice", 100)

    rows = rank_fails.conn.execute("SELECT COUNT(*) FROM scores").fetchone()[0]
    assert rows == 0
