from __future__ import annotations

from music_runner.highscore import HighScoreStore


def test_missing_file_means_zero(tmp_path) -> None:
    assert HighScoreStore(tmp_path / "nope" / "best.json").load() == 0


def test_save_then_load(tmp_path) -> None:
    store = HighScoreStore(tmp_path / "nested" / "best.json")
    store.save(120)
    assert store.load() == 120
    assert HighScoreStore(tmp_path / "nested" / "best.json").load() == 120


def test_unreadable_file_means_zero(tmp_path) -> None:
    path = tmp_path / "best.json"
    path.write_text("not json", encoding="utf-8")
    assert HighScoreStore(path).load() == 0

    path.write_text('{"high_score": -5}', encoding="utf-8")
    assert HighScoreStore(path).load() == 0

    path.write_text("[1, 2]", encoding="utf-8")
    assert HighScoreStore(path).load() == 0


def test_failed_save_is_logged_not_raised(tmp_path, caplog) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = HighScoreStore(blocker / "best.json")

    assert store.save(50) is False
    assert "Could not save high score" in caplog.text
    assert store.load() == 0
