from __future__ import annotations

import sqlite3

import pytest
from fastapi.testclient import TestClient

from music_runner.config import Settings
from music_runner.score_service import ScoreService
from music_runner.server import create_app
from music_runner.server_db import Database


@pytest.fixture
def db() -> Database:
    database = Database(":memory:")
    yield database
    database.close()


@pytest.fixture
def service(db: Database) -> ScoreService:
    return ScoreService(db)


@pytest.fixture
def app(db: Database):
    return create_app(Settings(DB_FILE=":memory:"), db=db)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


class RankFailingCursor:
    """Wraps a cursor so the rank query fails after the insert has run."""

    def __init__(self, cursor: sqlite3.Cursor):
        self._cursor = cursor

    def execute(self, sql: str, params=()):
        if sql.lstrip().startswith("SELECT COUNT"):
            raise sqlite3.OperationalError("database is locked")
        return self._cursor.execute(sql, params)

    def __getattr__(self, name: str):
        return getattr(self._cursor, name)


@pytest.fixture
def rank_fails(db: Database, monkeypatch) -> Database:
    monkeypatch.setattr(db, "cur", RankFailingCursor(db.cur))
    return db
