#!/usr/bin/env python3
"""
Music Runner leaderboard server.
FastAPI app over the SQLite score store: server_db, score_service, router.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .errors import register_error_handlers
from .router import router as scores_router
from .schema import HealthResponse
from .score_service import ScoreService
from .server_db import Database

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, db: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()
    db = db or Database(settings.DB_FILE)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s v%s (db: %s)", settings.APP_NAME, settings.VERSION, settings.DB_FILE)
        yield
        db.close()
        logger.info("Database closed")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        description="Leaderboard API for Music Runner",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.score_service = ScoreService(db)
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            timestamp=datetime.now(timezone.utc).isoformat(),
            uptime=round(time.monotonic() - app.state.started_at, 3),
        )

    app.add_api_route("/health", health, methods=["GET"], response_model=HealthResponse, tags=["system"])
    app.add_api_route("/api/health", health, methods=["GET"], response_model=HealthResponse, tags=["system"])

    app.include_router(scores_router)

    return app


def main():
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Health check: http://localhost:%d/api/health", settings.PORT)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
