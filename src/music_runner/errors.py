import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ScoreError(Exception):
    def __init__(self, code: str, message: str, status: int = 400):
        self.code = code
        self.message = message
        self.status = status
        super().__init__(message)


class ValidationError(ScoreError):
    def __init__(self, code: str = "VALIDATION_ERROR", message: str = "Invalid input"):
        super().__init__(code, message, 400)


class PlayerNotFoundError(ScoreError):
    def __init__(self, code: str = "PLAYER_NOT_FOUND", message: str = "Player not found"):
        super().__init__(code, message, 404)


class StorageError(ScoreError):
    def __init__(self, code: str = "STORAGE_ERROR", message: str = "Storage unavailable"):
        super().__init__(code, message, 500)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ScoreError)
    async def score_error_handler(request: Request, exc: ScoreError):
        return JSONResponse(status_code=exc.status, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid input"})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": message})

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": str(exc) if app.debug else "Internal server error"},
        )
