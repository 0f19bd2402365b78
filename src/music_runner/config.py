from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Music Runner"
    VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    CORS_ORIGINS: list[str] = ["*"]

    # Storage
    DB_FILE: str = "music_runner.db"

    class Config:
        env_file = ".env"
        env_prefix = "MUSIC_RUNNER_"
        extra = "ignore"


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if not _settings:
        _settings = Settings()
    return _settings
