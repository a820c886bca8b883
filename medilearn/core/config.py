from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Base
    APP_ENV: str = "dev"  # dev | test | prod
    APP_NAME: str = "MediLearn API"
    APP_VERSION: str = "0.1.0"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Database
    DATABASE_URL: str = "sqlite:///./medilearn.db"
    DB_CONNECT_RETRIES: int = 3
    DB_CONNECT_RETRY_DELAY: float = 2.0  # seconds, flat

    # Session
    SECRET_KEY: str = "change_me"
    SESSION_COOKIE_NAME: str = "auth-token"
    SESSION_MAX_AGE: int = 60 * 60 * 24 * 7  # 1 week

    # Content APIs (empty = disabled, static fallback only)
    YOUTUBE_API_KEY: str = ""
    NEWS_API_KEY: str = ""
    HTTP_TIMEOUT: float = 10.0

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def cookie_secure(self) -> bool:
        return self.APP_ENV == "prod"


@lru_cache
def get_settings() -> Settings:
    return Settings()
