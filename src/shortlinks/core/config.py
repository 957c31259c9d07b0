from pydantic_settings import BaseSettings
from functools import lru_cache
import logging


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Settings can be overridden by environment variables or .env file.
    """

    # In-memory by default; nothing survives a restart.
    DATABASE_URL: str = "sqlite://"

    SHORT_CODE_LENGTH: int = 6
    VISITOR_TOKEN_LENGTH: int = 36
    ACCOUNT_ID_LENGTH: int = 12
    MAX_CODE_RETRIES: int = 10

    BCRYPT_ROUNDS: int = 12

    SESSION_COOKIE_NAME: str = "session_token"
    VISITOR_COOKIE_NAME: str = "visitor_id"

    ALLOWED_ORIGINS: str = "http://localhost:8000,http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to avoid loading .env file multiple times.
    """
    return Settings()


settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("shortlinks")
