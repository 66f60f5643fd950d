# portal/core/config.py
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    SECRET_KEY: str = "your-super-secret-jwt-key-change-in-prod"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 43200  # 30 days

    DATABASE_URL: str = "sqlite:///./portal.db"

    CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://127.0.0.1",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # how many recent attendance rows the history view returns
    HISTORY_LIMIT: int = 12
    DEFAULT_LEVEL: str = "Not specified"

    LOG_LEVEL: str = "INFO"
    AUTH_DEBUG: bool = False

    class Config:
        env_file = ".env"

# created once, imported everywhere
settings = Settings()
