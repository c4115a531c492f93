from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./zapstock.db"
    # sql | redis
    SNAPSHOT_BACKEND: str = "sql"
    REDIS_URL: str = "redis://localhost:6379/0"
    SNAPSHOT_KEY_PREFIX: str = "zapstock_"

    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    ORACLE_TIMEOUT_SECONDS: float = 30.0

    LOW_STOCK_THRESHOLD: int = 10
    LOG_LEVEL: str = "INFO"
    SERVICE_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    class Config:
        env_file = ".env"

@lru_cache
def get_settings() -> Settings:
    return Settings()
