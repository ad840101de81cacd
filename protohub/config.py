from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql+asyncpg://user:password@db:5432/protohub"
    REDIS_URL: str = "redis://localhost:6379/0"
    AUTH_SERVICE_URL: str = "http://auth-service:8000"
    CACHE_ENABLED: bool = True
    CACHE_TTL_SECONDS: int = 3600
    RATE_LIMIT_ENABLED: bool = True
    # Realtime broadcaster periods (seconds)
    REALTIME_ENABLED: bool = True
    TRENDS_BROADCAST_SECONDS: float = 180
    METRICS_BROADCAST_SECONDS: float = 60
    ACTIVITY_BROADCAST_SECONDS: float = 45
    # Dev/test helpers; production schema comes from alembic
    DB_CREATE_ALL: bool = False
    SEED_ON_STARTUP: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    CORS_ORIGINS: List[str] = ["*"]
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
