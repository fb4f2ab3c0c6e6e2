"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Train Booking API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server (used by the train-booking-api entry point)
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Seat inventory
    TOTAL_SEATS: int = 20

    # Snapshot persistence
    SNAPSHOT_STORE: str = "memory"  # memory, redis
    SNAPSHOT_KEY: str = "train_booking:snapshot"
    AUTOLOAD_SNAPSHOT: bool = False

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
