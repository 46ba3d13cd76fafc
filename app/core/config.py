from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    APP_NAME: str = "EasyVenue API"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///./easyvenue.db"
    DATABASE_POOL_SIZE: int = 5
    DATABASE_MAX_OVERFLOW: int = 10

    CORS_ORIGINS: List[str] = ["*"]

    # Number of bookings shown on the admin dashboard
    RECENT_BOOKINGS_LIMIT: int = 10
    MAX_RECENT_BOOKINGS_LIMIT: int = 100


settings = Settings()
