from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    APP_NAME: str = "StockPilot"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    MONGODB_URL: str
    DATABASE_NAME: str = "stockpilot"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Backblaze B2 (media uploads)
    BACKBLAZE_B2_APPLICATION_KEY_ID: str | None = None
    BACKBLAZE_B2_APPLICATION_KEY: str | None = None
    BACKBLAZE_B2_BUCKET_ID: str | None = None
    BACKBLAZE_B2_BUCKET_NAME: str | None = None
    B2_API_BASE: str = "https://api.backblazeb2.com"
    B2_AUTH_CACHE_SECONDS: int = 60 * 60 * 20  # auth tokens live 24h
    HTTP_TIMEOUT_SECONDS: float = 30.0

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

settings = Settings()
