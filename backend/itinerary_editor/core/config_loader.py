# backend/itinerary_editor/core/config_loader.py

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    API_BASE_URL: str = "http://localhost:3001"
    REQUEST_TIMEOUT: float = 20.0
    AUTH_TOKEN: Optional[str] = None          # sent as the `auth-token` cookie
    LOGIN_PATH: str = "/login"
    LOG_DIR: Path = Path(__file__).resolve().parents[2] / "logs"
    LOG_LEVEL: str = "DEBUG"
    LOG_MAX_BYTES: int = 5 * 1024 * 1024
    LOG_BACKUP_COUNT: int = 5
    SERVICE_NAME: str = "itinerary-editor"
    environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
