# microdiary/api_service/core/settings.py

import logging
import socket
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

from microdiary import VERSION

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]

class Settings(BaseSettings):
    """Manages application-wide settings and configurations for the diary service."""
    model_config = SettingsConfigDict(
        env_file=PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "MicroDiary API"
    APP_VERSION: str = VERSION
    SCHEMA_VERSION: str = "1.0"

    # Database Configuration
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "microdiary"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "microdiary"
    DATABASE_URL: Optional[str] = None  # Full override, e.g. for a test database

    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # CORS Configuration
    ALLOWED_ORIGINS_STR: str = "http://localhost:5173,http://127.0.0.1:5173"

    @property
    def ALLOWED_ORIGINS(self) -> List[str]:
        if not self.ALLOWED_ORIGINS_STR:
            return []
        return [origin.strip() for origin in self.ALLOWED_ORIGINS_STR.split(",")]

    # Development settings
    DEBUG: bool = False

    # --- Provenance ---
    CLIENT_ID: str = socket.gethostname()  # Stable pseudonymous id stamped on every entry
    LOCAL_TZ: str = "Europe/London"

    # --- Gap analysis window ---
    DAY_START: str = "06:00"
    DAY_END: str = "23:59"
    MIN_GAP_MINUTES: int = 15

    # --- Activity categories offered by the form ---
    CATEGORIES: Dict[str, str] = {
        "work": "Work",
        "education": "Education",
        "leisure": "Leisure",
        "personal-care": "Personal Care",
        "household": "Household",
        "travel": "Travel",
        "social": "Social",
        "sleep": "Sleep / Rest",
        "other": "Other",
    }

settings = Settings()
