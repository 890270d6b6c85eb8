from pathlib import Path
from typing import List, Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Abowe Waitlist API"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = False
    API_PREFIX: str = "/api"

    HOST: str = "0.0.0.0"
    PORT: int = 5001

    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # ── Database ────────────────────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./waitlist.db"

    # ── Waitlist ────────────────────────────────
    WAITLIST_SOURCE: str = "landing-page"
    DEFAULT_PAGE_SIZE: int = 50
    MAX_PAGE_SIZE: int = 1000

    # ── Logging ─────────────────────────────────
    LOG_DIR: str = "logs"
    LOG_FILE: str = "waitlist.log"

    # ── Client ──────────────────────────────────
    API_BASE_URL: str = "http://localhost:5001/api"
    API_TIMEOUT: float = 10.0

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
