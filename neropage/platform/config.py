from pathlib import Path
from typing import List, Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Neropage"
    ENVIRONMENT: Literal["local", "staging", "production", "test"] = "local"
    DEBUG: bool = True
    SINGLE_TENANT_MODE: bool = False

    # ── Database ────────────────────────────────
    # Empty URL switches the app to the in-memory store
    DATABASE_URL: str = ""
    AUTO_CREATE_TABLES: bool = True

    # ── Sessions / CSRF ─────────────────────────
    SESSION_SECRET: str = "neropage-secret-key-change-in-production"
    SESSION_COOKIE: str = "neropage.sid"
    SESSION_MAX_AGE: int = 30 * 24 * 60 * 60  # 30 days
    CSRF_HEADER_NAME: str = "csrf-token"

    # ── JWT / Auth ──────────────────────────────
    JWT_SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440
    ALGORITHM: str = "HS256"

    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    # ── Uploads ─────────────────────────────────
    UPLOAD_DIR: str = "static/uploads"
    MAX_IMAGE_SIZE: int = 5 * 1024 * 1024  # 5MB
    MAX_VIDEO_SIZE: int = 50 * 1024 * 1024  # 50MB

    # ── Logging ─────────────────────────────────
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
