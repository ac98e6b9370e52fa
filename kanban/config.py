"""Kanban board configuration settings."""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Database
    DATA_PATH: str = Field(default="/data/board.db")
    DATABASE_URL: Optional[str] = None

    # Application
    APP_NAME: str = "Kanban"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    CORS_ORIGINS: str = "*"
    FRONTEND_DIR: Optional[str] = None

    # Ordering
    STRICT_REORDER: bool = False  # unknown ids in a reorder batch fail the whole batch

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"

    # Client
    POLL_INTERVAL_SECONDS: float = 5.0
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite:///{self.DATA_PATH}"

    @property
    def cors_origins_list(self) -> List[str]:
        """Return the configured CORS origins as a sanitized list."""

        if not self.CORS_ORIGINS:
            return []

        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
