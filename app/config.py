from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Inventory & Sales API"
    ENVIRONMENT: str = "local"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: Optional[str] = None
    DB_DRIVER: str = "mysql+pymysql"
    DB_HOST: Optional[str] = None
    DB_PORT: int = 3306
    DB_USER: Optional[str] = None
    DB_PASS: Optional[str] = None
    DB_NAME: Optional[str] = None
    SQLITE_BUSY_TIMEOUT_SECONDS: int = 30

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Sales
    # ==============================
    SALES_TRUST_CLIENT_TOTAL: bool = False

    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_HOST:
            url = URL.create(
                self.DB_DRIVER,
                username=self.DB_USER,
                password=self.DB_PASS,
                host=self.DB_HOST,
                port=self.DB_PORT,
                database=self.DB_NAME,
            )
            return url.render_as_string(hide_password=False)
        return "sqlite:///./inventory.db"


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
