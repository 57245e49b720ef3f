from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Persistence
    # "memory" keeps state for the lifetime of the process (page-scoped storage)
    STORAGE_BACKEND: Literal["memory", "sql"] = "memory"
    TREE_SOURCE: Literal["static", "sql"] = "static"
    DATABASE_URL: str = "sqlite:///decision_tree.db"

    # Telemetry
    TRACKING_ENABLED: bool = True
    TRACKING_BASE_URL: str = ""

    # Cookie side effects. None means a session cookie.
    COOKIE_DAYS: Optional[int] = None

    LOG_LEVEL: str = "INFO"

    # Loads from a .env file in the root directory
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Singleton instance
settings = Settings()
