import logging
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Config(BaseSettings):
    API_V1_STR: str = "/api"
    APP_NAME: str = "Moment Review Service"
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000

    # Logging configuration
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "DEBUG"
    CLUSTERING_LOG_LEVEL: str = "INFO"

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:9090"

    # Storage ("local" = JSON files under DATA_DIR, "memory" = process only)
    STORAGE_TYPE: str = "local"
    DATA_DIR: str = "./data"
    EVENTS_FILE: str = "events.json"
    REVIEWED_FILE: str = "reviewed.json"

    # Clustering defaults
    CLUSTER_MODE: str = "smart"
    CLUSTER_GAP: str = "medium"
    SMART_SENSITIVITY: str = "balanced"
    MIN_SET_SIZE: int = 1

    # Catalog
    DISPLAY_TIMEZONE: str = "UTC"
    SUGGESTED_LIMIT: int = 5

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    @property
    def events_path(self) -> Path:
        return Path(self.DATA_DIR) / self.EVENTS_FILE

    @property
    def reviewed_path(self) -> Path:
        return Path(self.DATA_DIR) / self.REVIEWED_FILE

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


configs = Config()
