"""Configuration settings for the catalog service"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings"""

    # API Settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Catalog AI API"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: str = "*"

    # Text generation provider
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-3.5-turbo"
    AI_TIMEOUT_SECONDS: float = 15.0

    # Observability
    ENABLE_METRICS: bool = True

    # Inbound rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "100/minute"
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # Relational schema (not used by the in-memory store)
    DATABASE_URL: str = "sqlite:///./data/catalog.db"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    def cors_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS into a list; '*' stays permissive"""
        raw = (self.ALLOWED_ORIGINS or "").strip()
        if raw in ("", "*"):
            return ["*"]
        return [origin.strip() for origin in raw.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance"""
    return Settings()
