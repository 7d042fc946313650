"""
Application configuration.
"""

from typing import Any, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # Core Settings
    PROJECT_NAME: str = "Donation Analytics"
    PROJECT_DESCRIPTION: str = "Analytics API over the donation dataset"
    SERVICE_NAME: str = "donation-microservice"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # API Settings
    API_PREFIX: str = "/api"
    FRONTEND_URL: str = "http://localhost:3000"
    CORS_METHODS: List[str] = ["GET", "POST", "PUT", "DELETE"]
    CORS_HEADERS: List[str] = ["Content-Type", "Authorization"]

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    # Peers whose X-Forwarded-For header is believed
    TRUSTED_PROXIES: List[str] = []

    # Dataset Settings
    DATASET_PATH: Optional[str] = None

    @field_validator("DATASET_PATH", mode="before")
    @classmethod
    def empty_dataset_path(cls, v: Any) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Sentry Settings
    SENTRY_DSN: Optional[str] = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    # Prometheus Metrics
    ENABLE_METRICS: bool = True

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    # Tracing Settings
    ENABLE_TRACING: bool = True
    OTLP_ENDPOINT: Optional[str] = None

    @property
    def cors_origins(self) -> List[str]:
        if self.FRONTEND_URL == "*":
            return ["*"]
        return [origin.strip() for origin in self.FRONTEND_URL.split(",") if origin.strip()]


settings = Settings()
