"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Database
    DATABASE_URL: str

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # Scheduling
    SCHEDULER_ENABLED: bool = True
    PROCESSING_INTERVAL_SECONDS: float = 30.0
    STATUS_REPORT_INTERVAL_SECONDS: float = 300.0
    SHUTDOWN_TIMEOUT_SECONDS: float = 30.0

    # Loan processing
    PROCESSING_WORKERS: int = 5
    PROCESSING_QUEUE_CAPACITY: int = 100
    PROCESSING_DELAY_MIN_SECONDS: float = 0.0
    PROCESSING_DELAY_MAX_SECONDS: float = 0.0
    RETRY_UNASSIGNED_REVIEWS: bool = True

    # Notifications
    NOTIFICATION_WORKERS: int = 2
    NOTIFICATION_QUEUE_CAPACITY: int = 50
    NOTIFICATIONS_ENABLED: bool = True
    PUSH_NOTIFICATIONS_ENABLED: bool = True
    SMS_ENABLED: bool = True

    # Sample data
    SEED_SAMPLE_DATA: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def processing_delay_range(self) -> tuple[float, float]:
        """Simulated processing latency bounds in seconds."""
        low = max(self.PROCESSING_DELAY_MIN_SECONDS, 0.0)
        high = max(self.PROCESSING_DELAY_MAX_SECONDS, low)
        return low, high


# Global settings instance
settings = Settings()
