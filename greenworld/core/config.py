"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENV: str = "dev"
    VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./greenworld.db"
    AUTO_CREATE_TABLES: bool = True

    # Session token (Authorization: Bearer)
    JWT_SECRET: str = "greenworld-secret-key-change-in-production"
    JWT_EXPIRES_DAYS: int = 7

    # CORS
    CORS_ORIGINS: str = "http://localhost:8080,http://localhost:5173"

    # Health probe
    PING_MESSAGE: str = "ping"

    # Error Tracking (optional, set in production)
    SENTRY_DSN: str = ""

    # Rate Limiting (requests per minute)
    RATE_LIMIT_AUTH: int = 10  # Login / register attempts
    RATE_LIMIT_API: int = 120  # General API
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def is_dev(self) -> bool:
        """Error detail and API docs are only exposed in dev."""
        return self.ENV == "dev"


settings = Settings()
