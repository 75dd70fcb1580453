"""Module: config."""

from pydantic_settings import BaseSettings, SettingsConfigDict


# Centralized runtime configuration loaded from environment variables.
class Settings(BaseSettings):
    # Primary SQLAlchemy connection string for the backend database.
    database_url: str = "sqlite:///./vetcare.db"
    # Create missing tables on startup (dev convenience; production uses alembic).
    auto_create_tables: bool = True

    # Frontend origins allowed by the CORS middleware.
    cors_origins: list[str] = [
        "http://localhost:3001",
        "http://127.0.0.1:3001",
    ]

    # Bind address for `vetcare-api` (uvicorn).
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    log_level: str = "INFO"

    # Lifetime of bearer tokens issued by /auth/login.
    access_token_expire_minutes: int = 1440

    # WhatsApp gateway used by the reminder job.
    messaging_base_url: str = "http://mock-messaging:8003"
    messaging_sender_number: str | None = None
    messaging_timeout_seconds: float = 10.0
    # Country code prepended to local owner phone numbers.
    default_country_code: str = "964"

    # Configure pydantic-settings to also load values from local .env file.
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Global settings instance imported by app modules at runtime.
settings = Settings()
