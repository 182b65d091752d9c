"""
Configuration settings for the GCM sender.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


# Endpoint of the GCM connection server owned by Google.
CONNECTION_SERVER_ENDPOINT = "https://android.googleapis.com/gcm/send"
# Endpoint of the FCM connection server by Firebase.
FCM_SERVER_ENDPOINT = "https://fcm.googleapis.com/fcm/send"

# Initial retry interval in milliseconds for exponential backoff.
BACKOFF_INITIAL_DELAY_MS = 1000
# Upper bound of a single backoff period in milliseconds.
MAX_BACKOFF_DELAY_MS = 1024000


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "GCM Sender"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "production" switches logs to JSON

    # === Connection Server ===
    GCM_API_KEY: str = ""
    GCM_ENDPOINT: str = CONNECTION_SERVER_ENDPOINT
    HTTP_TIMEOUT: float = 30.0  # seconds
    HTTP_MAX_CONNECTIONS: int = 10
    HTTP_MAX_KEEPALIVE_CONNECTIONS: int = 5

    # === Retry & Backoff ===
    BACKOFF_INITIAL_DELAY_MS: int = BACKOFF_INITIAL_DELAY_MS
    MAX_BACKOFF_DELAY_MS: int = MAX_BACKOFF_DELAY_MS


# Global settings instance
settings = Settings()
