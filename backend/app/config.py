"""
Application configuration using Pydantic Settings.
All environment variables are loaded here with sensible defaults.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    host: str = "0.0.0.0"
    port: int = 10000

    # Environment
    environment: str = "dev"
    log_level: str = "INFO"

    # Browser origins allowed to call the upload endpoint
    cors_origins: list[str] = [
        "http://localhost:5173",
        "https://retwit-e2ab6.web.app",
    ]

    # Timeweb Cloud S3 / S3-compatible storage
    s3_endpoint: str = "https://s3.timeweb.cloud"
    s3_access_key: Optional[str] = None  # S3 access key ID
    s3_secret_key: Optional[str] = None  # S3 secret access key
    s3_bucket_name: Optional[str] = None  # Bucket name

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
