"""
Configuration settings for the Room Staging API
"""
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Room Staging API"
    version: str = "1.0.0"
    environment: str = "development"

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]

    # Google AI Studio
    google_ai_api_key: str = ""
    # Cheap model for item listing (text output only)
    gemini_text_model: str = "gemini-2.5-flash"
    # Image models tried in order, most available first
    gemini_image_models: List[str] = [
        "gemini-2.5-flash-image",
        "gemini-3-pro-image-preview",
    ]

    # Retry on 503 (model overloaded)
    retry_max_retries: int = 3
    retry_initial_delay_ms: int = 1000

    # Furnish variants
    furnish_max_variants: int = 5

    # File upload
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    allowed_image_types: List[str] = ["image/jpeg", "image/png", "image/webp"]

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Allow extra fields from .env
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


# Global settings instance
settings = Settings()
