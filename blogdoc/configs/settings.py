"""Application settings and configuration constants.

This module contains settings, constants, and configuration values
for the blog content composition package.
"""

from pathlib import Path
from typing import Literal

from pydantic import SecretStr
from pydantic_settings.main import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
BLOG_MEDIA_ROOT = "siteBlogs"
TEMP_POST_SEGMENT = "temp"
MAX_TITLE_LENGTH = 200


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/blogdoc.log"

    # Site the posts belong to (storage paths are namespaced by it)
    SITE_KEY: str = "default"

    # Storage Configuration
    STORAGE_PROVIDER: Literal["local", "cloudinary"] = "local"
    UPLOADS_DIR: Path = Path("uploads")
    MEDIA_BASE_URL: str = "http://localhost:8000/uploads"

    # Cloudinary Configuration
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: SecretStr = SecretStr("")


settings = Settings()
