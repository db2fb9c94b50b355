"""
Hotel Listings API: Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.

Design Decision:
    Paths (record file, upload directory) and the public base URL used to build
    image links are all settings, so the same code runs locally, in a container
    with mounted volumes, and in tests pointed at temporary directories.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development-friendly defaults. Attributes are grouped by
    concern for readability.
    """

    # ── Record Store ──────────────────────────────────────────────────────
    # What: The single durable file holding the whole hotel collection
    # Format: JSON array of hotel objects, pretty-printed (indent=2)
    database_file: str = Field(
        default="./data/database.json",
        description="Path of the JSON file holding every hotel record",
    )

    # What: Create an empty collection file at startup when none exists
    # A file that exists but cannot be parsed is never overwritten
    initialize_database_file: bool = Field(default=True)

    # ── Uploaded Images ───────────────────────────────────────────────────
    # What: Directory receiving raw uploaded image bytes
    uploads_dir: str = Field(default="./uploads")

    # What: Base address and static path used to build absolute image URLs
    # Example: http://localhost:3000 + /uploads → http://localhost:3000/uploads/<name>
    public_base_url: str = Field(default="http://localhost:3000")
    uploads_url_prefix: str = Field(default="/uploads")

    # What: Multipart field carrying the image files, and how many are accepted
    upload_field_name: str = Field(default="images")
    max_upload_files: int = Field(default=10, ge=1, le=100)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (split by cors_origins_list)
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

    # What: "development" exposes exception details in 500 responses
    # Anything else keeps them server-side (logged only)
    environment: str = Field(default="production")

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("uploads_url_prefix")
    @classmethod
    def validate_uploads_url_prefix(cls, v: str) -> str:
        """Normalizes the static prefix to a single leading slash, no trailing slash."""
        stripped = v.strip().strip("/")
        if not stripped:
            raise ValueError("uploads_url_prefix must not be empty")
        return f"/{stripped}"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def uploads_base_url(self) -> str:
        """Absolute URL under which uploaded files are served."""
        return f"{self.public_base_url.rstrip('/')}{self.uploads_url_prefix}"

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_FILE and database_file both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
