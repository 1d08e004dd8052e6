"""
Pet Adoption Backend — Application Configuration
==================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.

Connection string resolution:
    DB_USER + DB_PASS set  → mongodb+srv://<user>:<pass>@<DB_CLUSTER_HOST>/...
    otherwise              → DATABASE_URL (local MongoDB by default)
"""

from typing import List, Optional
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. Production deployments override
    the database credentials and CORS origins.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Plain connection string, used when no Atlas credentials are given
    database_url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URL",
    )

    # Atlas credentials; both must be set for the SRV URI to be used
    db_user: Optional[str] = Field(default=None)
    db_pass: Optional[str] = Field(default=None)
    db_cluster_host: str = Field(default="cluster0.v5wedkm.mongodb.net")

    database_name: str = Field(default="PetAdoption")

    # How long the driver waits for a reachable server before failing an operation
    db_server_selection_timeout_ms: int = Field(default=5000, ge=100, le=60000)

    # ── Authorization ─────────────────────────────────────────────────────
    # Header carrying the caller's email for admin-gated routes
    admin_header: str = Field(default="x-user-email")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated list; "*" allows every origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1, le=65535, validation_alias="PORT")

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

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def mongodb_uri(self) -> str:
        """
        What:  The effective MongoDB connection string.
        How:   Atlas SRV URI when both credentials are configured, otherwise
               `database_url` verbatim.
        """
        if self.db_user and self.db_pass:
            return (
                f"mongodb+srv://{quote_plus(self.db_user)}:{quote_plus(self.db_pass)}"
                f"@{self.db_cluster_host}/?retryWrites=true&w=majority&appName=Cluster0"
            )
        return self.database_url


# Singleton instance, imported throughout the application
settings = Settings()
