"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts against a local MongoDB instance without any setup.  In
a production deployment you should override these via environment
variables.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional


def _env(name: str, default: str) -> str:
    return os.getenv(name, default)


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    Values are read when an instance is created, so tests can adjust
    the environment and build a fresh ``Settings()``.
    """

    project_name: str = field(default_factory=lambda: _env("PROJECT_NAME", "Calculator API"))
    api_version: str = field(default_factory=lambda: _env("API_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE") or None)

    # Connection string for the document store.  The database named in
    # the URI path is used; ``database_name`` applies only when the URI
    # does not name one.
    mongodb_uri: str = field(
        default_factory=lambda: _env("MONGODB_URI", "mongodb://localhost:27017/calculations")
    )
    database_name: str = field(default_factory=lambda: _env("DATABASE_NAME", "calculations"))
    collection_name: str = field(default_factory=lambda: _env("COLLECTION_NAME", "calculations"))

    # Server selection and socket timeout applied to every storage call.
    storage_timeout_ms: int = field(default_factory=lambda: int(_env("STORAGE_TIMEOUT_MS", "5000")))

    host: str = field(default_factory=lambda: _env("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(_env("PORT", "5000")))

    default_list_limit: int = field(default_factory=lambda: int(_env("DEFAULT_LIST_LIMIT", "10")))
    max_list_limit: int = field(default_factory=lambda: int(_env("MAX_LIST_LIMIT", "100")))

    # Comma‑separated list of allowed CORS origins.  ``*`` allows any.
    cors_origins: str = field(default_factory=lambda: _env("CORS_ORIGINS", "*"))

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
