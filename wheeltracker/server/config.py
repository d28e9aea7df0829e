"""Configuration management for the FastAPI server.

This module handles configuration loading from environment variables,
providing sensible defaults for local development.
"""

import logging
import os

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Application configuration settings.

    Attributes:
        app_name: Application name
        version: Application version
        debug: Debug mode flag
        database_path: SQLite database file path (supports ~ expansion)
        cors_origins: List of allowed CORS origins
        host: Server host address
        port: Server port number
        log_level: Logging level name used when debug is off
    """

    app_name: str = "Wheel Tracker API"
    version: str = "1.0.0"
    debug: bool = False

    # Database configuration
    database_path: str = "~/.wheeltracker/wheeltracker.db"

    # CORS configuration - allow local development origins
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # Server configuration
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    class Config:
        """Pydantic configuration."""
        env_prefix = "WHEELTRACKER_"
        case_sensitive = False

    @property
    def database_url(self) -> str:
        """Get SQLAlchemy database URL.

        Returns:
            Database URL string for SQLAlchemy
        """
        if self.database_path == ":memory:":
            return "sqlite://"
        expanded_path = os.path.expanduser(self.database_path)
        return f"sqlite:///{expanded_path}"


def configure_logging(settings: Settings) -> None:
    """Configure root logging for the server and CLI.

    Args:
        settings: Settings providing debug flag and log level
    """
    level = logging.DEBUG if settings.debug else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )
    logging.basicConfig(level=level, format=LOG_FORMAT)
