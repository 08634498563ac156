"""
Configuration management for the Incident Tracker API.

Centralizes all configuration with type-safe defaults and validation.
"""

import os
from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

SUPPORTED_INCIDENT_STORES = ('memory', 'sqlite')


class AppConfig(BaseSettings):
    """Application configuration with environment variable support."""

    # Flask Configuration
    flask_secret_key: str = Field(
        default_factory=lambda: os.urandom(32).hex(),
        description="Secret key for Flask sessions"
    )
    flask_debug: bool = Field(
        default=False,
        description="Enable Flask debug mode"
    )
    flask_host: str = Field(
        default="0.0.0.0",
        description="Flask server host"
    )
    flask_port: int = Field(
        default=8080,
        description="Flask server port"
    )
    testing: bool = Field(
        default=False,
        description="Enable testing mode"
    )

    # Rate Limiting Configuration
    rate_limit_enabled: bool = Field(
        default=False,
        description="Apply RATE_LIMIT_DEFAULT to the incident endpoints"
    )
    rate_limit_default: str = Field(
        default="100 per minute",
        description="Rate limit applied to the incident endpoints"
    )

    # CORS Configuration
    cors_enabled: bool = Field(
        default=True,
        description="Enable CORS"
    )
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    # Security Configuration
    https_enabled: bool = Field(
        default=False,
        description="Redirect to HTTPS with Talisman (enable when TLS is not terminated upstream)"
    )

    # Storage Configuration
    incident_store: str = Field(
        default="memory",
        description="Incident storage backend (memory or sqlite)"
    )
    incident_db_path: str = Field(
        default="incidents.db",
        description="Path to the SQLite database used by the sqlite backend"
    )

    # Health Monitoring Configuration
    health_check_enabled: bool = Field(
        default=True,
        description="Enable readiness and deep health checks"
    )
    health_cache_timeout: int = Field(
        default=30,
        description="Seconds a health check result is reused"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: str = Field(
        default="logs/app.log",
        description="Log file path"
    )
    log_max_bytes: int = Field(
        default=10485760,  # 10MB
        description="Maximum log file size in bytes"
    )
    log_backup_count: int = Field(
        default=10,
        description="Number of backup log files to keep"
    )

    @field_validator('flask_debug', 'testing', 'rate_limit_enabled', 'cors_enabled',
                     'https_enabled', 'health_check_enabled', mode='before')
    @classmethod
    def parse_bool(cls, v):
        """Parse boolean values from environment strings."""
        if isinstance(v, str):
            return v.lower() in ('true', '1', 'yes', 'on')
        return v

    @field_validator('incident_store', 'log_level', mode='before')
    @classmethod
    def normalize_choice(cls, v):
        if isinstance(v, str):
            v = v.strip()
        return v

    def get_cors_origins(self) -> List[str]:
        """Allowed CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(',') if origin.strip()]

    def validate_storage(self) -> List[str]:
        """
        Validate the storage settings.

        Returns:
            List of configuration problems (empty if all valid)
        """
        problems = []

        if self.incident_store.lower() not in SUPPORTED_INCIDENT_STORES:
            problems.append(
                f"INCIDENT_STORE must be one of {', '.join(SUPPORTED_INCIDENT_STORES)} "
                f"(got '{self.incident_store}')"
            )

        if self.incident_store.lower() == 'sqlite' and not self.incident_db_path:
            problems.append("INCIDENT_DB_PATH is required for the sqlite store")

        return problems

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra environment variables


# Global configuration instance
config = AppConfig()


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    return config
