"""Configuration management for tempstore.

This module provides a unified Settings class that reads the environment
once and hands out grouped configuration values.

Usage:
    from tempstore.config import settings

    # Access grouped settings
    settings.runtime.docker_host
    settings.readiness.redis_ready_timeout

    # Or the flat fields
    settings.docker_host

Components never read ``settings`` implicitly when a config value is passed
to them, so independently configured managers can coexist in one process.
"""

from typing import Optional

import structlog
from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging import LoggingConfig
from .readiness import ReadinessConfig
from .runtime import DEFAULT_DOCKER_HOST, RuntimeConfig


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Docker daemon connection
    docker_host: str = Field(default=DEFAULT_DOCKER_HOST)
    docker_cert_path: Optional[str] = Field(
        default=None,
        description="Directory holding ca.pem, cert.pem and key.pem for TLS",
    )

    # Readiness timeouts (seconds)
    redis_ready_timeout: float = Field(default=10.0, gt=0, le=600)
    postgres_ready_timeout: float = Field(default=30.0, gt=0, le=600)
    influxdb_ready_timeout: float = Field(default=10.0, gt=0, le=600)

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    @validator("docker_host")
    def validate_docker_host(cls, v):
        """Reject an empty daemon endpoint; fall back to the local socket."""
        v = (v or "").strip()
        if not v:
            structlog.get_logger("config").warning(
                "DOCKER_HOST is empty; using the local socket",
                default=DEFAULT_DOCKER_HOST,
            )
            return DEFAULT_DOCKER_HOST
        return v

    @validator("docker_cert_path")
    def normalize_cert_path(cls, v):
        """Treat an empty DOCKER_CERT_PATH as unset."""
        if v is not None and not v.strip():
            return None
        return v

    @validator("log_format")
    def validate_log_format(cls, v):
        if v.lower() not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return v.lower()

    @property
    def runtime(self) -> RuntimeConfig:
        """Access Docker runtime configuration group."""
        return RuntimeConfig(
            docker_host=self.docker_host,
            docker_cert_path=self.docker_cert_path,
        )

    @property
    def readiness(self) -> ReadinessConfig:
        """Access readiness timeout configuration group."""
        return ReadinessConfig(
            redis_ready_timeout=self.redis_ready_timeout,
            postgres_ready_timeout=self.postgres_ready_timeout,
            influxdb_ready_timeout=self.influxdb_ready_timeout,
        )

    @property
    def logging(self) -> LoggingConfig:
        """Access logging configuration group."""
        return LoggingConfig(log_level=self.log_level, log_format=self.log_format)


# Global settings instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "RuntimeConfig",
    "ReadinessConfig",
    "LoggingConfig",
    "DEFAULT_DOCKER_HOST",
]
