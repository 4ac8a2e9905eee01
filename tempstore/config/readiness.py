"""Readiness timeouts for the bundled stores."""

from pydantic import Field
from pydantic_settings import BaseSettings


class ReadinessConfig(BaseSettings):
    """Seconds to wait for each store's readiness message."""

    redis_ready_timeout: float = Field(default=10.0, gt=0, le=600)
    postgres_ready_timeout: float = Field(default=30.0, gt=0, le=600)
    influxdb_ready_timeout: float = Field(default=10.0, gt=0, le=600)

    class Config:
        env_prefix = ""
        extra = "ignore"
