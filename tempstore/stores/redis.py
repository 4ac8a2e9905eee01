"""Disposable Redis store."""

from typing import Optional

from ..config import Settings, settings
from ..services.provisioner import Provisioner
from .base import ContainerLease, ReadinessCheck, lease_container, netloc


class Redis:
    """A running Redis instance inside a Docker container."""

    IMAGE = "redis:latest"
    PORT = 6379
    READY_MESSAGE = "Ready to accept connections"

    def __init__(self, url: str, lease: ContainerLease):
        self._url = url
        self._lease = lease

    @classmethod
    async def start(
        cls,
        config: Optional[Settings] = None,
        provisioner: Optional[Provisioner] = None,
    ) -> "Redis":
        """Start a temporary Redis server and wait until it accepts connections."""
        config = config or settings
        lease, port = await lease_container(
            "redis",
            cls.IMAGE,
            [],
            cls.PORT,
            [ReadinessCheck(cls.READY_MESSAGE, config.redis_ready_timeout)],
            provisioner=provisioner,
            runtime=config.runtime,
        )
        return cls(f"tcp://{netloc(lease.host, port)}", lease)

    @property
    def container_id(self) -> str:
        return self._lease.handle.id

    def url(self) -> str:
        """``tcp://host:port`` of the Redis server."""
        return self._url

    async def shutdown(self) -> None:
        """Stop Redis and destroy its container."""
        await self._lease.release()

    async def __aenter__(self) -> "Redis":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()
