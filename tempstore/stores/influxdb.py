"""Disposable InfluxDB store."""

from typing import Optional

from ..config import Settings, settings
from ..services.provisioner import Provisioner
from .base import ContainerLease, ReadinessCheck, lease_container, netloc


class InfluxDB:
    """A running InfluxDB instance inside a Docker container."""

    IMAGE = "tutum/influxdb:latest"
    PORT = 8086
    DATABASE = "testdb"
    READY_MESSAGE = "Creating database"

    def __init__(self, url: str, lease: ContainerLease):
        self._url = url
        self._lease = lease

    @classmethod
    async def start(
        cls,
        config: Optional[Settings] = None,
        provisioner: Optional[Provisioner] = None,
    ) -> "InfluxDB":
        """Start a temporary InfluxDB server with ``testdb`` pre-created."""
        config = config or settings
        lease, port = await lease_container(
            "influxdb",
            cls.IMAGE,
            [f"PRE_CREATE_DB={cls.DATABASE}"],
            cls.PORT,
            [ReadinessCheck(cls.READY_MESSAGE, config.influxdb_ready_timeout)],
            provisioner=provisioner,
            runtime=config.runtime,
        )
        return cls(f"http://{netloc(lease.host, port)}/{cls.DATABASE}", lease)

    @property
    def container_id(self) -> str:
        return self._lease.handle.id

    def url(self) -> str:
        """HTTP API URL; the path names the database."""
        return self._url

    async def shutdown(self) -> None:
        """Stop InfluxDB and destroy its container."""
        await self._lease.release()

    async def __aenter__(self) -> "InfluxDB":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()
