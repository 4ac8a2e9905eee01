"""Disposable PostgreSQL store."""

from typing import Optional

from ..config import Settings, settings
from ..services.provisioner import Provisioner
from .base import ContainerLease, ReadinessCheck, lease_container, netloc


class Postgres:
    """A running PostgreSQL instance inside a Docker container."""

    IMAGE = "postgres:latest"
    PORT = 5432
    USER = "testy"
    PASSWORD = "testpassword"
    # The entrypoint runs a temporary server for initdb scripts which also
    # logs READY_MESSAGE; the real server logs it a second time.
    INIT_MESSAGE = "PostgreSQL init process complete; ready for start up."
    READY_MESSAGE = "ready to accept connections"

    def __init__(self, url: str, lease: ContainerLease):
        self._url = url
        self._lease = lease

    @classmethod
    async def start(
        cls,
        config: Optional[Settings] = None,
        provisioner: Optional[Provisioner] = None,
    ) -> "Postgres":
        """Start a temporary PostgreSQL server and wait for the final server."""
        config = config or settings
        timeout = config.postgres_ready_timeout
        lease, port = await lease_container(
            "postgres",
            cls.IMAGE,
            [f"POSTGRES_PASSWORD={cls.PASSWORD}", f"POSTGRES_USER={cls.USER}"],
            cls.PORT,
            [
                ReadinessCheck(cls.INIT_MESSAGE, timeout),
                ReadinessCheck(cls.READY_MESSAGE, timeout, occurrence=2),
            ],
            provisioner=provisioner,
            runtime=config.runtime,
        )
        url = (
            f"postgres://{cls.USER}:{cls.PASSWORD}@{netloc(lease.host, port)}"
            f"/{cls.USER}?sslmode=disable"
        )
        return cls(url, lease)

    @property
    def container_id(self) -> str:
        return self._lease.handle.id

    def url(self) -> str:
        """libpq connection URL for the test database."""
        return self._url

    async def shutdown(self) -> None:
        """Stop PostgreSQL and destroy its container."""
        await self._lease.release()

    async def __aenter__(self) -> "Postgres":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()
