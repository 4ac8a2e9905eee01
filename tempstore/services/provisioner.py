"""Provisioning facade used by store adapters.

Exposes the four core operations as coroutines. Blocking docker calls run in
the default thread pool so the event loop stays responsive while an image is
pulled or a container is removed.
"""

from typing import List, Optional

import structlog

from ..config.runtime import RuntimeConfig
from ..models.container import ContainerHandle, ReadinessOutcome
from ..models.errors import RemovalError
from .container.manager import ContainerManager
from .container.ports import find_port
from .container.readiness import ReadinessWatcher
from .container.utils import run_in_executor

logger = structlog.get_logger(__name__)


class Provisioner:
    """Provision, watch, resolve and tear down disposable containers."""

    def __init__(self, manager: ContainerManager):
        """Initialize the provisioner.

        Args:
            manager: Container manager bound to one Docker daemon
        """
        self._manager = manager
        self._watcher = ReadinessWatcher(manager.client)

    @classmethod
    async def create(cls, config: Optional[RuntimeConfig] = None) -> "Provisioner":
        """Build a provisioner, connecting to the daemon off the event loop."""
        manager = await run_in_executor(ContainerManager, config)
        return cls(manager)

    @property
    def manager(self) -> ContainerManager:
        return self._manager

    @property
    def host(self) -> str:
        return self._manager.host

    async def provision(
        self, image: str, env: Optional[List[str]] = None
    ) -> ContainerHandle:
        """Pull ``image`` and start a container from it.

        Raises:
            ImageError, CreationError, StartError
        """
        return await run_in_executor(
            self._manager.start_container, image, list(env or [])
        )

    async def await_ready(
        self,
        handle: ContainerHandle,
        substring: str,
        timeout: float,
        occurrence: int = 1,
    ) -> ReadinessOutcome:
        """Race ``substring`` in the container output against ``timeout``."""
        return await self._watcher.watch_for_string_in_logs(
            handle, substring, timeout, occurrence
        )

    def resolve_port(self, handle: ContainerHandle, internal_port: int) -> int:
        """Host port published for ``internal_port``.

        Raises:
            PortNotFoundError, PortFormatError
        """
        return find_port(handle, internal_port)

    async def teardown(self, handle: ContainerHandle) -> None:
        """Force-remove the container.

        Raises:
            RemovalError
        """
        await run_in_executor(self._manager.remove, handle.id)

    async def discard(self, handle: ContainerHandle) -> None:
        """Tear down a container after a failed provisioning step.

        The removal error is logged rather than raised so the original
        failure reaches the caller.
        """
        try:
            await self.teardown(handle)
        except RemovalError as e:
            logger.warning(
                "Failed to discard container",
                container_id=handle.id[:12],
                error=e.message,
            )

    def close(self) -> None:
        """Close the underlying docker client."""
        self._manager.close()
