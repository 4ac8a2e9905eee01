"""Store contract and the provisioning steps shared by all stores."""

from dataclasses import dataclass
from typing import (
    List,
    NamedTuple,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    runtime_checkable,
)

import structlog

from ..config.runtime import RuntimeConfig
from ..models.container import ContainerHandle, ReadinessStatus
from ..models.errors import NotReadyError, ScanError, TempStoreException
from ..services.provisioner import Provisioner

logger = structlog.get_logger(__name__)


@runtime_checkable
class Store(Protocol):
    """A running disposable backing service."""

    def url(self) -> str:
        """Endpoint clients connect to."""
        ...

    async def shutdown(self) -> None:
        """Destroy the container the store runs in."""
        ...


class ReadinessCheck(NamedTuple):
    """A log message to wait for, for how long (seconds) and how many times."""

    message: str
    timeout: float
    occurrence: int = 1


@dataclass
class ContainerLease:
    """Ownership of one provisioned container.

    ``owns_provisioner`` is set when the lease created its own provisioner
    and must close it on release.
    """

    provisioner: Provisioner
    handle: ContainerHandle
    owns_provisioner: bool = False

    @property
    def host(self) -> str:
        return self.handle.host

    async def release(self) -> None:
        """Remove the container.

        Raises:
            RemovalError
        """
        try:
            await self.provisioner.teardown(self.handle)
        finally:
            if self.owns_provisioner:
                self.provisioner.close()


async def lease_container(
    store: str,
    image: str,
    env: List[str],
    port: int,
    checks: Sequence[ReadinessCheck],
    provisioner: Optional[Provisioner] = None,
    runtime: Optional[RuntimeConfig] = None,
) -> Tuple[ContainerLease, int]:
    """Start a container, wait for every check in order and resolve ``port``.

    On any failure after the container was created it is torn down before
    the error propagates.

    Returns:
        The lease and the host port mapped to ``port``

    Raises:
        ImageError, CreationError, StartError: Provisioning failed
        ScanError: The output stream ended before a readiness message
        NotReadyError: A readiness message did not appear in time
        PortNotFoundError, PortFormatError: Port resolution failed
    """
    owns = provisioner is None
    if provisioner is None:
        provisioner = await Provisioner.create(runtime)

    try:
        handle = await provisioner.provision(image, env)
    except TempStoreException:
        if owns:
            provisioner.close()
        raise

    lease = ContainerLease(provisioner, handle, owns_provisioner=owns)
    try:
        for check in checks:
            outcome = await provisioner.await_ready(
                handle, check.message, check.timeout, check.occurrence
            )
            if outcome.status is ReadinessStatus.SCAN_ERROR:
                raise ScanError(
                    f"{store}: {outcome.detail}", container_id=handle.id
                )
            if outcome.status is ReadinessStatus.TIMED_OUT:
                raise NotReadyError(
                    f"Unable to confirm {store} instance has started: {outcome.detail}",
                    container_id=handle.id,
                )
        host_port = provisioner.resolve_port(handle, port)
    except TempStoreException:
        await provisioner.discard(handle)
        if owns:
            provisioner.close()
        raise

    logger.info(
        "Store ready",
        store=store,
        container_id=handle.id[:12],
        host=handle.host,
        port=host_port,
    )
    return lease, host_port


def netloc(host: str, port: int) -> str:
    """``host:port``, bracketing IPv6 literals."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"
