"""Container lifecycle management."""

from typing import List, Optional, Tuple

import docker
import structlog
from docker.models.containers import Container
from docker.utils import parse_repository_tag

from ...config import settings
from ...config.runtime import RuntimeConfig
from ...models.container import ContainerHandle, RuntimeConnection
from ...models.errors import (
    CreationError,
    ImageError,
    RemovalError,
    StartError,
)
from .client import DOCKER_ERRORS, DockerClientFactory
from .naming import new_uuid

logger = structlog.get_logger(__name__)


class ContainerManager:
    """Manages Docker container lifecycle operations.

    A stateless facade over the docker SDK: it keeps the resolved daemon
    connection and client, and nothing about the containers it starts.
    All methods block on daemon I/O.
    """

    def __init__(
        self,
        config: Optional[RuntimeConfig] = None,
        client: Optional[docker.DockerClient] = None,
    ):
        """Initialize the container manager.

        Args:
            config: Daemon connection settings; read from the environment
                when omitted
            client: Pre-built docker client (the factory builds one otherwise)
        """
        self._config = config or settings.runtime
        factory = DockerClientFactory(self._config)
        self._connection: RuntimeConnection = factory.resolve()
        self._client = client or factory.create_client()

    @property
    def host(self) -> str:
        """Address on which started containers publish their ports."""
        return self._connection.host

    @property
    def connection(self) -> RuntimeConnection:
        return self._connection

    @property
    def client(self) -> docker.DockerClient:
        return self._client

    def pull_image(self, reference: str) -> None:
        """Pull an image from its registry.

        Always called before creation; the daemon makes it a no-op when the
        image is already current.

        Raises:
            ImageError: The pull failed
        """
        repository, tag = self._split_reference(reference)
        logger.info("Pulling image", repository=repository, tag=tag)
        try:
            self._client.images.pull(repository, tag=tag)
        except DOCKER_ERRORS as e:
            logger.error(
                "Image pull failed", repository=repository, tag=tag, error=str(e)
            )
            raise ImageError(f"Failed to pull image {reference}: {e}") from e

    def create_and_start(self, image: str, env: List[str]) -> ContainerHandle:
        """Create and start a container with all exposed ports published.

        A container that was created but could not be started is removed
        again before the error is raised.

        Args:
            image: Image reference
            env: Environment entries in ``KEY=value`` form

        Returns:
            ContainerHandle for the running container

        Raises:
            GenerationError: No unique name could be generated
            CreationError: The daemon refused to create the container
            StartError: The container could not be started or inspected
        """
        name = new_uuid()

        try:
            container: Container = self._client.containers.create(
                image,
                name=name,
                environment=list(env),
                publish_all_ports=True,
                detach=True,
            )
        except DOCKER_ERRORS as e:
            logger.error(
                "Container creation failed", image=image, name=name, error=str(e)
            )
            raise CreationError(f"Failed to create container from {image}: {e}") from e

        # Created but not yet confirmed running
        pending: Optional[str] = container.id
        try:
            container.start()
            container.reload()
            try:
                handle = ContainerHandle.from_attrs(container.attrs, self.host)
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                raise StartError(
                    f"Unreadable inspect payload for container {name}: {e!r}",
                    container_id=container.id,
                ) from e
            pending = None
        except DOCKER_ERRORS as e:
            logger.error(
                "Container start failed",
                container_id=container.id[:12],
                image=image,
                error=str(e),
            )
            raise StartError(
                f"Failed to start container {name}: {e}", container_id=container.id
            ) from e
        finally:
            if pending is not None:
                self._discard(pending)

        logger.info(
            "Started container",
            container_id=handle.id[:12],
            name=name,
            image=image,
            ports=sorted(handle.ports),
        )
        return handle

    def start_container(self, image: str, env: List[str]) -> ContainerHandle:
        """Pull the image, then create and start a container from it."""
        self.pull_image(image)
        return self.create_and_start(image, env)

    def remove(self, container_id: str) -> None:
        """Force-remove a container along with the anonymous volumes it owns.

        Raises:
            RemovalError: The daemon could not remove the container
        """
        try:
            self._client.api.remove_container(container_id, v=True, force=True)
        except DOCKER_ERRORS as e:
            logger.warning(
                "Failed to remove container",
                container_id=container_id[:12],
                error=str(e),
            )
            raise RemovalError(
                f"Failed to remove container {container_id}: {e}",
                container_id=container_id,
            ) from e
        logger.debug("Removed container", container_id=container_id[:12])

    def close(self) -> None:
        """Close the docker client."""
        self._client.close()

    def _discard(self, container_id: str) -> None:
        """Best-effort removal of a partially provisioned container."""
        try:
            self.remove(container_id)
        except RemovalError:
            logger.warning(
                "Leaving partially provisioned container behind",
                container_id=container_id[:12],
            )

    @staticmethod
    def _split_reference(reference: str) -> Tuple[str, str]:
        repository, tag = parse_repository_tag(reference)
        return repository, tag or "latest"
