"""Docker client factory."""

import docker
import requests
import structlog
from docker.errors import DockerException
from docker.tls import TLSConfig

from ...config.runtime import RuntimeConfig
from ...models.container import RuntimeConnection
from ...models.errors import RuntimeConnectionError
from .endpoint import parse_endpoint

logger = structlog.get_logger(__name__)

# docker-py wraps HTTP status errors but lets socket and transport failures
# through as requests exceptions.
DOCKER_ERRORS = (DockerException, requests.exceptions.RequestException)


class DockerClientFactory:
    """Builds docker SDK clients from a RuntimeConfig."""

    def __init__(self, config: RuntimeConfig):
        self._config = config

    def resolve(self) -> RuntimeConnection:
        """Resolve the daemon endpoint into a RuntimeConnection."""
        endpoint = self._config.docker_host
        host = parse_endpoint(endpoint)
        return RuntimeConnection(
            scheme=endpoint.split("://", 1)[0].lower(),
            host=host,
            endpoint=endpoint,
            tls_cert_path=self._config.docker_cert_path,
        )

    def _tls_config(self) -> TLSConfig:
        # The daemon is configured for TLS (docker-machine, boot2docker or a
        # remote host), so client certificates signed by its CA are required.
        return TLSConfig(
            client_cert=(self._config.client_cert, self._config.client_key),
            ca_cert=self._config.ca_cert,
            verify=True,
        )

    def create_client(self) -> docker.DockerClient:
        """Create a client for the configured daemon.

        Raises:
            RuntimeConnectionError: TLS material is unusable or the daemon
                cannot be reached
        """
        try:
            if self._config.tls_enabled:
                client = docker.DockerClient(
                    base_url=self._config.docker_host, tls=self._tls_config()
                )
            else:
                client = docker.DockerClient(base_url=self._config.docker_host)
        except DOCKER_ERRORS as e:
            logger.error(
                "Failed to create Docker client",
                endpoint=self._config.docker_host,
                tls=self._config.tls_enabled,
                error=str(e),
            )
            raise RuntimeConnectionError(
                f"Cannot connect to Docker at {self._config.docker_host}: {e}"
            ) from e

        logger.debug(
            "Docker client created",
            endpoint=self._config.docker_host,
            tls=self._config.tls_enabled,
        )
        return client
