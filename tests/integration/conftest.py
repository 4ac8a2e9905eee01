"""Fixtures for tests against a live Docker daemon.

These tests start real containers, so they need a reachable daemon and
network access to pull the store images. Configure the daemon the same way
as the docker CLI:
    DOCKER_HOST: Daemon endpoint (default: unix:///var/run/docker.sock)
    DOCKER_CERT_PATH: Directory with ca.pem, cert.pem and key.pem for TLS

Example:
    DOCKER_HOST="tcp://192.168.59.103:2376" \
    DOCKER_CERT_PATH="$HOME/.docker/machine/machines/default" \
    pytest tests/integration/ -v -m integration

Every test here is skipped when the daemon cannot be reached.
"""

import pytest
from tempstore.config import Settings
from tempstore.models.errors import TempStoreException
from tempstore.services.container.client import DOCKER_ERRORS
from tempstore.services.container.manager import ContainerManager
from tempstore.services.provisioner import Provisioner


@pytest.fixture(scope="session")
def live_settings():
    return Settings()


@pytest.fixture(scope="session")
def docker_manager(live_settings):
    """ContainerManager for the configured daemon, or skip."""
    try:
        manager = ContainerManager(live_settings.runtime)
        manager.client.ping()
    except (TempStoreException, *DOCKER_ERRORS) as e:
        pytest.skip(f"Docker daemon not available: {e}")
    yield manager
    manager.close()


@pytest.fixture
def live_provisioner(docker_manager):
    """Provisioner sharing the session's daemon connection."""
    return Provisioner(docker_manager)


@pytest.fixture
def container_exists(docker_manager):
    """Whether the daemon still lists a container, running or not."""

    def _exists(container_id: str) -> bool:
        containers = docker_manager.client.containers.list(
            all=True, filters={"id": container_id}
        )
        return bool(containers)

    return _exists
