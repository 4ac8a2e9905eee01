"""Pytest configuration and shared fixtures."""

import threading
from typing import Iterable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from tempstore.config import Settings
from tempstore.config.runtime import RuntimeConfig
from tempstore.models.container import (
    ContainerHandle,
    ReadinessOutcome,
    ReadinessStatus,
)
from tempstore.services.container.manager import ContainerManager
from tempstore.services.provisioner import Provisioner

CONTAINER_ID = "3f4e8a1c9b2d7e6f5a4b3c2d1e0f9a8b7c6d5e4f3a2b1c0d9e8f7a6b5c4d3e2f"


class FakeLogStream:
    """Stands in for the docker SDK's CancellableStream.

    Yields ``chunks`` with ``delay`` seconds before each one, then either
    raises ``error``, blocks until closed (``hang``), or ends.
    """

    def __init__(
        self,
        chunks: Iterable[bytes] = (),
        delay: float = 0.0,
        hang: bool = False,
        error: Optional[Exception] = None,
    ):
        self.chunks = list(chunks)
        self.delay = delay
        self.hang = hang
        self.error = error
        self.closed = threading.Event()

    def __iter__(self):
        for chunk in self.chunks:
            if self.closed.wait(self.delay):
                return
            yield chunk
        if self.error is not None:
            raise self.error
        if self.hang:
            self.closed.wait()

    def close(self):
        self.closed.set()


def make_container_attrs(
    ports: Optional[dict] = None,
    container_id: str = CONTAINER_ID,
    name: str = "/0b6f2d0e-3c1a-4f5e-9a7b-2c8d4e6f1a3b",
) -> dict:
    """Minimal docker inspect payload."""
    if ports is None:
        ports = {"6379/tcp": [{"HostIp": "0.0.0.0", "HostPort": "54321"}]}
    return {
        "Id": container_id,
        "Name": name,
        "State": {"Status": "running", "Running": True},
        "NetworkSettings": {"Ports": ports},
    }


@pytest.fixture
def log_stream():
    """Factory for fake container output streams."""
    return FakeLogStream


@pytest.fixture
def container_attrs():
    """Factory for docker inspect payloads."""
    return make_container_attrs


@pytest.fixture
def runtime_config():
    """Local-socket runtime config, independent of the test environment."""
    return RuntimeConfig(
        docker_host="unix:///var/run/docker.sock", docker_cert_path=None
    )


@pytest.fixture
def test_settings():
    """Settings that ignore the environment's .env file."""
    return Settings(
        _env_file=None,
        docker_host="unix:///var/run/docker.sock",
        docker_cert_path=None,
        redis_ready_timeout=10.0,
        postgres_ready_timeout=30.0,
        influxdb_ready_timeout=10.0,
    )


@pytest.fixture
def mock_container():
    """Mock docker Container returned by containers.create."""
    container = MagicMock()
    container.id = CONTAINER_ID
    container.attrs = make_container_attrs()
    return container


@pytest.fixture
def mock_docker_client(mock_container):
    """Mock docker client for testing."""
    client = MagicMock()
    client.images.pull.return_value = MagicMock()
    client.containers.create.return_value = mock_container
    client.api.remove_container.return_value = None
    client.api.attach.return_value = FakeLogStream()
    return client


@pytest.fixture
def container_manager(runtime_config, mock_docker_client):
    """ContainerManager bound to the mock client."""
    return ContainerManager(runtime_config, client=mock_docker_client)


@pytest.fixture
def container_handle():
    """Handle for a running container publishing 6379/tcp on 54321."""
    return ContainerHandle.from_attrs(make_container_attrs(), "127.0.0.1")


@pytest.fixture
def mock_provisioner(container_handle):
    """Mock Provisioner whose every step succeeds."""
    provisioner = MagicMock(spec=Provisioner)
    provisioner.host = "127.0.0.1"
    provisioner.provision = AsyncMock(return_value=container_handle)
    provisioner.await_ready = AsyncMock(
        return_value=ReadinessOutcome(ReadinessStatus.FOUND)
    )
    provisioner.resolve_port = MagicMock(return_value=54321)
    provisioner.teardown = AsyncMock(return_value=None)
    provisioner.discard = AsyncMock(return_value=None)
    provisioner.close = MagicMock(return_value=None)
    return provisioner
