"""Disposable Docker-backed services for tests.

Usage:
    from tempstore import Redis

    async with await Redis.start() as store:
        client = redis.Redis.from_url(store.url().replace("tcp://", "redis://"))
"""

from .models import (
    ContainerHandle,
    ReadinessOutcome,
    ReadinessStatus,
    TempStoreException,
    RuntimeConnectionError,
    ImageError,
    CreationError,
    StartError,
    ScanError,
    NotReadyError,
    PortNotFoundError,
    PortFormatError,
    RemovalError,
    GenerationError,
)
from .services.container import ContainerManager
from .services.provisioner import Provisioner
from .stores import Store, Redis, Postgres, InfluxDB

__all__ = [
    "ContainerHandle",
    "ReadinessOutcome",
    "ReadinessStatus",
    "ContainerManager",
    "Provisioner",
    "Store",
    "Redis",
    "Postgres",
    "InfluxDB",
    "TempStoreException",
    "RuntimeConnectionError",
    "ImageError",
    "CreationError",
    "StartError",
    "ScanError",
    "NotReadyError",
    "PortNotFoundError",
    "PortFormatError",
    "RemovalError",
    "GenerationError",
]
