"""Disposable backing-service stores.

Each store starts its service in a fresh container and exposes ``url()`` and
``shutdown()``:
- redis.py: Redis
- postgres.py: PostgreSQL
- influxdb.py: InfluxDB
"""

from .base import ContainerLease, ReadinessCheck, Store, lease_container
from .influxdb import InfluxDB
from .postgres import Postgres
from .redis import Redis

STORES = {
    "redis": Redis,
    "postgres": Postgres,
    "influxdb": InfluxDB,
}

__all__ = [
    "Store",
    "ReadinessCheck",
    "ContainerLease",
    "lease_container",
    "Redis",
    "Postgres",
    "InfluxDB",
    "STORES",
]
