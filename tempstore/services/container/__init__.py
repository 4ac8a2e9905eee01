"""Container management services.

This package provides Docker container management functionality split into:
- client.py: Docker client factory and initialization
- endpoint.py: Daemon endpoint to reachable host resolution
- naming.py: Random container names
- manager.py: Container lifecycle management
- ports.py: Published port lookup
- readiness.py: Log-based readiness detection
- utils.py: Shared utilities for container operations
"""

from .manager import ContainerManager
from .client import DockerClientFactory
from .endpoint import parse_endpoint
from .naming import new_uuid
from .ports import find_port
from .readiness import ReadinessWatcher
from .utils import run_in_executor

__all__ = [
    "ContainerManager",
    "DockerClientFactory",
    "parse_endpoint",
    "new_uuid",
    "find_port",
    "ReadinessWatcher",
    "run_in_executor",
]
