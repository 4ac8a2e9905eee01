"""Data models for tempstore."""

from .container import (
    ContainerHandle,
    PortBinding,
    ReadinessOutcome,
    ReadinessStatus,
    RuntimeConnection,
)
from .errors import (
    ErrorType,
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

__all__ = [
    # Container models
    "ContainerHandle",
    "PortBinding",
    "ReadinessOutcome",
    "ReadinessStatus",
    "RuntimeConnection",
    # Error models
    "ErrorType",
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
