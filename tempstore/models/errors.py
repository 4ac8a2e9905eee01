"""Error models and exception classes for tempstore."""

from enum import Enum
from typing import Optional


class ErrorType(str, Enum):
    """Error type enumeration."""

    CONNECTION = "connection"
    IMAGE = "image"
    CREATION = "creation"
    START = "start"
    SCAN = "scan"
    NOT_READY = "not_ready"
    PORT_NOT_FOUND = "port_not_found"
    PORT_FORMAT = "port_format"
    REMOVAL = "removal"
    GENERATION = "generation"


# Custom Exception Classes


class TempStoreException(Exception):
    """Base exception for tempstore."""

    error_type: ErrorType = ErrorType.CONNECTION

    def __init__(
        self,
        message: str,
        container_id: Optional[str] = None,
    ):
        self.message = message
        self.container_id = container_id
        super().__init__(message)


class RuntimeConnectionError(TempStoreException):
    """The Docker daemon endpoint is invalid or the client cannot be built."""

    error_type = ErrorType.CONNECTION


class ImageError(TempStoreException):
    """Pulling an image failed."""

    error_type = ErrorType.IMAGE


class CreationError(TempStoreException):
    """Creating a container failed."""

    error_type = ErrorType.CREATION


class StartError(TempStoreException):
    """Starting or inspecting a freshly created container failed."""

    error_type = ErrorType.START


class ScanError(TempStoreException):
    """The container output stream ended or failed before a match."""

    error_type = ErrorType.SCAN


class NotReadyError(TempStoreException):
    """A store did not report readiness."""

    error_type = ErrorType.NOT_READY


class PortNotFoundError(TempStoreException):
    """No host binding exists for the requested container port."""

    error_type = ErrorType.PORT_NOT_FOUND

    def __init__(self, port: int, message: str = None, **kwargs):
        self.port = port
        super().__init__(
            message=message or f"Port {port}/tcp is not published", **kwargs
        )


class PortFormatError(TempStoreException):
    """The runtime reported a host port that is not an integer."""

    error_type = ErrorType.PORT_FORMAT


class RemovalError(TempStoreException):
    """Removing a container failed."""

    error_type = ErrorType.REMOVAL


class GenerationError(TempStoreException):
    """The random source could not supply enough bytes for a name."""

    error_type = ErrorType.GENERATION
