"""Published port lookup."""

from ...models.container import ContainerHandle
from ...models.errors import PortFormatError, PortNotFoundError


def find_port(handle: ContainerHandle, port: int, protocol: str = "tcp") -> int:
    """Find the host port the runtime mapped to a container port.

    Args:
        handle: Inspected container
        port: Port the service listens on inside the container
        protocol: Port protocol, ``tcp`` unless stated otherwise

    Returns:
        Host port of the first binding

    Raises:
        PortNotFoundError: The port is not published
        PortFormatError: The reported host port is not an integer
    """
    bindings = handle.ports.get(f"{port}/{protocol}")
    if not bindings:
        raise PortNotFoundError(port, container_id=handle.id)

    host_port = bindings[0].host_port
    try:
        return int(host_port)
    except ValueError as e:
        raise PortFormatError(
            f"Invalid host port {host_port!r} for {port}/{protocol}",
            container_id=handle.id,
        ) from e
