"""Resolve where published container ports can be reached."""

from urllib.parse import urlsplit

from ...models.errors import RuntimeConnectionError

LOOPBACK = "127.0.0.1"
NETWORK_SCHEMES = ("tcp", "http", "https")


def parse_endpoint(endpoint: str) -> str:
    """Return the host address for a Docker daemon endpoint.

    A daemon bound to a local unix socket publishes container ports on the
    loopback interface. For network endpoints the daemon's own host is used;
    a URL without an explicit port is still valid.

    Args:
        endpoint: Connection string such as ``unix:///var/run/docker.sock``
            or ``tcp://192.168.59.103:2376``

    Returns:
        Host address string

    Raises:
        RuntimeConnectionError: Unsupported scheme or malformed URL
    """
    try:
        parts = urlsplit(endpoint)
        scheme = parts.scheme.lower()
        if scheme == "unix":
            return LOOPBACK
        if scheme not in NETWORK_SCHEMES:
            raise RuntimeConnectionError(
                f"Unsupported Docker endpoint scheme: {parts.scheme or '<none>'!r}"
            )
        # Accessing .port validates it
        parts.port
        host = parts.hostname
    except ValueError as e:
        raise RuntimeConnectionError(
            f"Malformed Docker endpoint {endpoint!r}: {e}"
        ) from e

    if not host:
        raise RuntimeConnectionError(f"Docker endpoint has no host: {endpoint!r}")
    return host
