"""Container runtime (Docker daemon) connection configuration."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_DOCKER_HOST = "unix:///var/run/docker.sock"


class RuntimeConfig(BaseSettings):
    """How to reach the Docker daemon.

    Mirrors the DOCKER_HOST / DOCKER_CERT_PATH convention of the docker CLI.
    When a certificate directory is set, the transport is secured with the
    ``ca.pem``, ``cert.pem`` and ``key.pem`` files found inside it.
    """

    docker_host: str = Field(default=DEFAULT_DOCKER_HOST, min_length=1)
    docker_cert_path: Optional[str] = Field(default=None)

    @property
    def tls_enabled(self) -> bool:
        """Whether the daemon connection uses TLS client certificates."""
        return bool(self.docker_cert_path)

    def _cert_file(self, name: str) -> str:
        return str(Path(self.docker_cert_path or "") / name)

    @property
    def ca_cert(self) -> str:
        return self._cert_file("ca.pem")

    @property
    def client_cert(self) -> str:
        return self._cert_file("cert.pem")

    @property
    def client_key(self) -> str:
        return self._cert_file("key.pem")

    class Config:
        env_prefix = ""
        extra = "ignore"
