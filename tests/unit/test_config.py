"""Unit tests for configuration."""

import pytest
from pydantic import ValidationError

from tempstore.config import DEFAULT_DOCKER_HOST, Settings

ENV_VARS = (
    "DOCKER_HOST",
    "DOCKER_CERT_PATH",
    "REDIS_READY_TIMEOUT",
    "POSTGRES_READY_TIMEOUT",
    "INFLUXDB_READY_TIMEOUT",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable Settings reads."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDefaults:
    """Test values used when nothing is configured."""

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.docker_host == DEFAULT_DOCKER_HOST
        assert settings.docker_cert_path is None
        assert settings.redis_ready_timeout == 10.0
        assert settings.postgres_ready_timeout == 30.0
        assert settings.influxdb_ready_timeout == 10.0
        assert settings.log_level == "INFO"
        assert settings.log_format == "console"


class TestEnvironment:
    """Test values read from the environment."""

    def test_docker_variables(self, clean_env):
        """Test the docker CLI variables configure the runtime."""
        clean_env.setenv("DOCKER_HOST", "tcp://192.168.59.103:2376")
        clean_env.setenv("DOCKER_CERT_PATH", "/certs")

        runtime = Settings(_env_file=None).runtime

        assert runtime.docker_host == "tcp://192.168.59.103:2376"
        assert runtime.docker_cert_path == "/certs"
        assert runtime.tls_enabled is True

    def test_empty_docker_host_falls_back(self, clean_env):
        """Test an empty DOCKER_HOST means the local socket."""
        clean_env.setenv("DOCKER_HOST", "")

        assert Settings(_env_file=None).docker_host == DEFAULT_DOCKER_HOST

    def test_empty_cert_path_disables_tls(self, clean_env):
        clean_env.setenv("DOCKER_CERT_PATH", "")

        runtime = Settings(_env_file=None).runtime

        assert runtime.docker_cert_path is None
        assert runtime.tls_enabled is False

    def test_timeouts(self, clean_env):
        clean_env.setenv("POSTGRES_READY_TIMEOUT", "45")

        readiness = Settings(_env_file=None).readiness

        assert readiness.postgres_ready_timeout == 45.0
        assert readiness.redis_ready_timeout == 10.0

    def test_env_file(self, clean_env, tmp_path):
        """Test values are read from a .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("REDIS_READY_TIMEOUT=2.5\nLOG_FORMAT=json\n")

        settings = Settings(_env_file=str(env_file))

        assert settings.redis_ready_timeout == 2.5
        assert settings.logging.log_format == "json"


class TestValidation:
    """Test rejected values."""

    @pytest.mark.parametrize("value", ["0", "-1", "601"])
    def test_timeout_bounds(self, clean_env, value):
        clean_env.setenv("REDIS_READY_TIMEOUT", value)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_log_format(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="xml")

    def test_log_format_case_insensitive(self, clean_env):
        assert Settings(_env_file=None, log_format="JSON").log_format == "json"


class TestGroups:
    """Test grouped configuration views."""

    def test_groups_follow_flat_fields(self, test_settings):
        test_settings.log_level = "DEBUG"

        assert test_settings.runtime.docker_host == test_settings.docker_host
        assert test_settings.readiness.influxdb_ready_timeout == 10.0
        assert test_settings.logging.log_level == "DEBUG"
