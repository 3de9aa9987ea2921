from __future__ import annotations

import io
from collections.abc import Generator
from unittest.mock import patch

import pytest
import structlog

from hollow_runner import Container, ContainerConfig, ContainerRole

# TEST CONSTANTS
TEST_CONTAINER_PREFIX = "hollow-runner-test-"
TEST_NETWORK = "hollow-runner-test-net"


@pytest.fixture(scope="session")
def container_prefix() -> str:
    """Expose the test container prefix."""
    return TEST_CONTAINER_PREFIX


@pytest.fixture(autouse=True)
def podman_exe() -> Generator[str, None, None]:
    """Pretend podman is installed at a fixed path."""
    with patch("hollow_runner.core.Container._podman_exe", "podman"):
        yield "podman"


@pytest.fixture
def postgres(container_prefix: str) -> Container:
    """A database dependency reachable as ``db``."""
    return Container(
        ContainerConfig(
            name=container_prefix + "postgres",
            image="docker.io/library/postgres:16",
            ports={5432: None},
            network=TEST_NETWORK,
            network_aliases={"db"},
        )
    )


@pytest.fixture
def kafka(container_prefix: str) -> Container:
    """A broker dependency reachable as ``kafka`` or ``broker``."""
    return Container(
        ContainerConfig(
            name=container_prefix + "kafka",
            image="docker.io/bitnami/kafka:3.7",
            ports={9092: None, 9093: None},
            network=TEST_NETWORK,
            network_aliases={"kafka", "broker"},
        )
    )


@pytest.fixture
def app(container_prefix: str) -> Container:
    """The application under test, configured to talk to its dependencies by alias."""
    return Container(
        ContainerConfig(
            name=container_prefix + "app",
            image="localhost/my-service:latest",
            role=ContainerRole.APPLICATION,
            ports={9080: None},
            network=TEST_NETWORK,
            network_aliases={"app"},
            env={
                "DB_HOST": "db",
                "DB_URL": "http://db:5432/app",
                "KAFKA_BOOTSTRAP": "kafka:9092",
                "LOG_LEVEL": "debug",
            },
        )
    )


@pytest.fixture
def broken_log_sink() -> Generator[io.StringIO, None, None]:
    """Route structlog output to a stream that raises on every write."""
    sink = io.StringIO()
    sink.close()
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(sink))
    yield sink
    structlog.reset_defaults()
