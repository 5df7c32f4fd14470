"""Test fixtures for ddblocal."""

import socket
from collections.abc import Callable, Generator
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def docker_client() -> Generator[MagicMock, None, None]:
    """Replace the testcontainers Docker client so no daemon is needed."""
    with patch("testcontainers.core.container.DockerClient") as client_cls:
        yield client_cls.return_value


@pytest.fixture
def open_port() -> Generator[Callable[[], int], None, None]:
    """Factory for local TCP ports that accept connections."""
    sockets: list[socket.socket] = []

    def factory() -> int:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.bind(("127.0.0.1", 0))
        sock.listen()
        sockets.append(sock)
        return sock.getsockname()[1]

    try:
        yield factory
    finally:
        for sock in sockets:
            sock.close()


@pytest.fixture
def listening_port(open_port: Callable[[], int]) -> int:
    return open_port()


@pytest.fixture
def wrapped() -> MagicMock:
    """Stand-in for a docker-py Container."""
    wrapped = MagicMock()
    wrapped.id = "0123456789abcdef"
    wrapped.short_id = "0123456789"
    wrapped.name = "dynamodb_local"
    wrapped.status = "running"
    wrapped.logs.return_value = b""
    return wrapped
