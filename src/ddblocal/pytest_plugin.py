"""pytest fixtures for DynamoDB Local.

Enabled automatically through the ``pytest11`` entry point.
"""

import os
from collections.abc import Generator

import docker
import pytest

from ddblocal.container import DynamoDBLocalContainer
from ddblocal.endpoint import LocalEndpoint
from ddblocal.options import DEFAULT_IMAGE, with_image, with_telemetry_disabled

IMAGE_ENV_VAR = "DYNAMODB_LOCAL_IMAGE"


def docker_available() -> bool:
    """Check if Docker is available."""
    try:
        client = docker.from_env()
        client.ping()
        return True
    except Exception:
        return False


@pytest.fixture(scope="session")
def dynamodb_local() -> Generator[DynamoDBLocalContainer, None, None]:
    """Start DynamoDB Local for the test session."""
    if not docker_available():
        pytest.skip("Docker not available")

    image = os.environ.get(IMAGE_ENV_VAR, DEFAULT_IMAGE)
    with DynamoDBLocalContainer(with_image(image), with_telemetry_disabled()) as container:
        yield container


@pytest.fixture
def dynamodb_local_endpoint(dynamodb_local: DynamoDBLocalContainer) -> LocalEndpoint:
    """Endpoint of the session container, re-read for every test."""
    return dynamodb_local.get_endpoint()
