"""aioboto3 clients pointed at DynamoDB Local."""

from dataclasses import dataclass
from typing import Any

import aioboto3

from ddblocal.endpoint import LocalEndpoint

DEFAULT_REGION = "us-east-1"

# DynamoDB Local accepts any credentials; these are never checked
DUMMY_ACCESS_KEY_ID = "DUMMYIDEXAMPLE"
DUMMY_SECRET_ACCESS_KEY = "DUMMYEXAMPLEKEY"

SERVICE_NAME = "dynamodb"


@dataclass(frozen=True)
class ClientConfig:
    """Static settings for clients talking to DynamoDB Local."""

    region_name: str = DEFAULT_REGION
    """Region sent with requests. DynamoDB Local keys its data by it unless -sharedDb is set."""

    aws_access_key_id: str = DUMMY_ACCESS_KEY_ID
    """Placeholder access key."""

    aws_secret_access_key: str = DUMMY_SECRET_ACCESS_KEY
    """Placeholder secret key."""


def create_session(config: ClientConfig | None = None) -> aioboto3.Session:
    """Create an aioboto3 session with placeholder credentials."""
    config = config or ClientConfig()
    return aioboto3.Session(
        aws_access_key_id=config.aws_access_key_id,
        aws_secret_access_key=config.aws_secret_access_key,
        region_name=config.region_name,
    )


def create_client(endpoint: LocalEndpoint, config: ClientConfig | None = None) -> Any:
    """Create a DynamoDB client context manager bound to ``endpoint``.

    Usage:
        async with create_client(endpoint) as client:
            await client.list_tables()
    """
    session = create_session(config)
    return session.client(SERVICE_NAME, endpoint_url=endpoint.resolve())


def create_resource(endpoint: LocalEndpoint, config: ClientConfig | None = None) -> Any:
    """Create a DynamoDB service resource context manager bound to ``endpoint``."""
    session = create_session(config)
    return session.resource(SERVICE_NAME, endpoint_url=endpoint.resolve())
