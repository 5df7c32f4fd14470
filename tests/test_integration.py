"""End-to-end tests against a real DynamoDB Local container.

Skipped when Docker is not available.
"""

import os
from typing import Any

import pytest
from botocore.exceptions import BotoCoreError, ClientError

from ddblocal import (
    DynamoDBLocalContainer,
    Option,
    create_session,
    get_string,
    with_image,
    with_shared_db,
    with_telemetry_disabled,
)
from ddblocal.options import DEFAULT_IMAGE
from ddblocal.pytest_plugin import IMAGE_ENV_VAR, docker_available

pytestmark = [
    pytest.mark.anyio,
    pytest.mark.integration,
    pytest.mark.skipif(not docker_available(), reason="Docker not available"),
]

TABLE_NAME = "demo_table"
PK_COLUMN = "demo_pk"
TEST_VALUE = "test_value"


def make_container(*options: Option) -> DynamoDBLocalContainer:
    image = os.environ.get(IMAGE_ENV_VAR, DEFAULT_IMAGE)
    return DynamoDBLocalContainer(with_image(image), *options)


async def create_table(client: Any) -> None:
    await client.create_table(
        TableName=TABLE_NAME,
        KeySchema=[{"AttributeName": PK_COLUMN, "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": PK_COLUMN, "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )


async def put_value(client: Any, value: str) -> None:
    await client.put_item(TableName=TABLE_NAME, Item={PK_COLUMN: {"S": value}})


async def get_value(client: Any, value: str) -> str:
    output = await client.get_item(TableName=TABLE_NAME, Key={PK_COLUMN: {"S": value}})
    return get_string(output["Item"], PK_COLUMN)


async def test_create_put_get() -> None:
    async with make_container() as container:
        async with container.get_client() as client:
            await create_table(client)

            result = await client.list_tables()
            assert result["TableNames"] == [TABLE_NAME]

            await put_value(client, TEST_VALUE)
            assert await get_value(client, TEST_VALUE) == TEST_VALUE


async def test_duplicate_table_fails() -> None:
    async with make_container() as container:
        async with container.get_client() as client:
            await create_table(client)
            with pytest.raises(ClientError):
                await create_table(client)


async def test_client_without_local_endpoint_fails() -> None:
    async with make_container():
        # Same placeholder credentials, default AWS endpoint
        async with create_session().client("dynamodb") as client:
            with pytest.raises((BotoCoreError, ClientError)):
                await create_table(client)


async def test_shared_db_survives_restart() -> None:
    async with make_container(with_shared_db()) as container:
        async with container.get_client() as client:
            await create_table(client)
            await put_value(client, TEST_VALUE)

        await container.astop(5)
        await container.astart()

        # The mapped port may have changed, so build a new client
        async with container.get_client() as client:
            result = await client.list_tables()
            assert result["TableNames"] == [TABLE_NAME]
            assert await get_value(client, TEST_VALUE) == TEST_VALUE


async def test_in_memory_db_is_lost_on_restart() -> None:
    async with make_container() as container:
        async with container.get_client() as client:
            await create_table(client)

        await container.astop(5)
        await container.astart()

        async with container.get_client() as client:
            result = await client.list_tables()
            assert result["TableNames"] == []


def test_starts_with_telemetry_disabled() -> None:
    with make_container(with_telemetry_disabled()) as container:
        assert container.is_running()


def test_starts_with_shared_db_and_telemetry_disabled() -> None:
    with make_container(with_shared_db(), with_telemetry_disabled()) as container:
        assert container.is_running()


def test_state_reports_running() -> None:
    with make_container() as container:
        state = container.state()
        assert state.running
        assert state.status == "running"


def test_plugin_fixture(dynamodb_local: DynamoDBLocalContainer, dynamodb_local_endpoint: Any) -> None:
    assert dynamodb_local.is_running()
    assert dynamodb_local_endpoint.url == f"http://{dynamodb_local.connection_string()}"
