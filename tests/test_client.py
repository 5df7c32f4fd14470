"""Tests for the DynamoDB Local client factory."""

from unittest.mock import patch

import aioboto3

from ddblocal import ClientConfig, LocalEndpoint, create_client, create_resource, create_session
from ddblocal.client import DUMMY_ACCESS_KEY_ID, DUMMY_SECRET_ACCESS_KEY


class TestCreateSession:
    def test_defaults(self) -> None:
        session = create_session()

        assert isinstance(session, aioboto3.Session)
        assert session.region_name == "us-east-1"

    def test_custom_region(self) -> None:
        session = create_session(ClientConfig(region_name="eu-west-1"))
        assert session.region_name == "eu-west-1"

    def test_uses_placeholder_credentials(self) -> None:
        with patch("ddblocal.client.aioboto3.Session") as session_cls:
            create_session()

        session_cls.assert_called_once_with(
            aws_access_key_id=DUMMY_ACCESS_KEY_ID,
            aws_secret_access_key=DUMMY_SECRET_ACCESS_KEY,
            region_name="us-east-1",
        )


class TestCreateClient:
    def test_client_bound_to_endpoint(self) -> None:
        endpoint = LocalEndpoint("127.0.0.1:49153")

        with patch("ddblocal.client.aioboto3.Session") as session_cls:
            client = create_client(endpoint)

        session = session_cls.return_value
        session.client.assert_called_once_with(
            "dynamodb", endpoint_url="http://127.0.0.1:49153"
        )
        assert client is session.client.return_value

    def test_resource_bound_to_endpoint(self) -> None:
        endpoint = LocalEndpoint("localhost:8000")

        with patch("ddblocal.client.aioboto3.Session") as session_cls:
            create_resource(endpoint, ClientConfig(region_name="ap-south-1"))

        session_cls.assert_called_once_with(
            aws_access_key_id=DUMMY_ACCESS_KEY_ID,
            aws_secret_access_key=DUMMY_SECRET_ACCESS_KEY,
            region_name="ap-south-1",
        )
        session_cls.return_value.resource.assert_called_once_with(
            "dynamodb", endpoint_url="http://localhost:8000"
        )
