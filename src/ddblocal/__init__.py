"""ddblocal: DynamoDB Local in Docker for integration tests."""

from ddblocal.attributes import (
    AttributeValue,
    BinarySetValue,
    BinaryValue,
    BoolValue,
    ListValue,
    MapValue,
    NullValue,
    NumberSetValue,
    NumberValue,
    StringSetValue,
    StringValue,
    expect,
    from_wire,
    get_string,
    item_from_wire,
    item_to_wire,
    to_wire,
)
from ddblocal.client import ClientConfig, create_client, create_resource, create_session
from ddblocal.container import (
    ConnectionTarget,
    ContainerState,
    DynamoDBLocalContainer,
    DynamoDBLocalWaitStrategy,
)
from ddblocal.endpoint import LocalEndpoint
from ddblocal.errors import (
    DynamoDBLocalError,
    NotRunningError,
    ReadinessTimeoutError,
    StartError,
    StartupCancelledError,
    StartupError,
    StopError,
    TerminationError,
    TypeMismatchError,
)
from ddblocal.options import (
    LaunchConfig,
    Option,
    build_config,
    with_image,
    with_name,
    with_shared_db,
    with_startup_timeout,
    with_telemetry_disabled,
)

__all__ = [
    # container
    "DynamoDBLocalContainer",
    "ConnectionTarget",
    "ContainerState",
    "DynamoDBLocalWaitStrategy",
    # options
    "LaunchConfig",
    "Option",
    "build_config",
    "with_shared_db",
    "with_telemetry_disabled",
    "with_image",
    "with_name",
    "with_startup_timeout",
    # client
    "LocalEndpoint",
    "ClientConfig",
    "create_session",
    "create_client",
    "create_resource",
    # attributes
    "AttributeValue",
    "StringValue",
    "NumberValue",
    "BinaryValue",
    "StringSetValue",
    "NumberSetValue",
    "BinarySetValue",
    "MapValue",
    "ListValue",
    "NullValue",
    "BoolValue",
    "from_wire",
    "to_wire",
    "item_from_wire",
    "item_to_wire",
    "expect",
    "get_string",
    # errors
    "DynamoDBLocalError",
    "StartupError",
    "ReadinessTimeoutError",
    "StartupCancelledError",
    "NotRunningError",
    "StopError",
    "StartError",
    "TerminationError",
    "TypeMismatchError",
]
