"""Launch configuration for the DynamoDB Local container.

Options are plain functions that mutate a :class:`LaunchConfig`. They are
applied in call order, so flags end up in the command in the same order the
options were passed.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

DEFAULT_IMAGE = "amazon/dynamodb-local:2.2.1"
DEFAULT_PORT = 8000
DEFAULT_STARTUP_TIMEOUT = 30.0
DEFAULT_POLL_INTERVAL = 0.5

# Name used by with_shared_db() so later runs attach to the same container
SHARED_DB_CONTAINER_NAME = "dynamodb_local"

BASE_COMMAND = ("-jar", "DynamoDBLocal.jar")
SHARED_DB_FLAG = "-sharedDb"
DISABLE_TELEMETRY_FLAG = "-disableTelemetry"


@dataclass
class LaunchConfig:
    """Everything needed to start a DynamoDB Local container."""

    image: str = DEFAULT_IMAGE
    """Image to run."""

    port: int = DEFAULT_PORT
    """Port DynamoDB Local listens on inside the container."""

    command: list[str] = field(default_factory=list)
    """Command override. Empty keeps the image default (in-memory database)."""

    name: str | None = None
    """Container name. None lets Docker pick one."""

    reuse: bool = False
    """Attach to an existing container with the same name instead of creating one."""

    startup_timeout: float = DEFAULT_STARTUP_TIMEOUT
    """Seconds to wait for the port to accept connections."""

    poll_interval: float = DEFAULT_POLL_INTERVAL
    """Seconds between readiness checks."""

    def append_flag(self, flag: str) -> None:
        """Append a flag, starting the base invocation if nothing is set yet."""
        if not self.command:
            self.command.extend(BASE_COMMAND)
        self.command.append(flag)


Option = Callable[[LaunchConfig], None]


def build_config(*options: Option) -> LaunchConfig:
    """Create the base configuration and apply ``options`` in order."""
    config = LaunchConfig()
    for option in options:
        option(config)
    return config


def with_shared_db() -> Option:
    """Use a single on-disk database file, and reuse the container between runs.

    Data then survives a stop/start cycle but not termination.
    """

    def option(config: LaunchConfig) -> None:
        config.append_flag(SHARED_DB_FLAG)
        config.name = SHARED_DB_CONTAINER_NAME
        config.reuse = True

    return option


def with_telemetry_disabled() -> Option:
    """DynamoDB Local will not send any telemetry."""

    def option(config: LaunchConfig) -> None:
        config.append_flag(DISABLE_TELEMETRY_FLAG)

    return option


def with_image(image: str) -> Option:
    def option(config: LaunchConfig) -> None:
        config.image = image

    return option


def with_name(name: str) -> Option:
    """Name the container without enabling reuse."""

    def option(config: LaunchConfig) -> None:
        config.name = name

    return option


def with_startup_timeout(seconds: float) -> Option:
    if seconds <= 0:
        msg = f"Startup timeout must be positive, got {seconds}"
        raise ValueError(msg)

    def option(config: LaunchConfig) -> None:
        config.startup_timeout = seconds

    return option
