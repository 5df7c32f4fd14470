"""Exceptions raised by ddblocal."""


class DynamoDBLocalError(Exception):
    """Base class for all ddblocal errors."""


class StartupError(DynamoDBLocalError):
    """The container could not be created, pulled or made ready."""


class ReadinessTimeoutError(StartupError, TimeoutError):
    """The exposed port did not accept connections before the deadline."""

    def __init__(self, port: int, timeout: float) -> None:
        self.port = port
        self.timeout = timeout
        super().__init__(
            f"Port {port} did not accept connections within {timeout:.1f}s"
        )


class StartupCancelledError(StartupError):
    """Waiting for readiness was cancelled by the caller."""


class NotRunningError(DynamoDBLocalError):
    """Operation requires a running container."""


class StopError(DynamoDBLocalError):
    """The container could not be stopped."""


class StartError(DynamoDBLocalError):
    """A stopped container could not be resumed."""


class TerminationError(DynamoDBLocalError):
    """The container could not be removed."""


class TypeMismatchError(DynamoDBLocalError, TypeError):
    """An attribute value is not of the expected variant."""

    def __init__(self, expected: type, actual: object) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {expected.__name__}, got {type(actual).__name__}"
        )
