"""DynamoDB Local container built on testcontainers."""

import logging
import math
import socket
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, TypeVar

import anyio
import anyio.to_thread
from docker.errors import DockerException, NotFound
from testcontainers.core.container import DockerContainer
from testcontainers.core.wait_strategies import PortWaitStrategy

from ddblocal.client import ClientConfig, create_client, create_resource
from ddblocal.endpoint import LocalEndpoint
from ddblocal.errors import (
    NotRunningError,
    ReadinessTimeoutError,
    StartError,
    StartupCancelledError,
    StartupError,
    StopError,
    TerminationError,
)
from ddblocal.options import LaunchConfig, Option

if TYPE_CHECKING:
    from docker.models.containers import Container

logger = logging.getLogger(__name__)

DEFAULT_STOP_TIMEOUT = 5.0

T = TypeVar("T")


@dataclass(frozen=True)
class ConnectionTarget:
    """Host and mapped port of a running container.

    The mapped port can change on every restart, so never keep one around
    across a stop/start cycle.
    """

    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class ContainerState:
    running: bool
    status: str


class DynamoDBLocalWaitStrategy(PortWaitStrategy):
    """Wait for the DynamoDB port to accept TCP connections.

    Unlike ``PortWaitStrategy`` the mapped port is looked up again on every
    attempt, a container that exits fails the wait at once, and setting
    ``cancelled`` from another thread aborts it between attempts.
    """

    EXITED_STATUSES = frozenset(("exited", "dead"))

    def __init__(self, port: int, cancelled: threading.Event) -> None:
        super().__init__(port)
        self._cancelled = cancelled

    def wait_until_ready(self, container: DockerContainer) -> None:
        """Block until the port accepts a connection.

        Raises:
            TimeoutError: The port did not open within the startup timeout.
            StartupError: The container exited while waiting.
            StartupCancelledError: ``cancelled`` was set while waiting.
        """
        start_time = time.time()
        while True:
            if self._cancelled.is_set():
                msg = "Cancelled while waiting for DynamoDB Local"
                raise StartupCancelledError(msg)
            if self._accepts_connections(container):
                return
            if time.time() - start_time > self._startup_timeout:
                msg = f"Port {self._port} not available within {self._startup_timeout} seconds"
                raise TimeoutError(msg)
            self._cancelled.wait(self._poll_interval)

    def _accepts_connections(self, container: DockerContainer) -> bool:
        wrapped = container.get_wrapped_container()
        try:
            wrapped.reload()
            if wrapped.status in self.EXITED_STATUSES:
                msg = f"Container {wrapped.short_id} exited during startup"
                raise StartupError(msg)
            if wrapped.status != "running":
                return False
            host = container.get_container_host_ip()
            port = int(container.get_exposed_port(self._port))
            with socket.create_connection((host, port), timeout=1):
                return True
        except (OSError, DockerException) as e:
            logger.debug("Port %s not ready: %s", self._port, e)
            return False


class DynamoDBLocalContainer(DockerContainer):
    """DynamoDB Local running in Docker.

    ``start()`` only returns once the DynamoDB port accepts TCP connections.
    The same method resumes the container after ``stop()``. ``terminate()``
    removes it for good.

    Operations on one instance are not thread-safe; the only call meant to
    come from another thread is ``cancel()``.

    Usage:
        with DynamoDBLocalContainer(with_shared_db()) as container:
            async with container.get_client() as client:
                await client.list_tables()
    """

    def __init__(
        self,
        *options: Option,
        config: LaunchConfig | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the container.

        Args:
            *options: Options applied in order on top of ``config``.
            config: Starting configuration. Defaults to ``LaunchConfig()``.
            **kwargs: Passed through to ``DockerContainer``.
        """
        if config is None:
            config = LaunchConfig()
        else:
            config = replace(config, command=list(config.command))
        for option in options:
            option(config)
        self.launch_config = config
        self._cancelled = threading.Event()

        super().__init__(config.image, **kwargs)
        self.with_exposed_ports(config.port)
        if config.command:
            self.with_command(config.command)
        if config.name:
            self.with_name(config.name)
        self.waiting_for(
            DynamoDBLocalWaitStrategy(config.port, self._cancelled)
            .with_startup_timeout(config.startup_timeout)
            .with_poll_interval(config.poll_interval)
        )

    # Lifecycle

    def start(self) -> "DynamoDBLocalContainer":
        """Launch the container, or resume it if it was stopped.

        Blocks until the port accepts connections.

        Raises:
            StartupError: The image could not be pulled or run.
            StartError: A stopped container could not be resumed.
            ReadinessTimeoutError: The port did not open in time.
            StartupCancelledError: ``cancel()`` was called while waiting.
        """
        self._cancelled.clear()
        self._start()
        return self

    def stop(self, timeout: float = DEFAULT_STOP_TIMEOUT) -> None:  # type: ignore[override]
        """Stop the container gracefully, keeping it for a later ``start()``.

        Data only survives when the container runs with ``-sharedDb``.
        """
        container = self._require_container()
        logger.info("Stopping container %s", container.short_id)
        try:
            container.stop(timeout=math.ceil(timeout))
        except DockerException as e:
            msg = f"Failed to stop container {container.short_id}"
            raise StopError(msg) from e

    def terminate(self) -> None:
        """Stop and remove the container along with its anonymous volumes."""
        if self._container is None:
            return
        short_id = self._container.short_id
        logger.info("Terminating container %s", short_id)
        try:
            super().stop(force=True, delete_volume=True)
        except DockerException as e:
            msg = f"Failed to remove container {short_id}"
            raise TerminationError(msg) from e
        self._container = None

    def cancel(self) -> None:
        """Abort a readiness wait in progress. Safe to call from any thread."""
        self._cancelled.set()

    def state(self) -> ContainerState:
        if self._container is None:
            return ContainerState(running=False, status="not created")
        try:
            self._container.reload()
        except NotFound:
            return ContainerState(running=False, status="removed")
        status = self._container.status
        return ContainerState(running=status == "running", status=status)

    def is_running(self) -> bool:
        return self.state().running

    # Connection

    def connection_target(self) -> ConnectionTarget:
        """Current host and mapped port.

        Raises:
            NotRunningError: The container is not running.
        """
        if not self.is_running():
            msg = "DynamoDB Local container is not running"
            raise NotRunningError(msg)
        host = self.get_container_host_ip()
        port = int(self.get_exposed_port(self.launch_config.port))
        return ConnectionTarget(host=host, port=port)

    def connection_string(self) -> str:
        """DynamoDB Local endpoint in ``host:port`` format."""
        return str(self.connection_target())

    def get_endpoint(self) -> LocalEndpoint:
        return LocalEndpoint(self.connection_string())

    def get_client(self, config: ClientConfig | None = None) -> Any:
        """Create an aioboto3 DynamoDB client bound to this container.

        Build a new client after every restart.
        """
        return create_client(self.get_endpoint(), config)

    def get_resource(self, config: ClientConfig | None = None) -> Any:
        return create_resource(self.get_endpoint(), config)

    # Context managers

    def __enter__(self) -> "DynamoDBLocalContainer":
        try:
            return self.start()
        except BaseException:
            self.terminate()
            raise

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.terminate()

    async def astart(self) -> "DynamoDBLocalContainer":
        """Async ``start()``. Cancelling the caller aborts the readiness wait."""
        self._cancelled.clear()
        await self._run_blocking(self._start)
        return self

    async def astop(self, timeout: float = DEFAULT_STOP_TIMEOUT) -> None:
        await self._run_blocking(lambda: self.stop(timeout))

    async def aterminate(self) -> None:
        await self._run_blocking(self.terminate)

    async def __aenter__(self) -> "DynamoDBLocalContainer":
        try:
            return await self.astart()
        except BaseException:
            with anyio.CancelScope(shield=True):
                await self.aterminate()
            raise

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        # Clean up even when the enclosing scope was cancelled
        with anyio.CancelScope(shield=True):
            await self.aterminate()

    # Internals

    async def _run_blocking(self, func: Callable[[], T]) -> T:
        try:
            return await anyio.to_thread.run_sync(func, abandon_on_cancel=True)
        except anyio.get_cancelled_exc_class():
            self.cancel()
            raise

    def _require_container(self) -> "Container":
        if self._container is None:
            msg = "DynamoDB Local container has not been started"
            raise NotRunningError(msg)
        return self._container

    def _start(self) -> None:
        if self._container is None:
            self._launch()
        else:
            self._resume()
            self._wait_until_ready()

    def _launch(self) -> None:
        if self.launch_config.reuse and self.launch_config.name:
            existing = self._find_existing(self.launch_config.name)
            if existing is not None:
                self._attach(existing)
                self._wait_until_ready()
                return

        logger.info("Starting %s", self.launch_config.image)
        try:
            super().start()
        except DockerException as e:
            msg = f"Failed to start {self.launch_config.image}"
            raise StartupError(msg) from e
        except TimeoutError as e:
            raise ReadinessTimeoutError(
                self.launch_config.port, self.launch_config.startup_timeout
            ) from e
        logger.info("DynamoDB Local ready on port %s", self.launch_config.port)

    def _find_existing(self, name: str) -> "Container | None":
        try:
            return self.get_docker_client().client.containers.get(name)
        except NotFound:
            return None
        except DockerException as e:
            msg = f"Failed to look up container {name}"
            raise StartupError(msg) from e

    def _attach(self, existing: "Container") -> None:
        logger.info("Reusing container %s (%s)", existing.name, existing.short_id)
        self._container = existing
        if existing.status == "running":
            return
        try:
            existing.start()
        except DockerException as e:
            msg = f"Failed to start existing container {existing.name}"
            raise StartupError(msg) from e

    def _resume(self) -> None:
        container = self._require_container()
        logger.info("Resuming container %s", container.short_id)
        try:
            container.start()
        except DockerException as e:
            msg = f"Failed to start container {container.short_id}"
            raise StartError(msg) from e

    def _wait_until_ready(self) -> None:
        try:
            self._wait_strategy.wait_until_ready(self)
        except TimeoutError as e:
            raise ReadinessTimeoutError(
                self.launch_config.port, self.launch_config.startup_timeout
            ) from e
        logger.info("DynamoDB Local ready on port %s", self.launch_config.port)
