"""Fixed endpoint used in place of the client's AWS endpoint resolution."""

from dataclasses import dataclass
from typing import Any

DEFAULT_SCHEME = "http"


@dataclass(frozen=True)
class LocalEndpoint:
    """Endpoint that always points at a DynamoDB Local instance.

    Whatever endpoint parameters the client would normally use (region,
    FIPS, dual-stack...) are ignored.
    """

    host_and_port: str
    """Target in ``host:port`` format."""

    scheme: str = DEFAULT_SCHEME
    """DynamoDB Local does not serve TLS."""

    def resolve(self, params: Any = None) -> str:
        """Return the endpoint URL, ignoring the default parameters."""
        return f"{self.scheme}://{self.host_and_port}"

    @property
    def url(self) -> str:
        return self.resolve()

    def __str__(self) -> str:
        return self.url
