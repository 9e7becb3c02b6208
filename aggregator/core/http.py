"""
HTTP clients for provider fetches.

Each provider gets a client built from the global settings layered with
the provider's own overrides:
- TLS verification can be relaxed per provider or globally
- A token bucket rate limit can be set per provider or globally

Clients are built fresh on every call; nothing here is cached or shared.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Protocol, TypeVar

import httpx

from aggregator.core.logging import get_logger
from aggregator.core.ratelimit import TokenBucket, new_limiter

if TYPE_CHECKING:
    from aggregator.core.config import AggregatorConfig, ProviderSpec

logger = get_logger("http")

HTTP_TIMEOUT = 30.0

T = TypeVar("T")


class Client(Protocol):
    """What the fetch pipeline needs from a provider client."""

    def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response: ...

    def get(self, url: str, **kwargs: Any) -> httpx.Response: ...

    def head(self, url: str, **kwargs: Any) -> httpx.Response: ...

    def post(self, url: str, **kwargs: Any) -> httpx.Response: ...

    def close(self) -> None: ...


class LimitingClient:
    """
    HTTP client that waits on a token bucket before every request.

    Wraps a plain httpx.Client; the limiter belongs to this client only.
    """

    def __init__(self, client: httpx.Client, limiter: TokenBucket):
        self.client = client
        self.limiter = limiter

    def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        self.limiter.acquire()
        return self.client.request(method, url, **kwargs)

    def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", url, **kwargs)

    def head(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("HEAD", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("POST", url, **kwargs)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "LimitingClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


@dataclass(frozen=True)
class ClientPolicy:
    """Effective settings for one provider's client."""
    insecure: bool
    rate: Optional[float] = None


def resolve(provider_value: Optional[T], global_value: Optional[T], default: T) -> T:
    """Provider value if set, else the global value if set, else the default."""
    if provider_value is not None:
        return provider_value
    if global_value is not None:
        return global_value
    return default


def client_policy(config: AggregatorConfig, provider: ProviderSpec) -> ClientPolicy:
    """
    Work out TLS and rate settings for ``provider``.

    An explicit ``insecure = false`` on the provider counts as unset, so a
    global ``insecure = true`` still applies to it.
    """
    insecure = resolve(True if provider.insecure else None, config.insecure, False)
    rate = resolve(provider.rate, config.rate, None)
    return ClientPolicy(insecure=insecure, rate=rate)


def build_client(config: AggregatorConfig, provider: ProviderSpec) -> Client:
    """
    Build a new HTTP client for ``provider``.

    Args:
        config: Global aggregator configuration
        provider: The provider the client is for

    Returns:
        A plain httpx.Client, or a LimitingClient if any rate is configured
    """
    policy = client_policy(config, provider)

    client = httpx.Client(verify=not policy.insecure, timeout=HTTP_TIMEOUT)
    if policy.insecure:
        logger.warning(f"TLS certificate verification disabled for provider {provider.name}")

    if policy.rate is None:
        return client

    logger.debug(f"Rate limiting provider {provider.name} to {policy.rate}/s")
    return LimitingClient(client, new_limiter(policy.rate))
