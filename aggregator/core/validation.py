"""
Validation of a defaulted aggregator configuration.

Checks run in a fixed order and the first failure is raised; nothing is
repaired here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from aggregator.core.errors import ConfigError

if TYPE_CHECKING:
    from aggregator.core.config import AggregatorConfig, ProviderSpec


def check_providers(providers: Iterable[ProviderSpec]) -> None:
    """
    Check names and domains of the providers in declaration order.

    Raises:
        ConfigError: For a missing name or domain, or for the second
            occurrence of a provider name
    """
    seen: set[str] = set()

    for p in providers:
        if not p.name:
            raise ConfigError("no name given for provider")
        if not p.domain:
            raise ConfigError("no domain given for provider")
        if p.name in seen:
            raise ConfigError(
                f"provider '{p.name}' is configured more than once",
                details={"provider": p.name},
            )
        seen.add(p.name)


def check(config: AggregatorConfig) -> None:
    """
    Validate the whole configuration.

    Raises:
        ConfigError: On the first problem found
    """
    if not config.providers:
        raise ConfigError("no providers given")

    config.aggregator.validate_info()

    check_providers(config.providers)
