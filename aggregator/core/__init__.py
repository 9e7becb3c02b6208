"""
Core module - configuration and per-provider resources

Contains configuration loading, defaults, validation, key loading,
HTTP client construction, and logging.
"""

from aggregator.core.config import (
    AggregatorCategory,
    AggregatorConfig,
    AggregatorInfo,
    ProviderSpec,
    load_config,
)
from aggregator.core.errors import (
    AggregatorError,
    ConfigError,
    KeyLoadError,
    ParseError,
)
from aggregator.core.http import LimitingClient, build_client, client_policy
from aggregator.core.keys import CryptoKeyCache
from aggregator.core.logging import setup_logging, get_logger

__all__ = [
    "AggregatorCategory",
    "AggregatorConfig",
    "AggregatorInfo",
    "ProviderSpec",
    "load_config",
    "AggregatorError",
    "ConfigError",
    "KeyLoadError",
    "ParseError",
    "LimitingClient",
    "build_client",
    "client_policy",
    "CryptoKeyCache",
    "setup_logging",
    "get_logger",
]
