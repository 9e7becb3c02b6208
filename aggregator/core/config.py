"""
Aggregator configuration model and loader.

The configuration is a TOML document, by default ``aggregator.toml``:

    workers = 4
    folder = "/var/www"
    rate = 2.5
    key = "/etc/aggregator/signing.asc"

    [aggregator]
    category = "aggregator"
    name = "Example Aggregator"
    namespace = "https://aggregator.example.com"

    [[providers]]
    name = "acme"
    domain = "acme.example.com"
    insecure = true

load_config() is the single entry point: it parses the document, fills
defaults and validates, so callers either get a complete configuration
or an exception.
"""

import tomllib
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from aggregator.core.defaults import set_defaults
from aggregator.core.errors import ConfigError, ParseError
from aggregator.core.keys import CryptoKeyCache
from aggregator.core.logging import get_logger
from aggregator.core.settings import DEFAULT_CONFIG_PATH
from aggregator.core.validation import check

logger = get_logger("config")


class AggregatorCategory(str, Enum):
    """Role the aggregator announces for itself."""
    AGGREGATOR = "aggregator"
    LISTER = "lister"


class AggregatorInfo(BaseModel):
    """Descriptive block published about the aggregator itself."""

    category: Optional[AggregatorCategory] = None
    name: str = ""
    namespace: str = ""
    contact_details: str = ""
    issuing_authority: str = ""

    def validate_info(self) -> None:
        """
        Check the mandatory fields.

        Raises:
            ConfigError: On the first missing field
        """
        if self.category is None:
            raise ConfigError("aggregator.category is mandatory")
        if not self.name:
            raise ConfigError("aggregator.name is mandatory")
        if not self.namespace:
            raise ConfigError("aggregator.namespace is mandatory")


class ProviderSpec(BaseModel):
    """
    One remote provider plus its optional overrides.

    ``rate`` and ``insecure`` left as None fall back to the global values.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    domain: str = ""
    rate: Optional[float] = Field(default=None, gt=0, description="Requests per second")
    insecure: Optional[bool] = None


class AggregatorConfig(BaseModel):
    """Full aggregator settings as read from the TOML document."""

    workers: int = 0
    folder: str = ""
    web: str = ""
    domain: str = ""
    rate: Optional[float] = Field(default=None, gt=0, description="Requests per second")
    insecure: Optional[bool] = None
    aggregator: AggregatorInfo = Field(default_factory=AggregatorInfo)
    providers: list[ProviderSpec] = Field(default_factory=list)
    # The key cache is bound to this path at construction
    key: str = Field(default="", frozen=True)
    passphrase: Optional[str] = None

    _key_cache: CryptoKeyCache = PrivateAttr()

    def model_post_init(self, __context: Any) -> None:
        self._key_cache = CryptoKeyCache(self.key)

    def crypto_key(self) -> Any:
        """
        Return the configured OpenPGP key, loading it on first use.

        Returns:
            Key handle, or None if no key is configured

        Raises:
            KeyLoadError: If the key cannot be loaded (permanently)
        """
        return self._key_cache.get()

    def provider(self, name: str) -> Optional[ProviderSpec]:
        """Look up a provider by name."""
        for p in self.providers:
            if p.name == name:
                return p
        return None


def _read_document(path: str) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except OSError as e:
        raise ParseError(f"cannot read configuration '{path}': {e}", path=path) from e
    except tomllib.TOMLDecodeError as e:
        raise ParseError(f"invalid TOML in '{path}': {e}", path=path) from e


def load_config(path: Optional[str] = None, cpu_count: Optional[int] = None) -> AggregatorConfig:
    """
    Load, default and validate the aggregator configuration.

    Args:
        path: Path to the TOML document. Defaults to aggregator.toml
        cpu_count: Reported hardware parallelism. Uses os.cpu_count() if not provided.

    Returns:
        Fully defaulted and validated configuration

    Raises:
        ParseError: If the document cannot be read or decoded
        ConfigError: If the document is structurally or semantically invalid
    """
    if not path:
        path = DEFAULT_CONFIG_PATH

    document = _read_document(path)

    try:
        cfg = AggregatorConfig.model_validate(document)
    except ValidationError as e:
        raise ConfigError(
            f"invalid configuration '{path}': {e}",
            details={"path": path, "errors": e.errors(include_url=False)},
        ) from e

    set_defaults(cfg, cpu_count=cpu_count)
    check(cfg)

    logger.info(
        f"Loaded {Path(path).name}: {len(cfg.providers)} providers, {cfg.workers} workers"
    )
    return cfg
