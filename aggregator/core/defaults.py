"""
Default values for settings the operator left unset.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Optional

from aggregator.core.logging import get_logger

if TYPE_CHECKING:
    from aggregator.core.config import AggregatorConfig

logger = get_logger("defaults")

DEFAULT_WORKERS = 10
DEFAULT_FOLDER = "/var/www"
DEFAULT_WEB = "/var/www/html"
DEFAULT_DOMAIN = "https://example.com"


def default_worker_count(cpu_count: Optional[int] = None) -> int:
    """
    Worker count used when none is configured.

    Args:
        cpu_count: Reported hardware parallelism. Uses os.cpu_count() if not provided.

    Returns:
        min(cpu_count, DEFAULT_WORKERS)
    """
    if cpu_count is None:
        cpu_count = os.cpu_count() or 1
    return min(cpu_count, DEFAULT_WORKERS)


def set_defaults(config: AggregatorConfig, cpu_count: Optional[int] = None) -> None:
    """
    Fill unset fields of ``config`` in place.

    The worker count is always clamped to the number of providers, so it
    ends up 0 for an empty provider list; validation rejects that case.
    """
    if not config.folder:
        config.folder = DEFAULT_FOLDER

    if not config.web:
        config.web = DEFAULT_WEB

    if not config.domain:
        config.domain = DEFAULT_DOMAIN

    if config.workers <= 0:
        config.workers = default_worker_count(cpu_count)

    if config.workers > len(config.providers):
        config.workers = len(config.providers)

    logger.debug(
        f"Defaults applied: folder={config.folder} web={config.web} "
        f"domain={config.domain} workers={config.workers}"
    )
