"""
Logging configuration for the aggregator.

Local runs get a human-readable line format, anything else a JSON line per
record. A dictConfig YAML file replaces both when one is configured.
"""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Optional

import yaml

from aggregator.core.settings import Settings, get_settings

LOCAL_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
JSON_FORMAT = (
    '{"time": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "message": "%(message)s"}'
)


def setup_logging(
    settings: Optional[Settings] = None,
    log_level: Optional[str] = None,
) -> None:
    """
    Setup logging configuration.

    Args:
        settings: Process settings. Uses the cached global if not provided.
        log_level: Override the level from settings (e.g. for --verbose).
    """
    settings = settings or get_settings()
    level = (log_level or settings.log_level).upper()

    config_path = settings.logging_config
    if config_path and Path(config_path).exists():
        _load_yaml_config(Path(config_path))
    else:
        fmt = LOCAL_FORMAT if settings.is_local else JSON_FORMAT
        logging.basicConfig(
            level=getattr(logging, level),
            format=fmt,
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=[logging.StreamHandler(sys.stderr)],
        )

    logging.getLogger("aggregator").setLevel(getattr(logging, level))


def _load_yaml_config(path: Path) -> None:
    with open(path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    for handler in config.get("handlers", {}).values():
        if "filename" in handler:
            Path(handler["filename"]).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(config)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name. Will be prefixed with 'aggregator.' if not already.

    Returns:
        Logger instance
    """
    if not name.startswith("aggregator"):
        name = f"aggregator.{name}"
    return logging.getLogger(name)


class LoggerMixin:
    """Mixin class to add logging capability to any class."""

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger
