"""Multi-provider aggregator: configuration and per-provider resources."""

__version__ = "0.1.0"
