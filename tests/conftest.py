"""Shared fixtures."""

import pytest

AGGREGATOR_BLOCK = """
[aggregator]
category = "aggregator"
name = "Test Aggregator"
namespace = "https://aggregator.example.com"
"""


@pytest.fixture
def write_config(tmp_path):
    """Write a TOML document (with a valid [aggregator] block) and return its path."""

    def _write(body: str, with_aggregator: bool = True) -> str:
        path = tmp_path / "aggregator.toml"
        text = body + (AGGREGATOR_BLOCK if with_aggregator else "")
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write
