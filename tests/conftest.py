"""Pytest fixtures for elasticsink tests."""

import pytest

from elasticsink.config import Configuration, ElasticsearchConfiguration


@pytest.fixture
def base_entries():
    """Smallest set of entries that passes validation."""
    return {
        "hosts": ["http://localhost:9200"],
        "index": "logs",
    }


@pytest.fixture
def make_config(base_entries):
    """Build an ElasticsearchConfiguration from base entries plus overrides."""
    def _make(**overrides):
        entries = dict(base_entries)
        entries.update(overrides)
        return ElasticsearchConfiguration(Configuration(entries))
    return _make


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config file and return its path."""
    def _write(content: str):
        path = tmp_path / "sink.yaml"
        path.write_text(content)
        return path
    return _write
