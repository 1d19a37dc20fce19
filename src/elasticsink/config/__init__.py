"""Configuration resolution for the Elasticsearch sink.

Raw entries (YAML files, environment variables, dictionaries) are held by a
``Configuration`` store and resolved into typed values by
``ElasticsearchConfiguration``.
"""

from .hosts import HttpHost, parse_host, parse_hosts
from .options import ALL_OPTIONS, DeliveryGuarantee, FlushBackoffType
from .resolver import ElasticsearchConfiguration, SinkSettings
from .store import Configuration

__all__ = [
    "ALL_OPTIONS",
    "Configuration",
    "DeliveryGuarantee",
    "ElasticsearchConfiguration",
    "FlushBackoffType",
    "HttpHost",
    "SinkSettings",
    "parse_host",
    "parse_hosts",
]
