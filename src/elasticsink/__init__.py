"""elasticsink: configuration resolution for an Elasticsearch sink connector.

Usage:
    from elasticsink import Configuration, ElasticsearchConfiguration

    config = ElasticsearchConfiguration(Configuration.from_file("sink.yaml"))
    config.validate()
    settings = config.to_sink_settings()
"""

from .config import (
    Configuration,
    DeliveryGuarantee,
    ElasticsearchConfiguration,
    FlushBackoffType,
    HttpHost,
    SinkSettings,
)
from .errors import (
    ConfigurationValidationError,
    MalformedEndpointError,
    MissingOptionError,
    MissingPortError,
    MissingSchemeError,
)

__version__ = "0.1.0"

__all__ = [
    "Configuration",
    "ConfigurationValidationError",
    "DeliveryGuarantee",
    "ElasticsearchConfiguration",
    "FlushBackoffType",
    "HttpHost",
    "MalformedEndpointError",
    "MissingOptionError",
    "MissingPortError",
    "MissingSchemeError",
    "SinkSettings",
]
