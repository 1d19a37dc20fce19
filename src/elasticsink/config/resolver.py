"""Typed access to the Elasticsearch sink configuration.

``ElasticsearchConfiguration`` wraps a ``ReadableConfig`` and exposes one
accessor per connector option, converting sizes to bytes and durations to
milliseconds. Nothing is cached: every accessor reads the store again.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..errors import ConfigurationValidationError
from ..interfaces import ReadableConfig
from ..units import to_millis
from .hosts import HttpHost, parse_hosts
from .options import (
    BULK_FLUSH_BACKOFF_DELAY_OPTION,
    BULK_FLUSH_BACKOFF_MAX_RETRIES_OPTION,
    BULK_FLUSH_BACKOFF_TYPE_OPTION,
    BULK_FLUSH_INTERVAL_OPTION,
    BULK_FLUSH_MAX_ACTIONS_OPTION,
    BULK_FLUSH_MAX_SIZE_OPTION,
    CONNECTION_PATH_PREFIX_OPTION,
    DELIVERY_GUARANTEE_OPTION,
    FORMAT_OPTION,
    HOSTS_OPTION,
    INDEX_OPTION,
    KEY_DELIMITER_OPTION,
    PASSWORD_OPTION,
    USERNAME_OPTION,
    DeliveryGuarantee,
    FlushBackoffType,
)

logger = logging.getLogger(__name__)

_MB = 1024 * 1024


@dataclass(frozen=True)
class SinkSettings:
    """Snapshot of every resolved option, handed to client construction."""
    hosts: list[HttpHost]
    index: str
    key_delimiter: str
    format: str
    bulk_flush_max_actions: int
    bulk_flush_max_byte_size: int
    bulk_flush_interval_ms: int
    delivery_guarantee: DeliveryGuarantee
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    bulk_flush_backoff_type: Optional[FlushBackoffType] = None
    bulk_flush_backoff_retries: Optional[int] = None
    bulk_flush_backoff_delay_ms: Optional[int] = None
    path_prefix: Optional[str] = None


class ElasticsearchConfiguration:
    """Elasticsearch specific configuration.

    Usage:
        config = ElasticsearchConfiguration(Configuration.from_file("sink.yaml"))
        config.validate()
        hosts = config.get_hosts()
    """

    def __init__(self, config: ReadableConfig):
        if config is None:
            raise TypeError("config must not be None")
        self.config = config

    def get_bulk_flush_max_actions(self) -> int:
        return self.config.get(BULK_FLUSH_MAX_ACTIONS_OPTION)

    def get_bulk_flush_max_byte_size(self) -> int:
        return self.config.get(BULK_FLUSH_MAX_SIZE_OPTION).bytes

    def get_bulk_flush_interval(self) -> int:
        """Flush interval in milliseconds."""
        return to_millis(self.config.get(BULK_FLUSH_INTERVAL_OPTION))

    def get_delivery_guarantee(self) -> DeliveryGuarantee:
        return self.config.get(DELIVERY_GUARANTEE_OPTION)

    def get_username(self) -> Optional[str]:
        return self.config.get_optional(USERNAME_OPTION)

    def get_password(self) -> Optional[str]:
        return self.config.get_optional(PASSWORD_OPTION)

    def get_bulk_flush_backoff_type(self) -> Optional[FlushBackoffType]:
        return self.config.get_optional(BULK_FLUSH_BACKOFF_TYPE_OPTION)

    def get_bulk_flush_backoff_retries(self) -> Optional[int]:
        return self.config.get_optional(BULK_FLUSH_BACKOFF_MAX_RETRIES_OPTION)

    def get_bulk_flush_backoff_delay(self) -> Optional[int]:
        """Backoff delay in milliseconds, or None if not configured."""
        delay = self.config.get_optional(BULK_FLUSH_BACKOFF_DELAY_OPTION)
        return None if delay is None else to_millis(delay)

    def get_index(self) -> str:
        return self.config.get(INDEX_OPTION)

    def get_key_delimiter(self) -> str:
        return self.config.get(KEY_DELIMITER_OPTION)

    def get_path_prefix(self) -> Optional[str]:
        return self.config.get_optional(CONNECTION_PATH_PREFIX_OPTION)

    def get_format(self) -> str:
        return self.config.get(FORMAT_OPTION)

    def get_hosts(self) -> list[HttpHost]:
        """Configured hosts in the order they were given.

        Raises:
            MalformedEndpointError: If any single host is invalid.
        """
        hosts = parse_hosts(self.config.get(HOSTS_OPTION), HOSTS_OPTION.key)
        logger.debug("Resolved %d host(s) from '%s'", len(hosts), HOSTS_OPTION.key)
        return hosts

    def validate(self) -> None:
        """Check option values against each other before the sink is built.

        Raises:
            ConfigurationValidationError: On the first failing check.
        """
        if not self.get_hosts():
            raise ConfigurationValidationError(
                f"'{HOSTS_OPTION.key}' must contain at least one host"
            )

        if not self.get_index():
            raise ConfigurationValidationError(f"'{INDEX_OPTION.key}' must not be empty")

        max_actions = self.get_bulk_flush_max_actions()
        if max_actions != -1 and max_actions < 1:
            raise ConfigurationValidationError(
                f"'{BULK_FLUSH_MAX_ACTIONS_OPTION.key}' must be at least 1. "
                f"Got: {max_actions}"
            )

        max_size = self.config.get(BULK_FLUSH_MAX_SIZE_OPTION)
        if max_size.bytes < _MB or max_size.bytes % _MB != 0:
            raise ConfigurationValidationError(
                f"'{BULK_FLUSH_MAX_SIZE_OPTION.key}' must be in MB granularity. "
                f"Got: {max_size}"
            )

        retries = self.get_bulk_flush_backoff_retries()
        if retries is not None and retries < 1:
            raise ConfigurationValidationError(
                f"'{BULK_FLUSH_BACKOFF_MAX_RETRIES_OPTION.key}' must be at least 1. "
                f"Got: {retries}"
            )

        delay = self.get_bulk_flush_backoff_delay()
        if delay is not None and delay < 0:
            raise ConfigurationValidationError(
                f"'{BULK_FLUSH_BACKOFF_DELAY_OPTION.key}' must be non-negative. "
                f"Got: {delay}"
            )

        username = self.get_username()
        if username and username.strip():
            password = self.get_password()
            if not password or not password.strip():
                raise ConfigurationValidationError(
                    f"'{USERNAME_OPTION.key}' and '{PASSWORD_OPTION.key}' must be "
                    f"set at the same time. Got: username '{username}' and "
                    "password '******'"
                )

    def to_sink_settings(self) -> SinkSettings:
        """Resolve every option into a single immutable snapshot."""
        return SinkSettings(
            hosts=self.get_hosts(),
            index=self.get_index(),
            key_delimiter=self.get_key_delimiter(),
            format=self.get_format(),
            bulk_flush_max_actions=self.get_bulk_flush_max_actions(),
            bulk_flush_max_byte_size=self.get_bulk_flush_max_byte_size(),
            bulk_flush_interval_ms=self.get_bulk_flush_interval(),
            delivery_guarantee=self.get_delivery_guarantee(),
            username=self.get_username(),
            password=self.get_password(),
            bulk_flush_backoff_type=self.get_bulk_flush_backoff_type(),
            bulk_flush_backoff_retries=self.get_bulk_flush_backoff_retries(),
            bulk_flush_backoff_delay_ms=self.get_bulk_flush_backoff_delay(),
            path_prefix=self.get_path_prefix(),
        )

    def __repr__(self) -> str:
        return f"ElasticsearchConfiguration(config={self.config!r})"
