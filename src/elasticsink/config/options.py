"""Options recognized by the Elasticsearch sink connector."""

from datetime import timedelta
from enum import Enum

from ..interfaces import ConfigOption, OptionType
from ..units import MemorySize


class DeliveryGuarantee(Enum):
    """Delivery semantics for writes issued by the sink."""
    EXACTLY_ONCE = "exactly-once"
    AT_LEAST_ONCE = "at-least-once"
    NONE = "none"


class FlushBackoffType(Enum):
    """Delay strategy between retries of a failed bulk request."""
    CONSTANT = "constant"
    EXPONENTIAL = "exponential"
    NONE = "none"


HOSTS_OPTION = ConfigOption(
    key="hosts",
    type=OptionType.STRING_LIST,
    description="One or more Elasticsearch hosts to connect to, "
                "e.g. 'http://host_name:9092;http://host_name:9093'.",
)

INDEX_OPTION = ConfigOption(
    key="index",
    type=OptionType.STRING,
    description="Elasticsearch index for every record.",
)

USERNAME_OPTION = ConfigOption(
    key="username",
    type=OptionType.STRING,
    description="Username used to connect to Elasticsearch instance.",
)

PASSWORD_OPTION = ConfigOption(
    key="password",
    type=OptionType.STRING,
    description="Password used to connect to Elasticsearch instance.",
)

KEY_DELIMITER_OPTION = ConfigOption(
    key="document-id.key-delimiter",
    type=OptionType.STRING,
    default="_",
    description="Delimiter for composite keys e.g., '$' would result in "
                "IDs 'KEY1$KEY2$KEY3'.",
)

BULK_FLUSH_MAX_ACTIONS_OPTION = ConfigOption(
    key="sink.bulk-flush.max-actions",
    type=OptionType.INT,
    default=1000,
    description="Maximum number of actions to buffer for each bulk request.",
)

BULK_FLUSH_MAX_SIZE_OPTION = ConfigOption(
    key="sink.bulk-flush.max-size",
    type=OptionType.MEMORY_SIZE,
    default=MemorySize.parse("2mb"),
    description="Maximum size of buffered actions per bulk request.",
)

BULK_FLUSH_INTERVAL_OPTION = ConfigOption(
    key="sink.bulk-flush.interval",
    type=OptionType.DURATION,
    default=timedelta(seconds=1),
    description="Bulk flush interval.",
)

BULK_FLUSH_BACKOFF_TYPE_OPTION = ConfigOption(
    key="sink.bulk-flush.backoff.strategy",
    type=OptionType.ENUM,
    enum_class=FlushBackoffType,
    description="Backoff strategy in case of failure of a bulk request.",
)

BULK_FLUSH_BACKOFF_MAX_RETRIES_OPTION = ConfigOption(
    key="sink.bulk-flush.backoff.max-retries",
    type=OptionType.INT,
    description="Maximum number of retries.",
)

BULK_FLUSH_BACKOFF_DELAY_OPTION = ConfigOption(
    key="sink.bulk-flush.backoff.delay",
    type=OptionType.DURATION,
    description="Delay between each backoff attempt.",
)

CONNECTION_PATH_PREFIX_OPTION = ConfigOption(
    key="connection.path-prefix",
    type=OptionType.STRING,
    description="Prefix string to be added to every REST communication.",
)

DELIVERY_GUARANTEE_OPTION = ConfigOption(
    key="sink.delivery-guarantee",
    type=OptionType.ENUM,
    enum_class=DeliveryGuarantee,
    default=DeliveryGuarantee.AT_LEAST_ONCE,
    description="Optional delivery guarantee when committing.",
)

FORMAT_OPTION = ConfigOption(
    key="format",
    type=OptionType.STRING,
    default="json",
    description="Format used to serialize records into documents.",
)

REQUIRED_OPTIONS = (
    HOSTS_OPTION,
    INDEX_OPTION,
)

OPTIONAL_OPTIONS = (
    USERNAME_OPTION,
    PASSWORD_OPTION,
    KEY_DELIMITER_OPTION,
    BULK_FLUSH_MAX_ACTIONS_OPTION,
    BULK_FLUSH_MAX_SIZE_OPTION,
    BULK_FLUSH_INTERVAL_OPTION,
    BULK_FLUSH_BACKOFF_TYPE_OPTION,
    BULK_FLUSH_BACKOFF_MAX_RETRIES_OPTION,
    BULK_FLUSH_BACKOFF_DELAY_OPTION,
    CONNECTION_PATH_PREFIX_OPTION,
    DELIVERY_GUARANTEE_OPTION,
    FORMAT_OPTION,
)

ALL_OPTIONS = REQUIRED_OPTIONS + OPTIONAL_OPTIONS
