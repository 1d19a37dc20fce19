"""Tests for ElasticsearchConfiguration accessors and validation."""

from datetime import timedelta

import pytest

from elasticsink.config import (
    Configuration,
    DeliveryGuarantee,
    ElasticsearchConfiguration,
    FlushBackoffType,
    HttpHost,
)
from elasticsink.errors import (
    ConfigurationValidationError,
    MalformedEndpointError,
    MissingOptionError,
    MissingPortError,
)


class TestConstruction:
    """Tests for ElasticsearchConfiguration construction."""

    def test_none_store_rejected(self):
        with pytest.raises(TypeError):
            ElasticsearchConfiguration(None)


class TestDefaults:
    """Accessors for options with defaults never return None."""

    def test_defaults(self, make_config):
        config = make_config()

        assert config.get_bulk_flush_max_actions() == 1000
        assert config.get_bulk_flush_max_byte_size() == 2 * 1024 * 1024
        assert config.get_bulk_flush_interval() == 1000
        assert config.get_delivery_guarantee() == DeliveryGuarantee.AT_LEAST_ONCE
        assert config.get_key_delimiter() == "_"
        assert config.get_format() == "json"

    def test_optionals_absent(self, make_config):
        """Unset optional options are None, not empty or zero."""
        config = make_config()

        assert config.get_username() is None
        assert config.get_password() is None
        assert config.get_path_prefix() is None
        assert config.get_bulk_flush_backoff_type() is None
        assert config.get_bulk_flush_backoff_retries() is None
        assert config.get_bulk_flush_backoff_delay() is None


class TestAccessors:
    """Tests for configured values."""

    def test_byte_size(self, make_config):
        config = make_config(**{"sink.bulk-flush.max-size": "5mb"})

        assert config.get_bulk_flush_max_byte_size() == 5 * 1024 * 1024

    def test_interval(self, make_config):
        config = make_config(**{"sink.bulk-flush.interval": "10s"})

        assert config.get_bulk_flush_interval() == 10000

    def test_backoff(self, make_config):
        config = make_config(**{
            "sink.bulk-flush.backoff.strategy": "constant",
            "sink.bulk-flush.backoff.max-retries": "3",
            "sink.bulk-flush.backoff.delay": "50ms",
        })

        assert config.get_bulk_flush_backoff_type() == FlushBackoffType.CONSTANT
        assert config.get_bulk_flush_backoff_retries() == 3
        assert config.get_bulk_flush_backoff_delay() == 50

    def test_zero_is_distinguishable_from_absent(self, make_config):
        """A configured zero delay is 0, not None."""
        config = make_config(**{"sink.bulk-flush.backoff.delay": "0ms"})

        assert config.get_bulk_flush_backoff_delay() == 0

    def test_empty_string_is_distinguishable_from_absent(self, make_config):
        config = make_config(**{"connection.path-prefix": ""})

        assert config.get_path_prefix() == ""

    def test_credentials_and_prefix(self, make_config):
        config = make_config(username="elastic", password="secret",
                             **{"connection.path-prefix": "/es"})

        assert config.get_username() == "elastic"
        assert config.get_password() == "secret"
        assert config.get_path_prefix() == "/es"

    def test_index_and_delimiter(self, make_config):
        config = make_config(index="metrics", **{"document-id.key-delimiter": "$"})

        assert config.get_index() == "metrics"
        assert config.get_key_delimiter() == "$"

    def test_delivery_guarantee(self, make_config):
        config = make_config(**{"sink.delivery-guarantee": "exactly-once"})

        assert config.get_delivery_guarantee() == DeliveryGuarantee.EXACTLY_ONCE

    def test_missing_index(self):
        config = ElasticsearchConfiguration(Configuration({"hosts": ["http://a:1"]}))

        with pytest.raises(MissingOptionError, match="index"):
            config.get_index()

    def test_reads_are_idempotent(self, make_config):
        config = make_config(hosts=["http://a:9200", "https://b:9243"])

        assert config.get_hosts() == config.get_hosts()
        assert config.to_sink_settings() == config.to_sink_settings()

    def test_accepts_typed_values(self, make_config):
        """Already-typed values pass through the store unchanged."""
        config = make_config(**{
            "sink.bulk-flush.interval": timedelta(seconds=3),
            "sink.delivery-guarantee": DeliveryGuarantee.NONE,
        })

        assert config.get_bulk_flush_interval() == 3000
        assert config.get_delivery_guarantee() == DeliveryGuarantee.NONE


class TestHosts:
    """Tests for get_hosts()."""

    def test_preserves_order(self, make_config):
        config = make_config(hosts=["http://host1:9200", "http://host2:9200"])

        assert config.get_hosts() == [
            HttpHost("http", "host1", 9200),
            HttpHost("http", "host2", 9200),
        ]

    def test_one_invalid_fails_whole_accessor(self, make_config):
        config = make_config(hosts=["http://host1:9200", "host2:9200"])

        with pytest.raises(MalformedEndpointError, match="Missing scheme"):
            config.get_hosts()

    def test_missing_hosts(self):
        config = ElasticsearchConfiguration(Configuration({"index": "logs"}))

        with pytest.raises(MissingOptionError, match="hosts"):
            config.get_hosts()


class TestValidate:
    """Tests for validate() cross-option checks."""

    def test_valid(self, make_config):
        make_config().validate()

    def test_full_valid_config(self, make_config):
        make_config(
            username="elastic",
            password="secret",
            **{
                "sink.bulk-flush.max-actions": -1,
                "sink.bulk-flush.max-size": "10mb",
                "sink.bulk-flush.backoff.strategy": "exponential",
                "sink.bulk-flush.backoff.max-retries": 5,
                "sink.bulk-flush.backoff.delay": "100ms",
            },
        ).validate()

    def test_invalid_host(self, make_config):
        config = make_config(hosts=["http://localhost"])

        with pytest.raises(MissingPortError):
            config.validate()

    def test_empty_hosts(self, make_config):
        config = make_config(hosts=[])

        with pytest.raises(ConfigurationValidationError, match="at least one host"):
            config.validate()

    def test_empty_index(self, make_config):
        config = make_config(index="")

        with pytest.raises(ConfigurationValidationError, match="'index' must not be empty"):
            config.validate()

    @pytest.mark.parametrize("max_actions", [0, -2])
    def test_max_actions(self, make_config, max_actions):
        config = make_config(**{"sink.bulk-flush.max-actions": max_actions})

        with pytest.raises(ConfigurationValidationError, match="max-actions"):
            config.validate()

    @pytest.mark.parametrize("max_size", ["1025kb", "512kb", "0"])
    def test_max_size_granularity(self, make_config, max_size):
        config = make_config(**{"sink.bulk-flush.max-size": max_size})

        with pytest.raises(ConfigurationValidationError, match="MB granularity"):
            config.validate()

    def test_backoff_retries(self, make_config):
        config = make_config(**{"sink.bulk-flush.backoff.max-retries": 0})

        with pytest.raises(ConfigurationValidationError, match="max-retries"):
            config.validate()

    def test_negative_backoff_delay(self, make_config):
        """A negative delay can only come from an already-typed timedelta."""
        config = make_config(**{"sink.bulk-flush.backoff.delay": timedelta(milliseconds=-1)})

        with pytest.raises(ConfigurationValidationError, match="backoff.delay.*non-negative"):
            config.validate()

    def test_username_without_password(self, make_config):
        config = make_config(username="elastic")

        with pytest.raises(ConfigurationValidationError) as exc_info:
            config.validate()

        assert "must be set at the same time" in str(exc_info.value)

    def test_username_with_blank_password(self, make_config):
        config = make_config(username="elastic", password="   ")

        with pytest.raises(ConfigurationValidationError, match="same time"):
            config.validate()

    def test_password_not_leaked(self, make_config):
        config = make_config(username="elastic", password="   ")

        with pytest.raises(ConfigurationValidationError) as exc_info:
            config.validate()

        assert "******" in str(exc_info.value)


class TestSinkSettings:
    """Tests for to_sink_settings()."""

    def test_snapshot(self, make_config):
        settings = make_config(
            username="elastic",
            password="secret",
            **{"sink.bulk-flush.backoff.delay": "2s"},
        ).to_sink_settings()

        assert settings.hosts == [HttpHost("http", "localhost", 9200)]
        assert settings.index == "logs"
        assert settings.bulk_flush_max_byte_size == 2 * 1024 * 1024
        assert settings.bulk_flush_interval_ms == 1000
        assert settings.bulk_flush_backoff_delay_ms == 2000
        assert settings.password == "secret"

    def test_repr_masks_password(self, make_config):
        settings = make_config(username="elastic", password="secret").to_sink_settings()

        assert "secret" not in repr(settings)
        assert "elastic" in repr(settings)
