"""Configuration errors raised while resolving connector options."""

from typing import Optional


class ConfigurationValidationError(ValueError):
    """A configuration value is missing, malformed or inconsistent.

    The message is meant for operators: it names the offending key, the
    value that was supplied and the expected format.
    """


class MissingOptionError(ConfigurationValidationError):
    """A required option without a default value is not set."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Missing required option '{key}'.")


class MalformedEndpointError(ConfigurationValidationError):
    """An endpoint string does not follow the ``scheme://host:port`` format.

    Attributes:
        host: The endpoint string exactly as it was configured.
        option_key: The option the endpoint was read from.
        reason: Short cause appended to the message (e.g. "Missing port").
    """

    EXPECTED_FORMAT = "http://host_name:port"

    def __init__(self, host: str, option_key: str, reason: Optional[str] = None):
        self.host = host
        self.option_key = option_key
        self.reason = reason
        message = (
            f"Could not parse host '{host}' in option '{option_key}'. "
            f"It should follow the format '{self.EXPECTED_FORMAT}'."
        )
        if reason:
            message = f"{message} {reason}."
        super().__init__(message)


class MissingPortError(MalformedEndpointError):
    """An endpoint string parsed but carries no port."""

    def __init__(self, host: str, option_key: str):
        super().__init__(host, option_key, reason="Missing port")


class MissingSchemeError(MalformedEndpointError):
    """An endpoint string parsed but carries no scheme."""

    def __init__(self, host: str, option_key: str):
        super().__init__(host, option_key, reason="Missing scheme")
