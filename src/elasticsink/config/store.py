"""Dict-backed configuration store with typed lookups.

Raw values usually come from YAML files or environment variables and are
therefore loosely typed. ``Configuration`` coerces them according to the
``ConfigOption`` they are looked up with.
"""

import logging
import os
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import yaml

from ..errors import ConfigurationValidationError, MissingOptionError
from ..interfaces import ConfigOption, OptionType, ReadableConfig
from ..units import MemorySize, parse_duration
from .options import ALL_OPTIONS

logger = logging.getLogger(__name__)

LIST_SEPARATOR = ";"
DEFAULT_ENV_PREFIX = "ELASTICSINK"


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, full_key))
        else:
            flat[full_key] = value
    return flat


def env_var_name(key: str, prefix: str = DEFAULT_ENV_PREFIX) -> str:
    """Environment variable for an option key.

    ``sink.bulk-flush.max-actions`` -> ``ELASTICSINK_SINK_BULK_FLUSH_MAX_ACTIONS``
    """
    name = key.replace(".", "_").replace("-", "_").upper()
    return f"{prefix}_{name}" if prefix else name


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("booleans are not integers")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"expected an integer, got {type(value).__name__}")


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
    raise ValueError("expected 'true' or 'false'")


def _to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise TypeError(f"expected a string, got {type(value).__name__}")


def _to_string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(LIST_SEPARATOR) if item.strip()]
    if isinstance(value, (list, tuple)):
        return [_to_string(item) for item in value]
    raise TypeError(f"expected a list of strings, got {type(value).__name__}")


def _to_memory_size(value: Any) -> MemorySize:
    if isinstance(value, MemorySize):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return MemorySize(value)
    return MemorySize.parse(value)


def _to_duration(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise ValueError("durations must be non-negative")
        return timedelta(milliseconds=value)
    return parse_duration(value)


def _to_enum(value: Any, enum_class: type[Enum]) -> Enum:
    if isinstance(value, enum_class):
        return value
    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in enum_class:
            if wanted in (member.name.lower(), str(member.value).lower()):
                return member
    choices = ", ".join(str(member.value) for member in enum_class)
    raise ValueError(f"expected one of: {choices}")


class Configuration(ReadableConfig):
    """Immutable mapping of option keys to raw values.

    Usage:
        config = Configuration({"hosts": ["http://localhost:9200"], "index": "logs"})
        config.get(INDEX_OPTION)  # "logs"
    """

    def __init__(self, entries: Optional[Mapping[str, Any]] = None):
        self._entries: dict[str, Any] = dict(entries or {})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Configuration":
        """Create configuration from a (possibly nested) dictionary.

        Nested mappings are joined into dotted keys, so
        ``{"sink": {"bulk-flush": {"max-actions": 5}}}`` sets
        ``sink.bulk-flush.max-actions``.
        """
        return cls(_flatten(data))

    @classmethod
    def from_file(cls, path: str | Path) -> "Configuration":
        """Load configuration from a YAML file. A missing file is empty."""
        path = Path(path).expanduser()
        if not path.exists():
            logger.debug("Config file %s not found, using empty configuration", path)
            return cls()

        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationValidationError(
                    f"Could not parse config file {path}: {e}"
                ) from e

        if not isinstance(data, Mapping):
            raise ConfigurationValidationError(
                f"Config file {path} must contain a mapping, got {type(data).__name__}"
            )
        logger.debug("Loaded %d top-level entries from %s", len(data), path)
        return cls.from_dict(data)

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
        options: Iterable[ConfigOption] = ALL_OPTIONS,
    ) -> "Configuration":
        """Load configuration from environment variables.

        Each known option is read from ``{prefix}_{KEY}``, see ``env_var_name``.
        List options are separated by ';'.
        """
        environ = os.environ if environ is None else environ
        entries = {}
        for option in options:
            value = environ.get(env_var_name(option.key, prefix))
            if value is not None:
                entries[option.key] = value
        return cls(entries)

    def get(self, option: ConfigOption) -> Any:
        value = self.get_optional(option)
        if value is not None:
            return value
        if option.has_default:
            return option.default
        raise MissingOptionError(option.key)

    def get_optional(self, option: ConfigOption) -> Optional[Any]:
        raw = self._entries.get(option.key)
        if raw is None:
            return None
        return self._coerce(option, raw)

    def contains(self, option: ConfigOption) -> bool:
        return self._entries.get(option.key) is not None

    def keys(self) -> list[str]:
        return list(self._entries)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._entries)

    def unknown_keys(self, options: Iterable[ConfigOption] = ALL_OPTIONS) -> list[str]:
        """Keys that no option in ``options`` recognizes."""
        known = {option.key for option in options}
        return sorted(key for key in self._entries if key not in known)

    @staticmethod
    def _coerce(option: ConfigOption, raw: Any) -> Any:
        try:
            if option.type == OptionType.INT:
                return _to_int(raw)
            if option.type == OptionType.BOOLEAN:
                return _to_bool(raw)
            if option.type == OptionType.STRING:
                return _to_string(raw)
            if option.type == OptionType.STRING_LIST:
                return _to_string_list(raw)
            if option.type == OptionType.MEMORY_SIZE:
                return _to_memory_size(raw)
            if option.type == OptionType.DURATION:
                return _to_duration(raw)
            return _to_enum(raw, option.enum_class)
        except (TypeError, ValueError) as e:
            raise ConfigurationValidationError(
                f"Could not parse value '{raw}' for key '{option.key}'. {e}"
            ) from e

    def __repr__(self) -> str:
        return f"Configuration(keys={sorted(self._entries)})"
