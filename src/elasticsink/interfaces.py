"""Core interfaces for the elasticsink configuration layer.

The resolver only depends on ``ReadableConfig``: anything that can look up a
``ConfigOption`` and hand back a typed value can back it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class OptionType(Enum):
    """Semantic type of a configuration option."""
    INT = "int"
    BOOLEAN = "boolean"
    STRING = "string"
    STRING_LIST = "string-list"
    MEMORY_SIZE = "memory-size"  # "2mb" -> MemorySize
    DURATION = "duration"        # "1s" -> timedelta
    ENUM = "enum"


@dataclass(frozen=True)
class ConfigOption:
    """Descriptor for one recognized configuration key.

    Attributes:
        key: Option key as written in configuration files (e.g. "hosts").
        type: Semantic type the raw value is coerced to.
        default: Already-typed default value, or None if the option has none.
        description: Human-readable help text.
        enum_class: Enum the value must belong to (ENUM options only).
    """
    key: str
    type: OptionType
    default: Any = None
    description: str = ""
    enum_class: Optional[type[Enum]] = None

    def __post_init__(self):
        if self.type == OptionType.ENUM and self.enum_class is None:
            raise ValueError(f"Enum option '{self.key}' requires enum_class")

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def __repr__(self) -> str:
        return f"ConfigOption(key='{self.key}', type={self.type.value})"


class ReadableConfig(ABC):
    """Read-only, typed view over a set of configuration entries."""

    @abstractmethod
    def get(self, option: ConfigOption) -> Any:
        """Return the value of ``option``, falling back to its default.

        Raises:
            MissingOptionError: If the option is unset and has no default.
            ConfigurationValidationError: If the raw value cannot be coerced.
        """
        pass

    @abstractmethod
    def get_optional(self, option: ConfigOption) -> Optional[Any]:
        """Return the value of ``option``, or None if it is not set.

        The option default is never substituted.
        """
        pass

    @abstractmethod
    def contains(self, option: ConfigOption) -> bool:
        """Whether ``option`` is explicitly set."""
        pass
