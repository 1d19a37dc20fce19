"""Parsing of human-readable byte sizes and durations.

Sizes use base 1024 ("5mb" is 5 * 1024 * 1024 bytes). Durations without a
unit are read as milliseconds, sizes without a unit as bytes.
"""

import re
from dataclasses import dataclass
from datetime import timedelta

_MAX_BYTES = 2**63 - 1

_QUANTITY = re.compile(r"^\s*([0-9]+)\s*([a-zA-Zµ]*)\s*$")

_SIZE_UNITS: dict[str, int] = {}
for _multiplier, _names in (
    (1, ("b", "bytes")),
    (1024, ("k", "kb", "kibibytes")),
    (1024**2, ("m", "mb", "mebibytes")),
    (1024**3, ("g", "gb", "gibibytes")),
    (1024**4, ("t", "tb", "tebibytes")),
):
    for _name in _names:
        _SIZE_UNITS[_name] = _multiplier

# Multipliers in microseconds, the resolution of timedelta. Nanoseconds are
# handled separately since they are below that resolution.
_NANO_UNITS = ("ns", "nano", "nanos", "nanosecond", "nanoseconds")
_DURATION_UNITS: dict[str, int] = {}
for _multiplier, _names in (
    (1, ("us", "µs", "micro", "micros", "microsecond", "microseconds")),
    (1000, ("ms", "milli", "millis", "millisecond", "milliseconds")),
    (1000**2, ("s", "sec", "secs", "second", "seconds")),
    (60 * 1000**2, ("min", "m", "minute", "minutes")),
    (3600 * 1000**2, ("h", "hour", "hours")),
    (86400 * 1000**2, ("d", "day", "days")),
):
    for _name in _names:
        _DURATION_UNITS[_name] = _multiplier

# Largest unit first, used when rendering.
_SIZE_LABELS = (("tb", 1024**4), ("gb", 1024**3), ("mb", 1024**2), ("kb", 1024), ("b", 1))
_DURATION_LABELS = (
    ("d", 86400 * 1000**2),
    ("h", 3600 * 1000**2),
    ("min", 60 * 1000**2),
    ("s", 1000**2),
    ("ms", 1000),
    ("us", 1),
)


def _split_quantity(text: str, kind: str) -> tuple[int, str]:
    if not isinstance(text, str):
        raise TypeError(f"{kind} must be a string, got {type(text).__name__}")
    match = _QUANTITY.match(text)
    if match is None:
        raise ValueError(
            f"Invalid {kind} '{text}': expected a non-negative number "
            "followed by an optional unit"
        )
    return int(match.group(1)), match.group(2).lower()


@dataclass(frozen=True)
class MemorySize:
    """A size in bytes.

    Attributes:
        bytes: Size in bytes, never negative.
    """
    bytes: int

    def __post_init__(self):
        if self.bytes < 0:
            raise ValueError(f"Memory size must be non-negative, got {self.bytes}")

    @classmethod
    def parse(cls, text: str) -> "MemorySize":
        """Parse an expression such as ``"2mb"``, ``"512 kb"`` or ``"100"``."""
        value, unit = _split_quantity(text, "memory size")
        if unit and unit not in _SIZE_UNITS:
            raise ValueError(
                f"Invalid memory size '{text}': unknown unit '{unit}'. "
                f"Supported units: {', '.join(sorted(_SIZE_UNITS))}"
            )
        size = value * _SIZE_UNITS.get(unit, 1)
        if size > _MAX_BYTES:
            raise ValueError(f"Memory size '{text}' exceeds the maximum of {_MAX_BYTES} bytes")
        return cls(size)

    @property
    def kibibytes(self) -> int:
        return self.bytes >> 10

    @property
    def mebibytes(self) -> int:
        return self.bytes >> 20

    def __str__(self) -> str:
        if self.bytes == 0:
            return "0b"
        for label, multiplier in _SIZE_LABELS:
            if self.bytes % multiplier == 0:
                return f"{self.bytes // multiplier}{label}"
        return f"{self.bytes}b"


def parse_duration(text: str) -> timedelta:
    """Parse an expression such as ``"10s"``, ``"50 ms"`` or ``"2min"``.

    A bare number is read as milliseconds.
    """
    value, unit = _split_quantity(text, "duration")
    if unit in _NANO_UNITS:
        micros = value // 1000
    elif not unit:
        micros = value * 1000
    elif unit in _DURATION_UNITS:
        micros = value * _DURATION_UNITS[unit]
    else:
        raise ValueError(
            f"Invalid duration '{text}': unknown unit '{unit}'. "
            "Supported units: ns, us, ms, s, min, h, d"
        )
    try:
        return timedelta(microseconds=micros)
    except OverflowError as e:
        raise ValueError(f"Duration '{text}' is too large") from e


def to_millis(duration: timedelta) -> int:
    """Whole milliseconds in ``duration``, truncating sub-millisecond parts."""
    return duration // timedelta(milliseconds=1)


def format_duration(duration: timedelta) -> str:
    """Render ``duration`` using the largest unit that divides it exactly."""
    micros = duration // timedelta(microseconds=1)
    if micros == 0:
        return "0ms"
    for label, multiplier in _DURATION_LABELS:
        if micros % multiplier == 0:
            return f"{micros // multiplier}{label}"
    return f"{micros}us"
