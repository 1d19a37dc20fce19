"""Parsing of Elasticsearch endpoint strings (``scheme://host:port``)."""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from ..errors import MalformedEndpointError, MissingPortError, MissingSchemeError
from .options import HOSTS_OPTION

_SCHEME_SEPARATOR = "://"
_PORT = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class HttpHost:
    """A validated network address the sink may connect to.

    Attributes:
        scheme: Lower-cased URI scheme, e.g. "http" or "https".
        hostname: Host name or address, as written in the configuration.
        port: TCP port, never negative.
    """
    scheme: str
    hostname: str
    port: int

    def to_uri(self) -> str:
        return f"{self.scheme}://{self.hostname}:{self.port}"

    def __str__(self) -> str:
        return self.to_uri()


def _split_host(text: str) -> tuple[Optional[str], str, int]:
    """Split ``text`` into (scheme, hostname, port) without validating them.

    Scheme is None and port is -1 when they are not present.

    Raises:
        ValueError: If ``text`` is blank, contains whitespace or has a
            non-numeric port.
    """
    if not text or any(ch.isspace() for ch in text):
        raise ValueError(f"Host must be non-empty and contain no blanks: '{text}'")

    scheme = None
    rest = text
    scheme_end = rest.find(_SCHEME_SEPARATOR)
    if scheme_end > 0:
        scheme = rest[:scheme_end].lower()
        rest = rest[scheme_end + len(_SCHEME_SEPARATOR):]

    port = -1
    port_start = rest.rfind(":")
    if port_start > 0:
        port_text = rest[port_start + 1:]
        if not _PORT.fullmatch(port_text):
            raise ValueError(f"Invalid port '{port_text}' in host '{text}'")
        port = int(port_text)
        rest = rest[:port_start]

    return scheme, rest, port


def parse_host(host: str, option_key: str = HOSTS_OPTION.key) -> HttpHost:
    """Parse and validate a single ``scheme://host:port`` string.

    Raises:
        MissingPortError: If no port is given.
        MissingSchemeError: If no scheme is given.
        MalformedEndpointError: If the string cannot be parsed at all.
    """
    try:
        scheme, hostname, port = _split_host(host)
    except (TypeError, ValueError) as e:
        raise MalformedEndpointError(host, option_key) from e

    if port < 0:
        raise MissingPortError(host, option_key)
    if not scheme:
        raise MissingSchemeError(host, option_key)
    return HttpHost(scheme=scheme, hostname=hostname, port=port)


def parse_hosts(hosts: Iterable[str], option_key: str = HOSTS_OPTION.key) -> list[HttpHost]:
    """Parse every host in order. The first invalid entry fails the whole list."""
    return [parse_host(host, option_key) for host in hosts]
