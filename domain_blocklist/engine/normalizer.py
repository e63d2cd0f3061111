"""Turn raw blocklist text into canonical domain strings.

Feeds come in a mix of shapes: plain domain-per-line lists, hosts files
mapping names to ``127.0.0.1``, and either of those with trailing ``#``
comments. Every line goes through the same heuristics:

* lines starting with ``#`` are dropped;
* an inline comment is cut off at the first ``#``;
* the loopback markers ``127.0.0.1`` and ``localhost`` are removed;
* whatever remains is trimmed and must contain a ``.``;
* a leading ``www.`` is stripped once;
* the result must be a recognisable host name (DNS name or IP literal).
"""

from __future__ import annotations

import ipaddress
from enum import Enum
from typing import Iterable

COMMENT_MARKER = "#"
LOOPBACK_MARKERS = ("127.0.0.1", "localhost")
WWW_PREFIX = "www."

MAX_HOST_LENGTH = 255
MAX_LABEL_LENGTH = 63


class HostNameType(str, Enum):
    """Kinds of host identifiers recognised by :func:`check_host_name`."""

    UNKNOWN = "unknown"
    DNS = "dns"
    IPV4 = "ipv4"
    IPV6 = "ipv6"


def _is_label(label: str) -> bool:
    if not label or len(label) > MAX_LABEL_LENGTH:
        return False
    if not label[0].isalnum():
        return False
    return all(ch.isalnum() or ch in "-_" for ch in label[1:])


def _is_dns_name(name: str) -> bool:
    if name.endswith("."):
        name = name[:-1]
    if not name or len(name) > MAX_HOST_LENGTH:
        return False
    return all(_is_label(label) for label in name.split("."))


def check_host_name(name: str) -> HostNameType:
    if not name:
        return HostNameType.UNKNOWN
    literal = name[1:-1] if name.startswith("[") and name.endswith("]") else name
    try:
        address = ipaddress.ip_address(literal)
    except ValueError:
        address = None
    if address is not None:
        if address.version == 6:
            return HostNameType.IPV6
        # A bracketed IPv4 literal is not a valid host
        if literal == name:
            return HostNameType.IPV4
        return HostNameType.UNKNOWN
    if literal != name:
        return HostNameType.UNKNOWN
    if _is_dns_name(name):
        return HostNameType.DNS
    return HostNameType.UNKNOWN


def is_valid_host(name: str) -> bool:
    return check_host_name(name) is not HostNameType.UNKNOWN


def normalize_line(line: str) -> str | None:
    """Return the canonical domain carried by ``line`` or ``None`` to discard it."""

    if line.startswith(COMMENT_MARKER):
        return None
    comment = line.find(COMMENT_MARKER)
    item = line[:comment] if comment > 0 else line
    for marker in LOOPBACK_MARKERS:
        item = item.replace(marker, "")
    item = item.strip()
    if "." not in item:
        return None
    if item.startswith(WWW_PREFIX):
        item = item[len(WWW_PREFIX):]
    if not is_valid_host(item):
        return None
    return item


def normalize_lines(lines: Iterable[str]) -> set[str]:
    domains: set[str] = set()
    for line in lines:
        domain = normalize_line(line)
        if domain is not None:
            domains.add(domain)
    return domains


def normalize(content: str) -> set[str]:
    """Extract every canonical domain from a raw feed body."""

    return normalize_lines(content.split("\n"))


__all__ = [
    "HostNameType",
    "check_host_name",
    "is_valid_host",
    "normalize",
    "normalize_line",
    "normalize_lines",
]
