"""Line templates for the supported output formats."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

import structlog

from ..errors import FormatModeError

ZONE_FILE_PATH = "/etc/bind/zones/db.blocks"
ZONE_TEMPLATE = 'zone "{0}" {{ type primary; file "' + ZONE_FILE_PATH + '"; }};'
HOSTS_TEMPLATE = "127.0.0.1 {0}"

_PROBE_DOMAINS = ("probe-a.invalid", "probe-b.invalid")


class FormatMode(str, Enum):
    """Output line styles."""

    BIND9 = "bind9"
    HOSTS = "hosts"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: "FormatMode | str") -> "FormatMode":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for mode in cls:
            if mode.value == text:
                return mode
        choices = ", ".join(mode.value for mode in cls)
        raise FormatModeError(f"Unknown format type {value!r}; expected one of: {choices}")


FIXED_TEMPLATES: dict[FormatMode, str] = {
    FormatMode.BIND9: ZONE_TEMPLATE,
    FormatMode.HOSTS: HOSTS_TEMPLATE,
}


def resolve_template(
    mode: FormatMode | str,
    template: str | None = None,
    logger: structlog.BoundLogger | None = None,
) -> str:
    """Return the line template for ``mode``.

    Custom templates are trial-rendered so a broken one fails here, before
    anything is written. A custom template without a placeholder is accepted
    as-is and renders the same line for every domain.
    """

    log = logger or structlog.get_logger("domain_blocklist.formatter")
    try:
        selected = FormatMode.parse(mode)
    except FormatModeError:
        log.error("invalid_format_type", format_type=str(mode))
        raise
    if selected is not FormatMode.CUSTOM:
        return FIXED_TEMPLATES[selected]

    if template is None:
        log.error("missing_custom_format", format_type=selected.value)
        raise FormatModeError("Custom format type requires a format string")
    try:
        probes = [template.format(domain) for domain in _PROBE_DOMAINS]
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
        log.error("invalid_custom_format", format=template, error=str(exc))
        raise FormatModeError(f"Invalid custom format {template!r}: {exc}") from exc
    if probes[0] == probes[1]:
        log.warning("custom_format_without_placeholder", format=template)
    return template


def render(mode: FormatMode | str, domain: str, template: str | None = None) -> str:
    return resolve_template(mode, template).format(domain)


class LineFormatter:
    """Render domains with a template resolved once up front."""

    def __init__(
        self,
        mode: FormatMode | str,
        template: str | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.template = resolve_template(mode, template, logger)
        self.mode = FormatMode.parse(mode)

    def render(self, domain: str) -> str:
        return self.template.format(domain)

    def render_all(self, domains: Iterable[str]) -> list[str]:
        return [self.render(domain) for domain in domains]


__all__ = [
    "FIXED_TEMPLATES",
    "FormatMode",
    "HOSTS_TEMPLATE",
    "LineFormatter",
    "ZONE_FILE_PATH",
    "ZONE_TEMPLATE",
    "render",
    "resolve_template",
]
