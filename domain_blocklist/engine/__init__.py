"""Engine components: fetch → normalize → merge → format → export."""

from .aggregator import merge
from .fetcher import FetchResult, Fetcher
from .formatter import FormatMode, LineFormatter, resolve_template
from .normalizer import HostNameType, check_host_name, normalize, normalize_line

__all__ = [
    "FetchResult",
    "Fetcher",
    "FormatMode",
    "HostNameType",
    "LineFormatter",
    "check_host_name",
    "merge",
    "normalize",
    "normalize_line",
    "resolve_template",
]
