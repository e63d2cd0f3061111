"""Configuration package exports."""

from .loader import ConfigLocator, ConfigRepository, load_entries
from .models import CompilerConfig

__all__ = [
    "CompilerConfig",
    "ConfigLocator",
    "ConfigRepository",
    "load_entries",
]
