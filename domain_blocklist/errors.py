"""Error hierarchy shared by the compiler pipeline."""

from __future__ import annotations


class BlockListError(Exception):
    """Base class for every error raised by the compiler."""


class FetchError(BlockListError):
    """A source could not be downloaded; recovered per source."""

    def __init__(self, source: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"Failed to download {source}: {reason}")
        self.source = source
        self.reason = reason
        self.status_code = status_code


class InputListReadError(BlockListError):
    """The sources file or local block list could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to load file {path}: {reason}")
        self.path = path


class FormatModeError(BlockListError):
    """Unknown format selector or unusable custom template."""


class WriteError(BlockListError):
    """The output file could not be written."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = path


class ConfigError(BlockListError):
    """Configuration file is missing, malformed or fails validation."""


__all__ = [
    "BlockListError",
    "ConfigError",
    "FetchError",
    "FormatModeError",
    "InputListReadError",
    "WriteError",
]
