"""Pydantic models describing a compiler run."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_SOURCES_FILE = "sources"
DEFAULT_LOCAL_BLOCK_LIST_FILE = "local-block-list"
DEFAULT_OUTPUT_FILENAME = "named.conf.blocks"
DEFAULT_CUSTOM_FORMAT = "{0}"


class CompilerConfig(BaseModel):
    """Settings shared by the loader, the fetcher and the writer."""

    sources_file: Path = Field(default=Path(DEFAULT_SOURCES_FILE))
    local_block_list_file: Path = Field(default=Path(DEFAULT_LOCAL_BLOCK_LIST_FILE))
    output: Path | None = Field(
        default=None,
        description="Target file; defaults to named.conf.blocks in the project home.",
    )
    # Kept as plain text so an unknown selector surfaces as FormatModeError
    # from the formatter rather than a schema error.
    format_type: str = "bind9"
    format: str = DEFAULT_CUSTOM_FORMAT
    request_timeout: float = 30.0
    user_agent: str | None = None

    @field_validator("sources_file", "local_block_list_file", mode="before")
    @classmethod
    def _coerce_paths(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("output", mode="before")
    @classmethod
    def _coerce_output(cls, value: Any) -> Path | None:
        if value in (None, ""):
            return None
        return Path(value)

    @field_validator("request_timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout must be > 0")
        return value

    def resolved_output(self, home: Path) -> Path:
        """Return the output path, anchoring the default in ``home``."""

        if self.output is None:
            return home / DEFAULT_OUTPUT_FILENAME
        return self.output


__all__ = [
    "CompilerConfig",
    "DEFAULT_CUSTOM_FORMAT",
    "DEFAULT_LOCAL_BLOCK_LIST_FILE",
    "DEFAULT_OUTPUT_FILENAME",
    "DEFAULT_SOURCES_FILE",
]
