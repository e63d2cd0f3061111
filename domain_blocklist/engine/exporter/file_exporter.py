"""Plain-text file exporter, one rendered line per entry."""

from __future__ import annotations

from pathlib import Path

from ...errors import WriteError
from .base import BaseExporter


class FileExporter(BaseExporter):
    """Truncate ``path`` and write lines to it in order."""

    def __init__(self, path: Path) -> None:
        self.path = path
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = self.path.open("w", encoding="utf-8", newline="\n")
        except OSError as exc:
            raise WriteError(str(path), str(exc)) from exc

    def export(self, line: str) -> None:
        try:
            self._file.write(line)
            self._file.write("\n")
        except OSError as exc:
            raise WriteError(str(self.path), str(exc)) from exc

    def flush(self) -> None:
        try:
            self._file.flush()
        except OSError as exc:
            raise WriteError(str(self.path), str(exc)) from exc

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()


__all__ = ["FileExporter"]
