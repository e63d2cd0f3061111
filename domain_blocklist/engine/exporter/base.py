"""Exporter Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable


class BaseExporter(ABC):
    """Uniform sink contract for rendered output lines."""

    @abstractmethod
    def export(self, line: str) -> None:
        """Persist a single line."""

    def export_many(self, lines: Iterable[str]) -> int:
        count = 0
        for line in lines:
            self.export(line)
            count += 1
        return count

    @abstractmethod
    def flush(self) -> None:
        """Flush buffered data to destination."""

    @abstractmethod
    def close(self) -> None:
        """Release underlying resources."""

    def __enter__(self) -> "BaseExporter":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()


__all__ = ["BaseExporter"]
