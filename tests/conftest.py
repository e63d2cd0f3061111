"""Shared fixtures: settings, a recording logger and mocked HTTP sources."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

import httpx
import pytest

from domain_blocklist.config import CompilerConfig, ConfigLocator, ConfigRepository
from domain_blocklist.engine import Fetcher

Route = tuple[int, str] | Exception


class RecordingLogger:
    """Minimal structlog stand-in keeping every event for assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def bind(self, **_kwargs: Any) -> "RecordingLogger":
        return self

    def _log(self, level: str, event: str, **kwargs: Any) -> None:
        self.events.append((level, event, kwargs))

    def debug(self, event: str, **kwargs: Any) -> None:
        self._log("debug", event, **kwargs)

    def info(self, event: str, **kwargs: Any) -> None:
        self._log("info", event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._log("warning", event, **kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        self._log("error", event, **kwargs)

    def named(self, event: str) -> list[dict[str, Any]]:
        return [kwargs for _level, name, kwargs in self.events if name == event]

    def levels(self, level: str) -> list[str]:
        return [name for lvl, name, _kwargs in self.events if lvl == level]


def build_transport(routes: Mapping[str, Route], calls: list[str] | None = None) -> httpx.MockTransport:
    """Serve canned bodies per URL; an exception value is raised for that URL."""

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if calls is not None:
            calls.append(url)
        route = routes.get(url)
        if route is None:
            return httpx.Response(404, text="not found")
        if isinstance(route, Exception):
            raise route
        status, body = route
        return httpx.Response(status, text=body)

    return httpx.MockTransport(handler)


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def compiler_config(tmp_path: Path) -> CompilerConfig:
    return CompilerConfig(
        sources_file=tmp_path / "sources",
        local_block_list_file=tmp_path / "local-block-list",
        output=tmp_path / "out" / "named.conf.blocks",
        request_timeout=5,
    )


@pytest.fixture
def fetcher_factory(
    compiler_config: CompilerConfig, recording_logger: RecordingLogger
) -> Callable[..., Callable[[], Fetcher]]:
    def _builder(
        routes: Mapping[str, Route], calls: list[str] | None = None
    ) -> Callable[[], Fetcher]:
        return lambda: Fetcher(
            compiler_config,
            logger=recording_logger,
            transport=build_transport(routes, calls),
        )

    return _builder


@pytest.fixture
def write_lines() -> Callable[[Path, Iterable[str]], Path]:
    def _write(path: Path, lines: Iterable[str]) -> Path:
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def temp_config_repository(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterable[ConfigRepository]:
    monkeypatch.setenv("DOMAIN_BLOCKLIST_HOME", str(tmp_path))
    locator = ConfigLocator(project_root=tmp_path)
    repository = ConfigRepository(locator)
    yield repository
