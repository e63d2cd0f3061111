"""HTTP fetching of raw blocklist text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from ..config import CompilerConfig
from ..errors import FetchError


@dataclass(slots=True)
class FetchResult:
    """Outcome of a single download: content or a typed failure."""

    source: str
    content: str | None = None
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Fetcher:
    """Download source bodies one at a time, without retries."""

    def __init__(
        self,
        config: CompilerConfig | None = None,
        logger: structlog.BoundLogger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or CompilerConfig()
        self.logger = logger or structlog.get_logger("domain_blocklist.fetcher")
        client_kwargs: dict[str, Any] = {
            "follow_redirects": True,
            "timeout": self.config.request_timeout,
        }
        if self.config.user_agent:
            client_kwargs["headers"] = {"User-Agent": self.config.user_agent}
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> "Fetcher":
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch(self, source: str) -> FetchResult:
        self.logger.info("downloading", source=source)
        try:
            response = await self._client.get(source)
        except Exception as exc:  # a failed source is skipped, never fatal
            self.logger.error(
                "download_exception",
                source=source,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return FetchResult(source=source, error=FetchError(source, str(exc) or type(exc).__name__))

        if not response.is_success:
            self.logger.error(
                "download_failed", source=source, status_code=response.status_code
            )
            return FetchResult(
                source=source,
                error=FetchError(
                    source,
                    f"unexpected status {response.status_code}",
                    status_code=response.status_code,
                ),
            )
        return FetchResult(source=source, content=response.text)


__all__ = ["FetchResult", "Fetcher"]
