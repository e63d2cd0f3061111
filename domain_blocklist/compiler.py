"""Pipeline coordinator: fetch → normalize → merge → format → write."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

import structlog

from .config import CompilerConfig, load_entries
from .engine import Fetcher, FormatMode, LineFormatter, merge
from .engine.exporter import FileExporter
from .engine.normalizer import normalize
from .errors import WriteError


@dataclass(slots=True)
class CompileSummary:
    """What a finished run produced."""

    output: Path
    format_type: FormatMode
    sources_total: int
    downloaded_domains: int
    local_entries: int
    lines_written: int
    failed_sources: list[str] = field(default_factory=list)

    @property
    def sources_succeeded(self) -> int:
        return self.sources_total - len(self.failed_sources)


class BlockListCompiler:
    """Build one block list file from remote sources and a local list."""

    def __init__(
        self,
        sources: Sequence[str],
        local_block_list: Sequence[str],
        config: CompilerConfig | None = None,
        logger: structlog.BoundLogger | None = None,
        fetcher_factory: Callable[[], Fetcher] | None = None,
    ) -> None:
        self.sources = list(sources)
        self.local_block_list = list(local_block_list)
        self.config = config or CompilerConfig()
        self.logger = logger or structlog.get_logger("domain_blocklist.compiler")
        self._fetcher_factory = fetcher_factory or (
            lambda: Fetcher(self.config, logger=self.logger)
        )

    # ------------------------------------------------------------------
    async def compile(
        self,
        output: Path,
        format_type: FormatMode | str = FormatMode.BIND9,
        template: str | None = None,
    ) -> CompileSummary:
        # Resolve the template first so a bad selector never touches the network or disk
        formatter = LineFormatter(format_type, template, logger=self.logger)
        self.logger.info(
            "compiling_block_list", output=str(output), format_type=formatter.mode.value
        )

        domain_sets, failed = await self.download_domains()
        domains = merge(domain_sets, self.local_block_list)
        self.logger.info("local_entries_added", count=len(self.local_block_list))

        lines = formatter.render_all(domains)
        written = self._write(output, lines, formatter.template)
        self.logger.info("file_generated", path=str(output), lines=written)

        return CompileSummary(
            output=output,
            format_type=formatter.mode,
            sources_total=len(self.sources),
            downloaded_domains=len(set().union(*domain_sets)),
            local_entries=len(self.local_block_list),
            lines_written=written,
            failed_sources=failed,
        )

    async def download_domains(self) -> tuple[list[set[str]], list[str]]:
        """Fetch and normalize every source in order.

        Returns one domain set per source plus the sources that failed; a
        failed source contributes an empty set.
        """

        domain_sets: list[set[str]] = []
        failed: list[str] = []
        async with self._fetcher_factory() as fetcher:
            for source in self.sources:
                result = await fetcher.fetch(source)
                if not result.ok:
                    failed.append(source)
                    domain_sets.append(set())
                    continue
                domains = normalize(result.content or "")
                self.logger.info("download_completed", source=source, domains=len(domains))
                domain_sets.append(domains)

        self.logger.info(
            "all_downloads_completed",
            unique_domains=len(set().union(*domain_sets)),
            failed_sources=len(failed),
        )
        return domain_sets, failed

    def _write(self, output: Path, lines: list[str], template: str) -> int:
        self.logger.info("writing_domains", path=str(output), count=len(lines))
        self.logger.debug("line_format", format=template)
        try:
            with FileExporter(output) as exporter:
                written = exporter.export_many(lines)
                exporter.flush()
        except WriteError as exc:
            self.logger.error("write_failed", path=str(output), error=str(exc))
            raise
        return written


def compile_from_config(
    config: CompilerConfig,
    home: Path,
    logger: structlog.BoundLogger | None = None,
    fetcher_factory: Callable[[], Fetcher] | None = None,
) -> CompileSummary:
    """Load both input lists and run the pipeline to completion."""

    log = logger or structlog.get_logger("domain_blocklist.compiler")
    sources = load_entries(config.sources_file, log)
    local_block_list = load_entries(config.local_block_list_file, log)
    compiler = BlockListCompiler(
        sources,
        local_block_list,
        config=config,
        logger=log,
        fetcher_factory=fetcher_factory,
    )
    return asyncio.run(
        compiler.compile(config.resolved_output(home), config.format_type, config.format)
    )


__all__ = ["BlockListCompiler", "CompileSummary", "compile_from_config"]
