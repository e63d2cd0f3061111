"""Typer CLI entrypoint for the domain block list compiler."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import structlog
import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .compiler import CompileSummary, compile_from_config
from .config import CompilerConfig, ConfigRepository
from .engine.formatter import FIXED_TEMPLATES, FormatMode
from .errors import BlockListError
from .logging_conf import configure_logging

app = typer.Typer(
    help="Domain block list generator for Bind9, hosts file, Pi-hole, etc.",
    no_args_is_help=True,
    rich_markup_mode=None,
)

console = Console()


@dataclass
class AppState:
    repository: ConfigRepository
    logger: structlog.BoundLogger


def build_state(verbose: bool) -> AppState:
    repository = ConfigRepository()
    logger = configure_logging(verbose=verbose)
    return AppState(repository=repository, logger=logger)


def _get_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if state is None:
        state = build_state(verbose=False)
        ctx.obj = state
    return state


def _apply_overrides(config: CompilerConfig, **overrides: object) -> CompilerConfig:
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return config
    return config.model_copy(update=updates)


def _render_summary(summary: CompileSummary) -> Table:
    table = Table(title="Block list compiled", box=box.SIMPLE_HEAD, show_header=False)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="green", overflow="fold")
    table.add_row("Output", str(summary.output))
    table.add_row("Format", summary.format_type.value)
    table.add_row("Sources", f"{summary.sources_succeeded}/{summary.sources_total}")
    if summary.failed_sources:
        table.add_row("Failed sources", "\n".join(summary.failed_sources))
    table.add_row("Downloaded domains", str(summary.downloaded_domains))
    table.add_row("Local entries", str(summary.local_entries))
    table.add_row("Lines written", str(summary.lines_written))
    return table


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    ctx.obj = build_state(verbose)


@app.command("compile", help="Download all sources and write the formatted block list.")
def compile_command(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="The output file, containing all formatted domains.",
    ),
    format_type: Optional[str] = typer.Option(
        None,
        "--type",
        "-t",
        help="Type of the format used for each line: bind9 (default), hosts or custom.",
    ),
    line_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Custom line format for --type custom; must include the {0} placeholder.",
    ),
    sources: Optional[Path] = typer.Option(
        None, "--sources", help="File listing one source URL per line."
    ),
    local_list: Optional[Path] = typer.Option(
        None, "--local-list", help="File listing domains to always include."
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="YAML/JSON settings file (default: blocklist.yaml in home)."
    ),
) -> None:
    state = _get_state(ctx)
    try:
        config = state.repository.load_config(config_path)
        config = _apply_overrides(
            config,
            output=output,
            format_type=format_type,
            format=line_format,
            sources_file=sources,
            local_block_list_file=local_list,
        )
        summary = compile_from_config(config, state.repository.home(), state.logger)
    except BlockListError as exc:
        state.logger.error("compile_aborted", error=str(exc), error_type=type(exc).__name__)
        console.print(str(exc), style="red", markup=False)
        raise typer.Exit(code=1) from exc
    console.print(_render_summary(summary))


@app.command("formats", help="List the available line formats.")
def formats_command() -> None:
    table = Table(title="Line formats", box=box.SIMPLE_HEAD)
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Template", style="magenta", overflow="fold")
    for mode in FormatMode:
        template = FIXED_TEMPLATES.get(mode, "--format value, {0} is the domain")
        table.add_row(mode.value, template)
    console.print(table)


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
