from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from domain_blocklist import compiler as compiler_module
from domain_blocklist.app import AppState, app
from domain_blocklist.config import ConfigLocator, ConfigRepository

FEED = "https://feeds.example.org/hosts.txt"
FEED_DOWN = "https://feeds.example.org/down.txt"
ROUTES = {
    FEED: (200, "127.0.0.1 ads.example.com # ad server\nwww.tracker.example.net\n"),
    FEED_DOWN: (503, "unavailable"),
}


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, recording_logger, fetcher_factory, write_lines):
    monkeypatch.setenv("DOMAIN_BLOCKLIST_HOME", str(tmp_path))
    state = AppState(
        repository=ConfigRepository(ConfigLocator(project_root=tmp_path)),
        logger=recording_logger,
    )
    monkeypatch.setattr("domain_blocklist.app.build_state", lambda verbose: state)

    calls: list[str] = []
    real_compile = compiler_module.compile_from_config
    monkeypatch.setattr(
        "domain_blocklist.app.compile_from_config",
        lambda config, home, logger: real_compile(
            config, home, logger, fetcher_factory=fetcher_factory(ROUTES, calls)
        ),
    )
    sources = write_lines(tmp_path / "sources", [FEED, FEED_DOWN])
    local = write_lines(tmp_path / "local-block-list", ["local.example.com"])
    return {"home": tmp_path, "sources": sources, "local": local, "calls": calls, "state": state}


def _list_args(env) -> list[str]:
    return ["--sources", str(env["sources"]), "--local-list", str(env["local"])]


def test_cli_compile_hosts(cli_env) -> None:
    output = cli_env["home"] / "hosts.txt"
    runner = CliRunner()

    result = runner.invoke(
        app, ["compile", "--type", "hosts", "--output", str(output), *_list_args(cli_env)]
    )

    assert result.exit_code == 0, result.stdout
    assert output.read_text(encoding="utf-8").splitlines() == [
        "127.0.0.1 ads.example.com",
        "127.0.0.1 local.example.com",
        "127.0.0.1 tracker.example.net",
    ]
    assert "Block list compiled" in result.stdout
    assert "Failed sources" in result.stdout
    assert cli_env["calls"] == [FEED, FEED_DOWN]


def test_cli_compile_defaults_to_bind9_in_home(cli_env) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["compile", *_list_args(cli_env)])

    assert result.exit_code == 0, result.stdout
    lines = (cli_env["home"] / "named.conf.blocks").read_text(encoding="utf-8").splitlines()
    assert lines[0] == 'zone "ads.example.com" { type primary; file "/etc/bind/zones/db.blocks"; };'
    assert len(lines) == 3


def test_cli_compile_custom_format(cli_env) -> None:
    output = cli_env["home"] / "custom.txt"
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["compile", "-t", "custom", "-f", "block {0} now", "-o", str(output), *_list_args(cli_env)],
    )

    assert result.exit_code == 0, result.stdout
    assert output.read_text(encoding="utf-8").splitlines()[0] == "block ads.example.com now"


def test_cli_invalid_type_exits_without_output(cli_env) -> None:
    output = cli_env["home"] / "never.txt"
    runner = CliRunner()

    result = runner.invoke(
        app, ["compile", "--type", "bogus", "--output", str(output), *_list_args(cli_env)]
    )

    assert result.exit_code == 1
    assert "Unknown format type" in result.stdout
    assert not output.exists()
    assert cli_env["calls"] == []
    assert cli_env["state"].logger.named("compile_aborted")[0]["error_type"] == "FormatModeError"


def test_cli_missing_sources_file_exits_non_zero(cli_env) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app, ["compile", "--sources", str(cli_env["home"] / "absent"), "--local-list", str(cli_env["local"])]
    )

    assert result.exit_code == 1
    assert "Failed to load file" in result.stdout
    assert not (cli_env["home"] / "named.conf.blocks").exists()


def test_cli_reads_config_file_and_options_override_it(cli_env) -> None:
    home = cli_env["home"]
    (home / "blocklist.yaml").write_text(
        yaml.safe_dump(
            {
                "format_type": "custom",
                "format": "||{0}^",
                "output": str(home / "from-config.txt"),
                "sources_file": str(cli_env["sources"]),
                "local_block_list_file": str(cli_env["local"]),
            }
        ),
        encoding="utf-8",
    )
    runner = CliRunner()

    result = runner.invoke(app, ["compile"])
    assert result.exit_code == 0, result.stdout
    assert (home / "from-config.txt").read_text(encoding="utf-8").splitlines()[0] == "||ads.example.com^"

    result = runner.invoke(app, ["compile", "--type", "hosts"])
    assert result.exit_code == 0, result.stdout
    assert (home / "from-config.txt").read_text(encoding="utf-8").splitlines()[0] == "127.0.0.1 ads.example.com"


def test_cli_invalid_config_file_exits_non_zero(cli_env) -> None:
    (cli_env["home"] / "blocklist.yaml").write_text("request_timeout: -5\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["compile", *_list_args(cli_env)])

    assert result.exit_code == 1
    assert "Invalid configuration file" in result.stdout


def test_cli_formats_lists_modes(cli_env) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["formats"])

    assert result.exit_code == 0, result.stdout
    for mode in ("bind9", "hosts", "custom"):
        assert mode in result.stdout
    assert "127.0.0.1 {0}" in result.stdout
