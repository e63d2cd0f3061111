"""Configuration and input-list loading helpers."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from ..errors import ConfigError, InputListReadError
from .models import CompilerConfig

CONFIG_EXTENSIONS = (".yaml", ".yml", ".json")
CONFIG_FILENAME = "blocklist.yaml"
HOME_ENV_VAR = "DOMAIN_BLOCKLIST_HOME"
INSTALL_DIR_NAMES = ("site-packages", "dist-packages")


def _read_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


def load_entries(path: Path, logger: structlog.BoundLogger | None = None) -> list[str]:
    """Read a line-oriented list, skipping blank lines and keeping the rest verbatim."""

    log = logger or structlog.get_logger("domain_blocklist.loader")
    try:
        # utf-8-sig drops a leading BOM; universal newlines split on \r, \n and \r\n only
        with path.open("r", encoding="utf-8-sig", newline=None) as handle:
            lines = [line.rstrip("\n") for line in handle]
    except (OSError, UnicodeDecodeError) as exc:
        log.error("input_list_load_failed", file=str(path), error=str(exc))
        raise InputListReadError(str(path), str(exc)) from exc
    entries = [line for line in lines if line.strip()]
    log.debug("input_list_loaded", file=str(path), count=len(entries))
    return entries


def _default_root() -> Path:
    """Repository root for a source checkout, the working directory once installed."""

    package_root = Path(__file__).resolve().parents[2]
    if package_root.name in INSTALL_DIR_NAMES:
        return Path.cwd()
    return package_root


@dataclass(slots=True)
class ConfigLocator:
    """Resolve the project home and the paths derived from it."""

    project_root: Path | None = None
    logs_dir: Path | None = None

    def __post_init__(self) -> None:
        env_root = os.environ.get(HOME_ENV_VAR)
        if env_root:
            root = Path(env_root).expanduser().resolve()
        else:
            root = (self.project_root or _default_root()).resolve()
        self.project_root = root
        self.logs_dir = (root / "logs").resolve()

    def config_path(self) -> Path:
        return self.project_root / CONFIG_FILENAME


class ConfigRepository:
    """Load and validate compiler settings."""

    def __init__(self, locator: ConfigLocator | None = None) -> None:
        self.locator = locator or ConfigLocator()

    def load_config(self, path: Path | None = None) -> CompilerConfig:
        """Load settings from ``path`` or the default file in the project home.

        An explicitly requested file must exist; the default file is optional
        and its absence yields the built-in defaults.
        """

        explicit = path is not None
        target = path if explicit else self.locator.config_path()
        if not target.exists():
            if explicit:
                raise ConfigError(f"Configuration file not found: {target}")
            return CompilerConfig()
        if target.suffix not in CONFIG_EXTENSIONS:
            raise ConfigError(f"Unsupported configuration format: {target}")
        try:
            payload = _read_file(target)
            return CompilerConfig.model_validate(payload)
        except (OSError, ValueError, yaml.YAMLError, ValidationError) as exc:
            raise ConfigError(f"Invalid configuration file {target}: {exc}") from exc

    def home(self) -> Path:
        return self.locator.project_root


__all__ = [
    "CONFIG_EXTENSIONS",
    "CONFIG_FILENAME",
    "ConfigLocator",
    "ConfigRepository",
    "HOME_ENV_VAR",
    "load_entries",
]
