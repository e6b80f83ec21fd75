"""Configuration file loading.

A configuration is TOML: a single file, or a directory whose `*.toml` files are
merged in name order. Paths listed in `include` (in the `[palette]` section) are
read next, relative to the file or directory naming them, and merged on top.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from . import constants
from .errors import ConfigError
from .utils import merge

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader"]


def _expand(path: str) -> Path:
    return Path(os.path.expandvars(path)).expanduser()


class ConfigLoader:
    """Reads the configuration files.

    Args:
        log: Receives the loading progress and the fatal problems
    """

    def __init__(self, log: logging.Logger) -> None:
        self.log = log
        self.config: dict[str, Any] = {}

    def load(self, config_filename: str = "") -> dict[str, Any]:
        """Read `config_filename`, or the default configuration file.

        Args:
            config_filename: File or directory to read. When empty, the default
                file is read if it exists, an empty configuration is used otherwise.

        Returns:
            The merged configuration

        Raises:
            ConfigError: if a named file is missing or is not valid TOML
        """
        path = _expand(config_filename) if config_filename else constants.CONFIG_FILE
        if not config_filename and not path.exists():
            self.log.info("No configuration file at %s, using defaults", path)
            return self.config
        merge(self.config, self.read(path), replace=True)
        return self.config

    def read(self, path: Path) -> dict[str, Any]:
        """Read a file or a directory, followed by the files it includes."""
        if path.is_dir():
            config: dict[str, Any] = {}
            for child in sorted(path.glob("*.toml")):
                merge(config, self.read_file(child))
            base = path
        else:
            config = self.read_file(path)
            base = path.parent

        for include in list(config.get(constants.CONFIG_SECTION, {}).get("include", [])):
            merge(config, self.read(base / _expand(include)))
        return config

    def read_file(self, path: Path) -> dict[str, Any]:
        """Parse one TOML file.

        Raises:
            ConfigError: if the file is missing or invalid
        """
        if not path.is_file():
            self.log.critical("Config file not found: %s", path)
            raise ConfigError(f"Config file not found: {path}")
        self.log.info("Loading %s", path)
        try:
            return tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            self.log.critical("Problem reading %s: %s", path, e)
            raise ConfigError(f"Problem reading {path}: {e}") from e
