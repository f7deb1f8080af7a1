"""Configuration file loading utilities.

This module locates the project configuration, reads it and the files it
includes, and merges everything into a single dictionary.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .aioops import aiexists, aiopen
from .constants import CONFIG_ENV_VAR, CONFIG_FILENAME
from .models import TaskCompError
from .utils import merge

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader", "find_config_file"]


def _expand(path: str) -> Path:
    return Path(os.path.expandvars(path)).expanduser()


async def find_config_file(cwd: Path | None = None) -> Path | None:
    """Return the project configuration file, if any.

    `TASKCOMP_CONFIG` takes precedence, otherwise the configuration file is
    searched in `cwd` (default: current directory) and its parents.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return _expand(override)

    start = (cwd or Path.cwd()).resolve()
    for folder in (start, *start.parents):
        candidate = folder / CONFIG_FILENAME
        if await aiexists(candidate):
            return candidate
    return None


class ConfigLoader:
    """Handles loading and merging configuration files.

    Supports:
    - A single TOML project file
    - Include directives (`include = ["other.toml"]`) for modular configuration,
      relative paths being resolved from the including file
    """

    def __init__(self, log: logging.Logger) -> None:
        self.log = log
        self._config: dict[str, Any] = {}
        self._seen: set[Path] = set()

    async def load(self, config_file: Path) -> dict[str, Any]:
        """Load `config_file` and its includes.

        Raises:
            TaskCompError: if a file is missing, unreadable or has syntax errors
        """
        merge(self._config, await self._open_config(config_file))
        return self._config

    async def _open_config(self, fname: Path) -> dict[str, Any]:
        fname = fname.resolve()
        if fname in self._seen:
            self.log.warning("Skipping recursive include of %s", fname)
            return {}
        self._seen.add(fname)

        config = await self._load_config_file(fname)

        includes = config.pop("include", [])
        if isinstance(includes, str):
            includes = [includes]
        if not isinstance(includes, list) or not all(isinstance(item, str) for item in includes):
            self.log.warning("include must be a path or a list of paths in %s, got: %r", fname, includes)
            raise TaskCompError(f"Invalid include in {fname}")
        for extra_config in includes:
            extra_path = _expand(extra_config)
            if not extra_path.is_absolute():
                extra_path = fname.parent / extra_path
            merge(config, await self._open_config(extra_path))

        return config

    async def _load_config_file(self, fname: Path) -> dict[str, Any]:
        if not await aiexists(fname):
            self.log.info("Config file not found: %s", fname)
            raise TaskCompError(f"Config file not found: {fname}")

        self.log.debug("Loading %s", fname)
        try:
            async with aiopen(fname, encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            self.log.warning("Can't read %s: %s", fname, e)
            raise TaskCompError(str(e)) from e
        except UnicodeDecodeError as e:
            self.log.warning("Problem decoding %s: %s", fname, e)
            raise TaskCompError(f"Invalid UTF-8 in {fname}: {e}") from e

        try:
            return tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            self.log.warning("Problem reading %s: %s", fname, e)
            raise TaskCompError(f"Invalid TOML in {fname}: {e}") from e
