"""Runtime environment of a project: its tasks and its configuration.

`load_environment` never raises: the outcome is either `EnvironmentLoaded`
or `EnvironmentUnavailable`, the latter carrying a human readable reason.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .builtin_tasks import get_builtin_tasks
from .config import Configuration
from .config_loader import ConfigLoader, find_config_file
from .constants import DEFAULT_NETWORKS
from .logging_setup import get_logger
from .models import ParamDefinition, TaskCompError, TaskDefinition
from .params import GLOBAL_PARAM_DEFINITIONS, ParamRegistry, make_param_name
from .utils import merge

if TYPE_CHECKING:
    import logging
    from pathlib import Path

__all__ = [
    "Environment",
    "EnvironmentLoaded",
    "EnvironmentUnavailable",
    "LoadResult",
    "build_environment",
    "load_environment",
]


@dataclass
class Environment:
    """Loaded project state."""

    tasks: dict[str, TaskDefinition]
    config: Configuration
    root: Path | None = None

    def network_names(self) -> list[str]:
        """Return the name of every configured network."""
        return [name for name, _ in self.config.get_section("networks").iter_subsections()]

    def get_task(self, name: str) -> TaskDefinition | None:
        """Return the task called `name`, if any."""
        return self.tasks.get(name)


@dataclass
class EnvironmentLoaded:
    """Successful load."""

    environment: Environment


@dataclass
class EnvironmentUnavailable:
    """No usable project."""

    reason: str = ""


LoadResult = EnvironmentLoaded | EnvironmentUnavailable


def _parse_task(name: str, section: Configuration) -> TaskDefinition:
    """Build a task from its `[tasks.<name>]` table.

    Raises:
        TaskCompError: on invalid or clashing parameter names
    """
    definitions = []
    for param_name, param_section in section.get_section("params").iter_subsections():
        ident = make_param_name(param_name)
        if GLOBAL_PARAM_DEFINITIONS.lookup(ident) is not None:
            msg = f"Task {name!r} redefines the global parameter {ident!r}"
            raise TaskCompError(msg)
        definitions.append(
            ParamDefinition(
                ident,
                is_flag=param_section.get_bool("flag"),
                description=param_section.get_str("description"),
            )
        )
    return TaskDefinition(
        name=name,
        param_definitions=ParamRegistry.from_definitions(definitions),
        description=section.get_str("description"),
    )


def build_environment(raw_config: dict, log: logging.Logger, root: Path | None = None) -> Environment:
    """Create an Environment from a configuration dictionary.

    Default networks are merged with the configured ones, user tasks are
    added to (or replace) the built-in tasks.
    """
    user_networks = raw_config.get("networks", {})
    if not isinstance(user_networks, dict):
        log.warning("networks must be a table, got: %r", user_networks)
        raise TaskCompError("Invalid networks configuration")
    networks = merge({name: dict(settings) for name, settings in DEFAULT_NETWORKS.items()}, user_networks)
    config = Configuration(raw_config, logger=log)
    config["networks"] = networks

    tasks = get_builtin_tasks()
    for task_name, section in config.get_section("tasks").iter_subsections():
        if task_name in tasks:
            log.debug("Overriding built-in task %s", task_name)
        tasks[task_name] = _parse_task(task_name, section)
    return Environment(tasks=tasks, config=config, root=root)


async def load_environment(cwd: Path | None = None) -> LoadResult:
    """Locate and load the project found from `cwd`."""
    log = get_logger("environment")
    try:
        config_file = await find_config_file(cwd)
        if config_file is None:
            log.debug("No project found")
            return EnvironmentUnavailable("no project found")
        loader = ConfigLoader(log)
        raw_config = await loader.load(config_file)
        environment = build_environment(raw_config, log, root=config_file.parent)
    except (TaskCompError, OSError) as e:
        log.debug("Environment unavailable: %s", e)
        return EnvironmentUnavailable(str(e))
    log.debug("Loaded %d tasks from %s", len(environment.tasks), config_file)
    return EnvironmentLoaded(environment)
