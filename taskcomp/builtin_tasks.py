"""Tasks provided by the tool itself, available in every project."""

from __future__ import annotations

from .models import ParamDefinition, TaskDefinition
from .params import ParamRegistry, make_param_name

__all__ = ["BUILTIN_TASKS", "get_builtin_tasks"]

# task name -> (description, [(param name, is_flag, description), ...])
BUILTIN_TASKS: dict[str, tuple[str, list[tuple[str, bool, str]]]] = {
    "check": ("Check whatever you need", []),
    "clean": (
        "Clears the cache and deletes all artifacts",
        [("global", True, "Clear the global cache")],
    ),
    "compile": (
        "Compiles the entire project, building all artifacts",
        [
            ("force", True, "Force compilation ignoring cache"),
            ("quiet", True, "Makes the compilation process less verbose"),
        ],
    ),
    "console": (
        "Opens an interactive console",
        [("noCompile", True, "Don't compile before running this task")],
    ),
    "flatten": ("Flattens and prints sources and their dependencies", []),
    "help": ("Prints this message", []),
    "node": (
        "Starts a JSON-RPC server on top of the local network",
        [
            ("hostname", False, "The host to which to bind to for new connections"),
            ("port", False, "The port on which to listen for new connections"),
            ("fork", False, "The URL of the JSON-RPC server to fork from"),
            ("forkBlockNumber", False, "The block number to fork from"),
        ],
    ),
    "run": (
        "Runs a user-defined script after compiling the project",
        [("noCompile", True, "Don't compile before running this task")],
    ),
    "test": (
        "Runs the test suite",
        [("noCompile", True, "Don't compile before running this task")],
    ),
}


def get_builtin_tasks() -> dict[str, TaskDefinition]:
    """Return fresh definitions for the built-in tasks."""
    tasks: dict[str, TaskDefinition] = {}
    for name, (description, params) in BUILTIN_TASKS.items():
        registry = ParamRegistry.from_definitions(
            ParamDefinition(make_param_name(param), is_flag=is_flag, description=param_desc) for param, is_flag, param_desc in params
        )
        tasks[name] = TaskDefinition(name=name, param_definitions=registry, description=description)
    return tasks
