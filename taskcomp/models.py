"""Common types shared by the registries, the loader and the resolver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, NewType

from .constants import TASK_NAMESPACE_SEPARATOR

if TYPE_CHECKING:
    from .params import ParamRegistry

__all__ = ["ExitCode", "ParamDefinition", "ParamName", "TaskCompError", "TaskDefinition"]

ParamName = NewType("ParamName", str)


class TaskCompError(Exception):
    """Used for errors which already triggered logging."""


@dataclass(frozen=True)
class ParamDefinition:
    """A parameter accepted on the command line."""

    name: ParamName
    is_flag: bool  # True for switches, False when a value follows
    description: str = ""


@dataclass(frozen=True)
class TaskDefinition:
    """A named unit of work and the parameters it accepts."""

    name: str
    param_definitions: ParamRegistry
    description: str = ""

    @property
    def is_namespaced(self) -> bool:
        """Tell if the task lives under a namespace (eg: "deploy:local")."""
        return TASK_NAMESPACE_SEPARATOR in self.name


# Exit codes for the completion command
class ExitCode(IntEnum):
    """Standard exit codes for taskcomp-complete."""

    SUCCESS = 0
    USAGE_ERROR = 1  # No line provided
