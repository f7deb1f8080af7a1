"""Parameter registries and the identifier <-> command line spelling transforms.

Identifiers are camelCase (``maxMemory``) and spelled on the command line in
hyphenated lower case with a double dash prefix (``--max-memory``).
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping

from .constants import LONG_FLAG_PREFIX
from .models import ParamDefinition, ParamName, TaskCompError

__all__ = [
    "GLOBAL_PARAM_DEFINITIONS",
    "ParamRegistry",
    "cla_to_param_name",
    "is_global_flag",
    "is_global_param",
    "is_valid_param_name",
    "make_param_name",
    "param_name_to_cla",
]

_PARAM_NAME_PATTERN = re.compile(r"^[a-z]+[a-zA-Z0-9]*$")
_UPPERCASE_BOUNDARY = re.compile(r"(?=[A-Z])")


def is_valid_param_name(text: str) -> bool:
    """Tell if `text` is a legal parameter identifier."""
    return _PARAM_NAME_PATTERN.match(text) is not None


def make_param_name(text: str) -> ParamName:
    """Validate `text` as a parameter identifier.

    Raises:
        TaskCompError: if `text` isn't camelCase starting with a lowercase letter
    """
    if not is_valid_param_name(text):
        msg = f"Invalid parameter name: {text!r}"
        raise TaskCompError(msg)
    return ParamName(text)


def param_name_to_cla(name: str) -> str:
    """Return the command line spelling of a parameter.

    Eg: "showStackTraces" -> "--show-stack-traces"
    """
    parts = [part.lower() for part in _UPPERCASE_BOUNDARY.split(name) if part]
    return LONG_FLAG_PREFIX + "-".join(parts)


def cla_to_param_name(spelling: str) -> str:
    """Return the identifier for a command line spelling.

    Eg: "--show-stack-traces" -> "showStackTraces"
    """
    head, *tail = spelling.removeprefix(LONG_FLAG_PREFIX).split("-")
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


class ParamRegistry(Mapping[ParamName, ParamDefinition]):
    """Read-only mapping of identifiers to parameter definitions."""

    def __init__(self, definitions: Mapping[ParamName, ParamDefinition] | None = None) -> None:
        self._definitions: dict[ParamName, ParamDefinition] = dict(definitions or {})

    @classmethod
    def from_definitions(cls, definitions: Iterable[ParamDefinition]) -> ParamRegistry:
        """Build a registry, refusing duplicated names."""
        collected: dict[ParamName, ParamDefinition] = {}
        for definition in definitions:
            if definition.name in collected:
                msg = f"Duplicated parameter: {definition.name}"
                raise TaskCompError(msg)
            collected[definition.name] = definition
        return cls(collected)

    def __getitem__(self, name: ParamName) -> ParamDefinition:
        return self._definitions[name]

    def __iter__(self) -> Iterator[ParamName]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"ParamRegistry({sorted(self._definitions)!r})"

    def lookup(self, name: str) -> ParamDefinition | None:
        """Return the definition for `name`, if any."""
        if not is_valid_param_name(name):
            return None
        return self._definitions.get(ParamName(name))

    def lookup_spelling(self, spelling: str) -> ParamDefinition | None:
        """Return the definition spelled exactly `spelling`, if any.

        Eg: "--max-memory" matches, "--maxMemory" or "--max--memory" don't.
        """
        if not spelling.startswith(LONG_FLAG_PREFIX):
            return None
        definition = self.lookup(cla_to_param_name(spelling))
        if definition is None or param_name_to_cla(definition.name) != spelling:
            return None
        return definition

    def cli_spellings(self) -> list[str]:
        """Return the command line spelling of every parameter."""
        return [param_name_to_cla(definition.name) for definition in self._definitions.values()]


def _flag(name: str, description: str) -> ParamDefinition:
    return ParamDefinition(make_param_name(name), is_flag=True, description=description)


def _value(name: str, description: str) -> ParamDefinition:
    return ParamDefinition(make_param_name(name), is_flag=False, description=description)


GLOBAL_PARAM_DEFINITIONS = ParamRegistry.from_definitions(
    [
        _value("network", "The network to connect to."),
        _flag("showStackTraces", "Show stack traces (always enabled on CI servers)."),
        _flag("version", "Shows version and exit."),
        _flag("help", "Shows this message, or a task's help if its name is provided."),
        _flag("emoji", "Use emoji in messages."),
        _value("config", "A configuration file."),
        _flag("verbose", "Enables verbose logging."),
        _value("maxMemory", "The maximum amount of memory that the tool can use."),
        _value("tsconfig", "A TypeScript config file."),
    ]
)


def is_global_flag(word: str) -> bool:
    """Tell if `word` is a global switch (takes no value)."""
    definition = GLOBAL_PARAM_DEFINITIONS.lookup_spelling(word)
    return definition is not None and definition.is_flag


def is_global_param(word: str) -> bool:
    """Tell if `word` is a global parameter consuming the next word."""
    definition = GLOBAL_PARAM_DEFINITIONS.lookup_spelling(word)
    return definition is not None and not definition.is_flag
