"""Configuration wrapper providing typed access and section filtering."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterator

__all__ = ["BOOL_FALSE_STRINGS", "Configuration", "coerce_to_bool"]

ConfigValueType = float | bool | str | list | dict

BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})


def coerce_to_bool(value: ConfigValueType | None, default: bool = False) -> bool:
    """Coerce a value to boolean, handling loose typing.

    Behavior:
        - None → default
        - Empty string → False
        - Explicit falsy strings ("false", "no", "off", "0", "disabled") → False
        - Any other non-empty string → True
        - Non-string values → bool(value)
    """
    if value is None:
        return default
    if isinstance(value, str):
        if not value.strip():
            return False
        return value.lower().strip() not in BOOL_FALSE_STRINGS
    return bool(value)


class Configuration(dict):
    """A configuration section with typed accessors."""

    def __init__(self, *args: Any, logger: logging.Logger, **kwargs: Any) -> None:  # noqa: ANN401
        super().__init__(*args, **kwargs)
        self.log = logger

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Get a boolean value, see `coerce_to_bool`."""
        return coerce_to_bool(self.get(name), default)

    def get_str(self, name: str, default: str = "") -> str:
        """Get a string value."""
        value = self.get(name)
        if value is None:
            return default
        return str(value)

    def get_section(self, name: str) -> Configuration:
        """Return the `name` sub-table, empty if missing or not a table."""
        value = self.get(name)
        if value is None:
            return Configuration(logger=self.log)
        if not isinstance(value, dict):
            self.log.warning("Expected a table for %s, got: %r", name, value)
            return Configuration(logger=self.log)
        return Configuration(value, logger=self.log)

    def iter_subsections(self) -> Iterator[tuple[str, Configuration]]:
        """Yield only keys that have dictionary values (eg: networks, tasks)."""
        for k, v in self.items():
            if isinstance(v, dict):
                yield k, Configuration(v, logger=self.log)
