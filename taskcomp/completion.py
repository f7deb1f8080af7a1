"""Completion suggestions for a partially typed command line.

Example, with the cursor at the end of the line::

    tc --verbose compile --quiet

suggests the global parameters but `--verbose`, plus `--force`, the only
`compile` flag not already used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import LONG_FLAG_PREFIX, NETWORK_FLAG
from .environment import EnvironmentUnavailable, load_environment
from .logging_setup import get_logger
from .params import GLOBAL_PARAM_DEFINITIONS, is_global_flag, is_global_param, param_name_to_cla

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .environment import Environment, LoadResult

__all__ = ["complete", "find_task", "previous_token", "split_words"]


def split_words(text: str) -> list[str]:
    """Split `text` on runs of whitespace, ignoring empty words."""
    return text.split()


def find_task(words: list[str]) -> tuple[str | None, set[str]]:
    """Locate the task name and the global parameters used before it.

    The program name (first word) is skipped. Global value parameters consume
    the following word, unknown flags are assumed to belong to the task.

    Returns:
        Tuple of (task name or None, used global spellings)
    """
    used: set[str] = set()
    index = 1
    while index < len(words):
        word = words[index]
        if is_global_flag(word):
            used.add(word)
            index += 1
        elif is_global_param(word):
            used.add(word)
            index += 2
        elif word.startswith(LONG_FLAG_PREFIX):
            index += 1
        else:
            return word, used
    return None, used


def previous_token(line: str, cursor_offset: int) -> str | None:
    """Return the last word before `cursor_offset`, if any."""
    cursor_offset = max(0, min(cursor_offset, len(line)))
    words = split_words(line[:cursor_offset])
    return words[-1] if words else None


def _suggest(environment: Environment, line: str, cursor_offset: int) -> set[str]:
    words = split_words(line)
    task_name, used = find_task(words)

    prev = previous_token(line, cursor_offset)
    if prev == NETWORK_FLAG:
        return set(environment.network_names())

    if prev is not None and prev.startswith(LONG_FLAG_PREFIX):
        global_param = GLOBAL_PARAM_DEFINITIONS.lookup_spelling(prev)
        if global_param is not None and not global_param.is_flag:
            return set()

    # any spelling present on the line counts as used, even past the cursor
    used.update(words)
    global_flags = {spelling for spelling in GLOBAL_PARAM_DEFINITIONS.cli_spellings() if spelling not in used}

    task = environment.get_task(task_name) if task_name is not None else None
    if task is None:
        task_names = {candidate.name for candidate in environment.tasks.values() if not candidate.is_namespaced}
        return task_names | global_flags

    task_flags = {param_name_to_cla(name) for name in task.param_definitions}
    return (task_flags - used) | global_flags


async def complete(
    line: str,
    cursor_offset: int,
    loader: Callable[[], Awaitable[LoadResult]] = load_environment,
) -> set[str]:
    """Return the words a shell should offer at `cursor_offset` in `line`.

    Never raises: a missing or broken project gives no suggestions.

    Args:
        line: The command line typed so far, starting with the program name
        cursor_offset: Position of the cursor in `line`
        loader: Coroutine function providing the project environment
    """
    log = get_logger("completion")
    try:
        result = await loader()
        if isinstance(result, EnvironmentUnavailable):
            log.debug("No suggestions, environment unavailable: %s", result.reason)
            return set()
        suggestions = _suggest(result.environment, line, cursor_offset)
    except Exception:  # pylint: disable=W0718
        log.debug("Failed to compute suggestions for %r", line, exc_info=True)
        return set()
    log.debug("%d suggestions for %r at %d", len(suggestions), line, cursor_offset)
    return suggestions
