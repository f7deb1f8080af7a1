"""taskcomp-complete - prints completion suggestions for the shell.

Shell integration scripts call it with the line being edited, either through
the `--line` / `--point` options or the COMP_LINE / COMP_POINT environment
variables set by bash.
"""

import asyncio
import os
import sys

from .completion import complete
from .logging_setup import get_logger, init_logger
from .models import ExitCode

__all__ = ["main"]

USAGE = "Usage: taskcomp-complete [--line LINE] [--point N] [--debug LOGFILE]"


def use_param(txt: str, args: list[str]) -> str | None:
    """Check if parameter `txt` is in `args`.

    if found, removes it from `args` & returns the argument value
    """
    if txt not in args:
        return None
    i = args.index(txt)
    if i + 1 >= len(args):
        del args[i]
        return ""
    v = args[i + 1]
    del args[i : i + 2]
    return v


def parse_point(point: str | None, line: str) -> int:
    """Return the cursor offset, defaulting to the end of `line`."""
    try:
        return int(point) if point else len(line)
    except ValueError:
        return len(line)


def main(argv: list[str] | None = None) -> int:
    """Run the command."""
    args = list(sys.argv[1:] if argv is None else argv)
    debug_file = use_param("--debug", args)
    line = use_param("--line", args)
    if line is None:
        line = os.environ.get("COMP_LINE")
    point = use_param("--point", args)
    if point is None:
        point = os.environ.get("COMP_POINT")

    # while completing, stdout & stderr are read by the shell: only log to a file
    init_logger(filename=debug_file or None, force_debug=bool(debug_file), screen=line is None)
    log = get_logger("command")

    if line is None:
        log.critical(USAGE)
        return ExitCode.USAGE_ERROR
    if args:
        log.debug("Ignoring extra arguments: %s", args)

    try:
        suggestions = asyncio.run(complete(line, parse_point(point, line)))
    except Exception:  # pylint: disable=W0718
        log.critical("Unhandled exception:", exc_info=True)
        suggestions = set()

    for suggestion in sorted(suggestions):
        print(suggestion)
    return ExitCode.SUCCESS


if __name__ == "__main__":
    sys.exit(main())
