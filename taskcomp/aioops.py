"""Async file system primitives used while loading a project."""

__all__ = ["aiexists", "aiopen"]

import aiofiles.os
from aiofiles import open as aiopen

aiexists = aiofiles.os.path.exists
