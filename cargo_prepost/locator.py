"""Find the real tool on PATH, skipping the wrapper itself."""

import logging
from pathlib import Path

from cargo_prepost.context import InvocationContext
from cargo_prepost.errors import ToolNotFoundError

log = logging.getLogger("cargo-prepost")


def _canonical(path: Path) -> Path:
    return path.expanduser().resolve()


def locate_tool(ctx: InvocationContext, tool_name: str = "cargo") -> Path:
    """
    Return the first `<dir>/<tool_name>` on PATH that is a regular file and
    does not resolve to the running wrapper.

    Both sides are canonicalized, so a symlink named after the tool that
    points back at the wrapper is skipped no matter how often its directory
    appears on PATH.
    """
    own_path = _canonical(ctx.self_exe)
    for directory in ctx.search_dirs():
        candidate = directory / tool_name
        if not candidate.is_file():
            continue
        if _canonical(candidate) == own_path:
            log.debug(f"Skipping {candidate} (wrapper itself)")
            continue
        log.info(f"Find default {tool_name}: {candidate}")
        return candidate.absolute()
    raise ToolNotFoundError(tool_name)
