"""Ask the build tool where its artifacts go."""

import json
import logging
import subprocess
from pathlib import Path

log = logging.getLogger("cargo-prepost")

DEFAULT_TARGET_DIR = "target"


def _fallback(cwd: Path) -> Path:
    return (cwd / DEFAULT_TARGET_DIR).resolve()


def target_directory(tool: Path, cwd: Path) -> Path:
    """Return the project's target directory, or `<cwd>/target` if metadata is unavailable."""
    cmd = [str(tool), "metadata", "--format-version", "1", "--no-deps"]
    try:
        proc = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)
    except OSError as e:
        log.warning(f"Failed to get {tool.name} metadata: {e}; use default values")
        return _fallback(cwd)

    if proc.returncode != 0:
        log.warning(
            f"Failed to get {tool.name} metadata: exit code {proc.returncode}; use default values"
        )
        return _fallback(cwd)

    try:
        return Path(json.loads(proc.stdout)["target_directory"])
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        log.warning(f"Failed to parse {tool.name} metadata: {e!r}; use default values")
        return _fallback(cwd)
