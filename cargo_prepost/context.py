"""Per-invocation inputs, captured once and passed explicitly."""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from cargo_prepost.errors import EnvironmentSetupError


@dataclass(frozen=True)
class InvocationContext:
    args: tuple[str, ...]
    path_env: str | None
    cwd: Path
    self_exe: Path

    @classmethod
    def from_environment(cls, argv: list[str] | None = None) -> "InvocationContext":
        argv = sys.argv if argv is None else argv
        try:
            cwd = Path.cwd()
        except OSError as e:
            raise EnvironmentSetupError(f"Failed to get current working directory: {e}") from e
        return cls(
            args=tuple(argv[1:]),
            path_env=os.environ.get("PATH"),
            cwd=cwd,
            self_exe=Path(argv[0]) if argv else Path(sys.executable),
        )

    @property
    def subcommand(self) -> str | None:
        """First argument that is not a flag, used only as the hook naming key."""
        return next((arg for arg in self.args if not arg.startswith("-")), None)

    def search_dirs(self) -> list[Path]:
        if self.path_env is None:
            raise EnvironmentSetupError("Failed to get PATH")
        return [Path(entry) for entry in self.path_env.split(os.pathsep) if entry]
