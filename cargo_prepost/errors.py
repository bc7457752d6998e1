"""Exceptions raised by the wrapper. Every one of them is fatal."""

from pathlib import Path


class PrepostError(Exception):
    """Base exception for all wrapper errors."""

    pass


class ConfigError(PrepostError):
    """Raised when the configuration file cannot be used."""

    pass


class EnvironmentSetupError(PrepostError):
    """Raised when PATH, the home directory or the working directory is unavailable."""

    pass


class ToolNotFoundError(PrepostError):
    """Raised when no real tool executable is found on the search path."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Failed to find default {tool_name}")


class SpawnError(PrepostError):
    """Raised when an essential child process cannot be started."""

    def __init__(self, program: str | Path, error: OSError | None = None) -> None:
        self.program = str(program)
        self.error = error
        message = f"Failed to spawn {self.program}"
        if error is not None:
            message += f": {error}"
        super().__init__(message)


class HookSetupError(PrepostError):
    """Raised when a source hook cannot be prepared (directories, copies, compilation)."""

    pass
