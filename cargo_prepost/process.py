"""
Child process execution and exit status mapping.

Every spawn-and-wait in the wrapper goes through run_process(), and every
decision about the wrapper's own exit status goes through exit_code().
"""

import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Sequence


class ProcessStatus(Enum):
    SUCCESS = "success"
    EXIT_CODE = "exit_code"
    SIGNALED = "signaled"
    SPAWN_FAILED = "spawn_failed"


@dataclass(frozen=True)
class ProcessResult:
    status: ProcessStatus
    code: int | None = None
    signal: int | None = None
    error: OSError | None = None

    @property
    def success(self) -> bool:
        return self.status is ProcessStatus.SUCCESS

    @property
    def spawned(self) -> bool:
        return self.status is not ProcessStatus.SPAWN_FAILED

    @classmethod
    def from_returncode(cls, returncode: int) -> "ProcessResult":
        if returncode == 0:
            return cls(ProcessStatus.SUCCESS, code=0)
        if returncode < 0:
            return cls(ProcessStatus.SIGNALED, signal=-returncode)
        return cls(ProcessStatus.EXIT_CODE, code=returncode)

    def describe(self) -> str:
        if self.status is ProcessStatus.SIGNALED:
            return f"terminated by signal {self.signal}"
        if self.status is ProcessStatus.SPAWN_FAILED:
            return f"failed to spawn: {self.error}"
        return f"exit code {self.code}"


def run_process(cmd: Sequence[str | Path], **popen_kwargs) -> ProcessResult:
    """Spawn cmd with inherited stdio and block until it exits."""
    try:
        proc = subprocess.Popen([str(part) for part in cmd], **popen_kwargs)
    except OSError as e:
        return ProcessResult(ProcessStatus.SPAWN_FAILED, error=e)

    # Ctrl-C reaches the child through the terminal; keep waiting for it.
    while True:
        try:
            returncode = proc.wait()
        except KeyboardInterrupt:
            continue
        return ProcessResult.from_returncode(returncode)


def exit_code(result: ProcessResult) -> int:
    """Map a child's result onto the wrapper's own exit status."""
    if result.status is ProcessStatus.SUCCESS:
        return 0
    if result.status is ProcessStatus.EXIT_CODE and result.code is not None:
        return result.code
    return 1
