"""Shared fixtures: fake tools and hooks as POSIX shell scripts."""

import logging
import stat
from pathlib import Path

import pytest

from cargo_prepost.context import InvocationContext


def write_script(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def make_context(cwd: Path, *args: str, path_env: str | None = "", self_exe: Path | None = None):
    return InvocationContext(
        args=tuple(args),
        path_env=path_env,
        cwd=cwd,
        self_exe=self_exe or cwd / "wrapper" / "cargo",
    )


@pytest.fixture
def calls(tmp_path) -> Path:
    """File every fake process appends one line to, in execution order."""
    return tmp_path / "calls.log"


@pytest.fixture
def fake_cargo(tmp_path, calls):
    """Factory for a fake `cargo` in its own PATH directory."""

    def _make(exit_code: int = 0, directory: str = "realbin") -> Path:
        return write_script(
            tmp_path / directory / "cargo",
            f'echo "cargo $*" >> "{calls}"\nexit {exit_code}\n',
        )

    return _make


@pytest.fixture
def hook(tmp_path, calls):
    """Factory for an executable hook under <tmp_path>/prepost."""

    def _make(name: str, exit_code: int = 0) -> Path:
        return write_script(
            tmp_path / "prepost" / name,
            f'echo "{name}" >> "{calls}"\nexit {exit_code}\n',
        )

    return _make


def read_calls(calls: Path) -> list[str]:
    return calls.read_text().splitlines() if calls.exists() else []


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logging.getLogger("cargo-prepost").handlers.clear()
