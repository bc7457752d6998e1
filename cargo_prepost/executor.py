"""
Hook execution.

A hook is either something directly runnable (`prepost/prebuild`) or a
source file (`prepost/prebuild.rs`). Source hooks are built in one of
three ways:

  - adjacent manifest  → `cargo run --bin <stem> --manifest-path prepost/Cargo.toml`
  - scratch project    → copy the hook into a throwaway project under
                         `<target>/prepost/` and `cargo run --release` it
                         (mode "synthesize" writes a minimal manifest,
                         mode "reuse" copies the invoking project's one)
  - standalone compile → `rustc -o <target>/prepost/<stem> <hook>` (mode "rustc")

Anything that stops a hook from starting is fatal. A hook that runs and
exits non-zero is only reported.
"""

import logging
import re
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from cargo_prepost.context import InvocationContext
from cargo_prepost.errors import HookSetupError, SpawnError
from cargo_prepost.metadata import target_directory
from cargo_prepost.process import ProcessResult, run_process

log = logging.getLogger("cargo-prepost")

MANIFEST_TEMPLATE = """\
[package]
name = "{name}"
version = "0.0.0"
edition = "{edition}"

[workspace]
"""

# Any `[workspace]` or `[workspace.*]` header makes a manifest its own workspace root.
WORKSPACE_TABLE = re.compile(r"^\s*\[workspace(\]|\.)", re.MULTILINE)


def package_name(stem: str) -> str:
    """Turn a hook file stem into a valid package name."""
    name = re.sub(r"[^A-Za-z0-9_-]", "_", stem)
    if not name or not name[0].isalpha():
        name = f"hook-{name}"
    return name


class HookExecutor:
    def __init__(self, tool: Path, ctx: InvocationContext, config: dict | None = None):
        config = config or {}
        hooks = config.get("hooks", {})
        executor = config.get("executor", {})
        self.tool = tool
        self.ctx = ctx
        self.mode = executor.get("mode", "synthesize")
        self.compiler = executor.get("compiler", "rustc")
        self.edition = str(executor.get("edition", "2021"))
        self.source_extension = hooks.get("source_extension", "rs")
        self.manifest_name = hooks.get("manifest", "Cargo.toml")

    def is_source(self, hook: Path) -> bool:
        return hook.suffix == f".{self.source_extension}"

    def run(self, hook: Path, is_source: bool | None = None) -> ProcessResult:
        """Run a hook; `is_source` comes from resolution, else from the suffix."""
        if is_source is None:
            is_source = self.is_source(hook)
        if is_source:
            result = self._run_source(hook)
        else:
            result = self._spawn([hook])

        if result.success:
            log.info(f"{hook} successfully executed")
        else:
            log.warning(f"{hook} executed; but returns {result.describe()}")
        return result

    # ── spawning ─────────────────────────────────────────────────────────────

    def _spawn(self, cmd: list, **kwargs) -> ProcessResult:
        result = run_process(cmd, cwd=self.ctx.cwd, **kwargs)
        if not result.spawned:
            raise SpawnError(cmd[0], result.error)
        return result

    def _run_source(self, hook: Path) -> ProcessResult:
        stem = hook.stem
        adjacent_manifest = hook.with_name(self.manifest_name)
        if adjacent_manifest.is_file():
            log.info(f"Running {hook} through {adjacent_manifest}")
            return self._spawn(
                [self.tool, "run", "--bin", stem, "--manifest-path", adjacent_manifest],
                stderr=subprocess.DEVNULL,
            )

        artifacts = self.artifact_dir()
        if self.mode == "rustc":
            return self._compile_and_run(hook, stem, artifacts)

        with self.scratch_project(hook, stem, artifacts) as project:
            return self._spawn(
                [self.tool, "run", "--release", "--manifest-path", project / self.manifest_name]
            )

    def _compile_and_run(self, hook: Path, stem: str, artifacts: Path) -> ProcessResult:
        binary = artifacts / stem
        compiled = self._spawn([self.compiler, "-o", binary, hook])
        if not compiled.success:
            raise HookSetupError(f"Failed to compile {hook}: {compiled.describe()}")
        return self._spawn([binary])

    # ── filesystem ───────────────────────────────────────────────────────────

    def artifact_dir(self) -> Path:
        path = target_directory(self.tool, self.ctx.cwd) / "prepost"
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise HookSetupError(f"Failed to create target directory: {e}") from e
        return path

    @contextmanager
    def scratch_project(self, hook: Path, stem: str, parent: Path) -> Iterator[Path]:
        """Yield a uniquely named project holding `hook` as its only source file."""
        try:
            root = Path(tempfile.mkdtemp(prefix=f"{stem}-", dir=parent))
        except OSError as e:
            raise HookSetupError(f"Failed to create scratch project: {e}") from e

        try:
            try:
                src = root / "src"
                src.mkdir()
                shutil.copyfile(hook, src / f"main.{self.source_extension}")
                self._write_manifest(root, stem)
            except OSError as e:
                raise HookSetupError(f"Failed to prepare scratch project for {hook}: {e}") from e
            log.debug(f"Scratch project for {hook} at {root}")
            yield root
        finally:
            try:
                shutil.rmtree(root)
            except OSError as e:
                log.warning(f"Failed to remove scratch project {root}: {e}")

    def _write_manifest(self, root: Path, stem: str) -> None:
        manifest = root / self.manifest_name
        if self.mode == "reuse":
            project_manifest = self.ctx.cwd / self.manifest_name
            if project_manifest.is_file():
                text = project_manifest.read_text()
                if not WORKSPACE_TABLE.search(text):
                    text = text.rstrip("\n") + "\n\n[workspace]\n"
                manifest.write_text(text)
                return
            log.warning(f"{project_manifest} not found; synthesizing a minimal manifest")
        manifest.write_text(MANIFEST_TEMPLATE.format(name=package_name(stem), edition=self.edition))
