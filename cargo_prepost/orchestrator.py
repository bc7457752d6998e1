"""
Wrapped tool invocation: pre hook → real tool → post hook.

The real tool always receives the original arguments untouched. Its exit
status becomes the wrapper's exit status; hooks never change it.
"""

import logging

from cargo_prepost.config import DEFAULT_CONFIG, deep_merge
from cargo_prepost.context import InvocationContext
from cargo_prepost.errors import SpawnError
from cargo_prepost.executor import HookExecutor
from cargo_prepost.locator import locate_tool
from cargo_prepost.process import exit_code, run_process
from cargo_prepost.resolver import resolve_hooks

log = logging.getLogger("cargo-prepost")


def run(ctx: InvocationContext, config: dict | None = None) -> int:
    """Run the hooked invocation and return the exit code for the wrapper."""
    config = deep_merge(DEFAULT_CONFIG, config or {})
    tool_name = config["tool"]["name"]
    tool = locate_tool(ctx, tool_name)

    hooks_dir = ctx.cwd / config["hooks"]["dir"]
    pre, post = resolve_hooks(ctx.subcommand, hooks_dir, config["hooks"]["source_extension"])
    executor = HookExecutor(tool, ctx, config)

    if pre is not None:
        log.info(f"{pre.path} found")
        executor.run(pre.path, pre.is_source)

    result = run_process([tool, *ctx.args], cwd=ctx.cwd)
    if not result.spawned:
        raise SpawnError(tool, result.error)
    if result.success:
        log.info(f"{tool_name} exited")
    else:
        log.warning(f"{tool_name} exited with error status ({result.describe()})")

    if post is not None:
        log.info(f"{post.path} found")
        executor.run(post.path, post.is_source)

    return exit_code(result)
