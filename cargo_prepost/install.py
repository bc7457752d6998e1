"""`cargo prepost setup`: put a `cargo` symlink to the wrapper in front of PATH."""

import argparse
import logging
import os
from pathlib import Path

from cargo_prepost.context import InvocationContext
from cargo_prepost.errors import EnvironmentSetupError

log = logging.getLogger("cargo-prepost")

SETUP_SUBCOMMAND = "prepost"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cargo prepost",
        description="Run prepost/pre<cmd> and prepost/post<cmd> hooks around cargo subcommands.",
    )
    commands = parser.add_subparsers(dest="command")
    setup_parser = commands.add_parser(
        "setup", help="Install the cargo shim and print the PATH to export."
    )
    setup_parser.add_argument(
        "--path",
        type=Path,
        metavar="PATH",
        help="Directory for the shim (default: ~/.cargo-prepost/bin)",
    )
    return parser


def default_install_dir() -> Path:
    try:
        home = Path.home()
    except RuntimeError as e:
        raise EnvironmentSetupError("Failed to get home directory") from e
    return home / ".cargo-prepost" / "bin"


def setup(ctx: InvocationContext, path: Path | None = None, tool_name: str = "cargo") -> str:
    """Create `<path>/<tool_name>` pointing at the wrapper; return the new PATH value."""
    search_dirs = ctx.search_dirs()
    path = path or default_install_dir()

    shim = path / tool_name
    if shim.exists() or shim.is_symlink():
        log.warning("It seems that cargo-prepost is already setup")
    else:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise EnvironmentSetupError(f"Failed to create directory: {e}") from e
        try:
            shim.symlink_to(ctx.self_exe.resolve())
        except OSError as e:
            raise EnvironmentSetupError(f"Failed to create {tool_name} symlink: {e}") from e

    return os.pathsep.join(str(d) for d in [path, *search_dirs])


def main(ctx: InvocationContext, config: dict) -> int:
    args = list(ctx.args)
    args = args[args.index(SETUP_SUBCOMMAND) + 1:]
    options = build_parser().parse_args(args)

    if options.command == "setup":
        print(setup(ctx, options.path, config.get("tool", {}).get("name", "cargo")))
    else:
        print("cargo-prepost")
    return 0
