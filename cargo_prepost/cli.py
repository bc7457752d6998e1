#!/usr/bin/env python3
"""
cargo-prepost entry point.

Installed under the name `cargo` ahead of the real cargo on PATH, it runs
prepost/pre<subcommand> and prepost/post<subcommand> around the real
invocation. `cargo prepost ...` is handled by the wrapper itself.
"""

import sys
import traceback

from cargo_prepost import install, orchestrator
from cargo_prepost.config import load_config
from cargo_prepost.context import InvocationContext
from cargo_prepost.errors import PrepostError
from cargo_prepost.logger import setup_logger


def main(argv: list[str] | None = None):
    logger = None
    try:
        ctx = InvocationContext.from_environment(argv)
        config = load_config(cwd=ctx.cwd)
        logger = setup_logger(config.get("logging", {}))
        logger.info(f"args: {list(ctx.args)}")
        logger.info(f"subcommand: {ctx.subcommand}")

        if ctx.subcommand == install.SETUP_SUBCOMMAND:
            code = install.main(ctx, config)
        else:
            code = orchestrator.run(ctx, config)
    except SystemExit:
        raise
    except PrepostError as e:
        (logger or setup_logger()).error(str(e))
        sys.exit(1)
    except Exception:
        print(traceback.format_exc(), file=sys.stderr)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
