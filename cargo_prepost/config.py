"""Config loader: reads YAML from standard locations with sane defaults."""

import os
from pathlib import Path
from typing import Any

import yaml

from cargo_prepost.errors import ConfigError

EXECUTOR_MODES = ("synthesize", "reuse", "rustc")

DEFAULT_CONFIG: dict[str, Any] = {
    "tool": {
        "name": "cargo",
    },
    "hooks": {
        "dir": "prepost",
        "source_extension": "rs",
        "manifest": "Cargo.toml",
    },
    "executor": {
        "mode": "synthesize",         # synthesize | reuse | rustc
        "compiler": "rustc",
        "edition": "2021",
    },
    "logging": {
        "level": "WARNING",
        "file": None,                 # None = stderr only
        "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    },
}

CONFIG_SEARCH_PATHS = [
    Path.home() / ".cargo-prepost" / "config.yml",
]

PROJECT_CONFIG_NAME = "cargo-prepost.config.yml"


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> dict:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a mapping")
    return data


def load_config(config_path: str | None = None, cwd: Path | None = None) -> dict:
    """Load configuration from file, merging with defaults."""
    # Check env var override first
    env_path = os.environ.get("CARGO_PREPOST_CONFIG")
    if env_path:
        search_paths = [Path(env_path)]
    elif config_path:
        search_paths = [Path(config_path)]
    else:
        search_paths = list(CONFIG_SEARCH_PATHS)
        if cwd is not None:
            search_paths.append(cwd / PROJECT_CONFIG_NAME)

    config = deep_merge(DEFAULT_CONFIG, {})
    for path in search_paths:
        if path.exists():
            config = deep_merge(DEFAULT_CONFIG, _read_yaml(path))
            break

    level = os.environ.get("CARGO_PREPOST_LOG")
    if level:
        config["logging"] = dict(config["logging"], level=level)

    mode = config["executor"].get("mode")
    if mode not in EXECUTOR_MODES:
        raise ConfigError(
            f"Unknown executor mode {mode!r}; expected one of {', '.join(EXECUTOR_MODES)}"
        )
    return config
