"""Map a subcommand onto its pre/post hook files."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class HookKind(Enum):
    PRE = "pre"
    POST = "post"


@dataclass(frozen=True)
class HookCandidate:
    path: Path
    is_source: bool


@dataclass(frozen=True)
class HookSpec:
    kind: HookKind
    candidates: tuple[HookCandidate, ...]

    @property
    def resolved(self) -> HookCandidate | None:
        """First candidate that exists; the executable form is listed first."""
        return next((c for c in self.candidates if c.path.is_file()), None)


def hook_spec(kind: HookKind, subcommand: str, hooks_dir: Path, source_extension: str = "rs") -> HookSpec:
    name = f"{kind.value}{subcommand}"
    return HookSpec(
        kind=kind,
        candidates=(
            HookCandidate(hooks_dir / name, is_source=False),
            HookCandidate(hooks_dir / f"{name}.{source_extension}", is_source=True),
        ),
    )


def resolve_hooks(
    subcommand: str | None,
    hooks_dir: Path,
    source_extension: str = "rs",
) -> tuple[HookCandidate | None, HookCandidate | None]:
    """
    Resolve the (pre, post) hooks for a subcommand.

    A missing hook is not an error; either side is None when no candidate
    file exists or when there is no subcommand at all.
    """
    if subcommand is None:
        return None, None
    pre = hook_spec(HookKind.PRE, subcommand, hooks_dir, source_extension).resolved
    post = hook_spec(HookKind.POST, subcommand, hooks_dir, source_extension).resolved
    return pre, post
