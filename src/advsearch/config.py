"""Search configuration.

Environment-first: ADVSEARCH_DEPTH, ADVSEARCH_STRICT and ADVSEARCH_ITERATIVE
override the defaults; command-line flags override the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Callable, Optional

from .search import minimax, minimax_iterative

# Depth used by the interactive driver; deep enough to solve tic-tac-toe.
DEFAULT_DEPTH = 10

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    raw = os.getenv(name)
    return raw is not None and raw.strip().lower() in _TRUE_VALUES


def _env_depth() -> int:
    raw = os.getenv("ADVSEARCH_DEPTH")
    if raw is None or not raw.strip():
        return DEFAULT_DEPTH
    try:
        depth = int(raw)
    except ValueError:
        raise ValueError(f"ADVSEARCH_DEPTH must be an integer, got {raw!r}") from None
    if depth < 0:
        raise ValueError(f"ADVSEARCH_DEPTH must be >= 0, got {depth}")
    return depth


@dataclass(frozen=True)
class SearchConfig:
    depth: int = DEFAULT_DEPTH
    strict: bool = False
    iterative: bool = False

    @classmethod
    def from_env(cls) -> "SearchConfig":
        return cls(
            depth=_env_depth(),
            strict=_env_flag("ADVSEARCH_STRICT"),
            iterative=_env_flag("ADVSEARCH_ITERATIVE"),
        )

    def with_overrides(
        self,
        depth: Optional[int] = None,
        strict: Optional[bool] = None,
        iterative: Optional[bool] = None,
    ) -> "SearchConfig":
        """Return a copy with every non-None argument applied."""
        changes = {
            k: v
            for k, v in (("depth", depth), ("strict", strict), ("iterative", iterative))
            if v is not None
        }
        return replace(self, **changes)

    def search_fn(self) -> Callable[..., float]:
        return minimax_iterative if self.iterative else minimax
