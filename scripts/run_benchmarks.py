#!/usr/bin/env python3
from __future__ import annotations

import logging
import math
import statistics as stats
import time
from dataclasses import dataclass, field
from typing import List, Tuple

from advsearch.config import SearchConfig
from advsearch.game_basics import Game
from advsearch.solver import evaluate_game


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    repeats: int = 5
    boards: List[str] = field(default_factory=lambda: ["x........", "x...o....", "xx.oo...."])
    depth: int = 10


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    cfg = Config()
    for board in cfg.boards:
        game = Game.from_string(board)
        for iterative in (False, True):
            search_cfg = SearchConfig(depth=cfg.depth, iterative=iterative)
            times: List[float] = []
            value = None
            for _ in range(cfg.repeats):
                t0 = time.perf_counter()
                value = evaluate_game(game, config=search_cfg)
                times.append(time.perf_counter() - t0)
            m, h = ci95(times)
            logging.info(
                "board=%s iterative=%s value=%s mean=%.4fs ± %.4fs (95%% CI, N=%d)",
                board, iterative, value, m, h, cfg.repeats,
            )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
