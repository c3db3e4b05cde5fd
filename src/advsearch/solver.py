"""
Tic-tac-toe evaluation on top of the generic minimax engine.
Conventions:
- Cross is the maximizing side, circle the minimizing side.
- A cross win scores +inf, a circle win -inf, a draw 0.
- Cut-off positions are scored by a neutral heuristic (always 0) unless the
  caller supplies another one.
"""
import logging
import math
from typing import Callable, Dict, Optional

from . import search
from .config import SearchConfig
from .game_basics import Coordinate, Game, Outcome, Player

logger = logging.getLogger(__name__)

OUTCOME_SCORES: Dict[Outcome, float] = {
    Outcome.CROSS_WIN: math.inf,
    Outcome.CIRCLE_WIN: -math.inf,
    Outcome.DRAW: 0.0,
}


def terminal_score(game: Game) -> Optional[float]:
    outcome = game.outcome()
    if outcome is None:
        return None
    return OUTCOME_SCORES[outcome]


def neutral_heuristic(game: Game) -> float:
    return 0.0


def search_player(turn: Player) -> search.Player:
    return search.Player.MAX if turn is Player.CROSS else search.Player.MIN


def _resolve(config: Optional[SearchConfig], depth: Optional[int]) -> SearchConfig:
    config = config or SearchConfig.from_env()
    return config.with_overrides(depth=depth)


def evaluate_game(
    game: Game,
    depth: Optional[int] = None,
    heuristic: Callable[[Game], float] = neutral_heuristic,
    config: Optional[SearchConfig] = None,
) -> float:
    """Minimax value of `game` with the side to move choosing the root flag."""
    cfg = _resolve(config, depth)
    value = cfg.search_fn()(
        game,
        cfg.depth,
        Game.children,
        terminal_score,
        heuristic,
        search_player(game.turn),
        strict=cfg.strict,
    )
    logger.debug("evaluate board=%s depth=%d value=%s", game.serialize(), cfg.depth, value)
    return value


def score_moves(
    game: Game,
    depth: Optional[int] = None,
    heuristic: Callable[[Game], float] = neutral_heuristic,
    config: Optional[SearchConfig] = None,
) -> Dict[Coordinate, float]:
    """Score every legal move by searching the resulting position one ply shallower.

    Returns an empty mapping for finished games and for depth 0.
    """
    cfg = _resolve(config, depth)
    if cfg.depth == 0 or game.outcome() is not None:
        return {}
    child_cfg = cfg.with_overrides(depth=cfg.depth - 1)
    return {
        coord: evaluate_game(game.make_move(coord), heuristic=heuristic, config=child_cfg)
        for coord in game.empty_tiles()
    }


def solve_game(
    game: Game,
    depth: Optional[int] = None,
    heuristic: Callable[[Game], float] = neutral_heuristic,
    config: Optional[SearchConfig] = None,
) -> Dict:
    """Value of `game` plus the per-move scores and the set of optimal moves."""
    cfg = _resolve(config, depth)
    move_scores = score_moves(game, heuristic=heuristic, config=cfg)
    if not move_scores:
        return {
            'value': evaluate_game(game, heuristic=heuristic, config=cfg),
            'move_scores': {},
            'optimal_moves': tuple(),
        }
    pick = max if game.turn is Player.CROSS else min
    value = pick(move_scores.values())
    optimal = tuple(coord for coord, score in move_scores.items() if score == value)
    return {
        'value': value,
        'move_scores': move_scores,
        'optimal_moves': optimal,
    }


def best_move(
    game: Game,
    depth: Optional[int] = None,
    heuristic: Callable[[Game], float] = neutral_heuristic,
    config: Optional[SearchConfig] = None,
) -> Optional[Coordinate]:
    """First optimal move in row-major order, or None when there is nothing to play."""
    optimal = solve_game(game, depth, heuristic, config)['optimal_moves']
    return optimal[0] if optimal else None
