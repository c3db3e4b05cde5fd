"""advsearch package.

Depth-bounded minimax over pluggable game models, with tic-tac-toe as the
bundled example game and a small CLI.

Convenience imports are exposed for common workflows.
"""

from .game_basics import Game
from .search import MalformedGameModelError, Player, minimax, minimax_iterative
from .solver import best_move, evaluate_game, solve_game

__all__ = [
    "minimax",
    "minimax_iterative",
    "Player",
    "MalformedGameModelError",
    "Game",
    "evaluate_game",
    "solve_game",
    "best_move",
]
