"""Interactive tic-tac-toe session on text streams.

Each tile is picked with one key, laid out like the board:

    |u|i|o|
    |h|j|k|
    |b|n|m|

After every move the board is printed together with the engine's
evaluation of the position for the side to move.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, TextIO

from .config import SearchConfig
from .game_basics import Coordinate, Game, Outcome, Player
from .solver import best_move, evaluate_game

logger = logging.getLogger(__name__)

CONTROLS = "uiohjkbnm"
CONTROLS_HELP = "Enter a tile to play the next move:\n|u|i|o|\n|h|j|k|\n|b|n|m|"

_OUTCOME_TEXT = {
    Outcome.CROSS_WIN: "x wins",
    Outcome.CIRCLE_WIN: "o wins",
    Outcome.DRAW: "draw",
}


def parse_control(text: str) -> Optional[Coordinate]:
    key = text.strip().lower()
    if len(key) != 1 or key not in CONTROLS:
        return None
    return divmod(CONTROLS.index(key), 3)


def prompt_move(game: Game, lines: Iterator[str], out: TextIO) -> Optional[Coordinate]:
    """Read lines until one names a free tile; None once input runs out."""
    available = set(game.empty_tiles())
    for line in lines:
        coord = parse_control(line)
        if coord is None:
            print(CONTROLS_HELP, file=out)
            continue
        if coord not in available:
            print("That tile is occupied", file=out)
            continue
        return coord
    return None


def run_session(
    lines: Iterable[str],
    out: TextIO,
    game: Optional[Game] = None,
    ai: Optional[Player] = None,
    config: Optional[SearchConfig] = None,
) -> Game:
    """Play until the game ends or input is exhausted; return the final position.

    `ai` names the side the engine plays; the other side (or both, when
    `ai` is None) is read from `lines`.
    """
    game = game or Game.new()
    config = config or SearchConfig.from_env()
    it = iter(lines)
    print(game.to_string(), file=out)

    while game.outcome() is None:
        if game.turn is ai:
            # depth 0 scores no moves; fall back to the first free tile
            coord = best_move(game, config=config) or game.empty_tiles()[0]
            print(f"{ai.value} plays {CONTROLS[coord[0] * 3 + coord[1]]}", file=out)
        else:
            coord = prompt_move(game, it, out)
            if coord is None:
                logger.debug("input exhausted at board=%s", game.serialize())
                return game
        game = game.make_move(coord)
        print(game.to_string(), file=out)
        print(f"eval: {evaluate_game(game, config=config)}", file=out)

    print(f"result: {_OUTCOME_TEXT[game.outcome()]}", file=out)
    return game
