from __future__ import annotations

import argparse
import csv
import logging
import sys
from typing import Optional

from .config import SearchConfig
from .game_basics import Game, Player
from .play import run_session
from .solver import score_moves, solve_game

_TURNS = {"x": Player.CROSS, "o": Player.CIRCLE}


def _add_search_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--depth", type=int, default=None, help="Search depth in plies (default: ADVSEARCH_DEPTH or 10)")
    p.add_argument("--strict", action="store_true", help="Fail on non-terminal states without moves")
    p.add_argument("--iterative", action="store_true", help="Use the explicit-stack search")


def _add_board_args(p: argparse.ArgumentParser, allow_stdin: bool) -> None:
    p.add_argument("--board", help="Board string, 9 cells of x/o/., e.g. 'xx./oo./...'")
    p.add_argument("--to-move", choices=sorted(_TURNS), default=None, help="Side to move (default: inferred)")
    if allow_stdin:
        p.add_argument(
            "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
        )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="advsearch", description="Minimax evaluation for tic-tac-toe")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")

    p_eval = sub.add_parser("evaluate", help="Evaluate a board under optimal play")
    _add_board_args(p_eval, allow_stdin=True)
    _add_search_args(p_eval)

    p_moves = sub.add_parser("moves", help="Score every legal move for the side to move")
    _add_board_args(p_moves, allow_stdin=False)
    _add_search_args(p_moves)

    p_play = sub.add_parser("play", help="Play interactively on stdin/stdout")
    p_play.add_argument("--ai", choices=sorted(_TURNS), default=None, help="Side played by the engine")
    _add_search_args(p_play)

    return p


def _search_config(ns: argparse.Namespace) -> SearchConfig:
    if ns.depth is not None and ns.depth < 0:
        raise ValueError(f"--depth must be >= 0, got {ns.depth}")
    return SearchConfig.from_env().with_overrides(
        depth=ns.depth,
        strict=True if ns.strict else None,
        iterative=True if ns.iterative else None,
    )


def _parse_board(raw: str, to_move: Optional[str]) -> Optional[Game]:
    try:
        game = Game.from_string(raw, _TURNS[to_move] if to_move else None)
    except ValueError:
        return None
    return game if game.is_valid() else None


def _read_board(ns: argparse.Namespace) -> Optional[Game]:
    raw = (ns.board or "").strip()
    game = _parse_board(raw, ns.to_move)
    if game is None:
        logging.error("Invalid board string. Must be 9 cells of x/o/. forming a reachable position.")
    return game


def _format_moves(moves) -> str:
    return " ".join(f"{r}{c}" for r, c in moves)


def _evaluate(ns: argparse.Namespace, cfg: SearchConfig) -> int:
    if ns.stdin:
        w = csv.writer(sys.stdout)
        w.writerow(["board", "value", "optimal_moves"])
        for line in sys.stdin:
            raw = line.strip()
            if not raw:
                continue
            game = _parse_board(raw, ns.to_move)
            if game is None:
                logging.debug("skipping invalid board %r", raw)
                continue
            res = solve_game(game, config=cfg)
            w.writerow([game.serialize(), res['value'], _format_moves(res['optimal_moves'])])
        return 0

    game = _read_board(ns)
    if game is None:
        return 2
    res = solve_game(game, config=cfg)
    best = res['optimal_moves'][0] if res['optimal_moves'] else None
    logging.info("value=%s best=%s optimal=%s", res['value'], best, list(res['optimal_moves']))
    return 0


def _moves(ns: argparse.Namespace, cfg: SearchConfig) -> int:
    game = _read_board(ns)
    if game is None:
        return 2
    logging.info("to_move=%s depth=%d", game.turn.value, cfg.depth)
    for coord, score in score_moves(game, config=cfg).items():
        logging.info("move=%s score=%s", coord, score)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        from importlib.metadata import PackageNotFoundError, version as _ver

        try:
            print(_ver("advsearch"))
        except PackageNotFoundError:
            print("unknown")
        return 0

    if ns.cmd is None:
        parser.print_help()
        return 0

    try:
        cfg = _search_config(ns)
    except ValueError as exc:
        logging.error("%s", exc)
        return 2

    if ns.cmd == "evaluate":
        return _evaluate(ns, cfg)
    if ns.cmd == "moves":
        return _moves(ns, cfg)
    if ns.cmd == "play":
        final = run_session(sys.stdin, sys.stdout, ai=_TURNS.get(ns.ai), config=cfg)
        logging.debug("final board=%s", final.serialize())
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
