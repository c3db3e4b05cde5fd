"""
Depth-bounded minimax over any two-player, zero-sum, perfect-information game.
Notes:
- The game is described by three callables, not a base class:
  children_of(state), terminal_score_of(state) and heuristic_of(state).
- Scores are from MAX's point of view: positive favours MAX, negative MIN.
- Terminal scores win over depth limits and heuristics.
- A non-terminal state with no children is a malformed model. By default it
  is scored with the heuristic; strict=True raises MalformedGameModelError.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Iterator, List, Optional, Sequence, TypeVar, Union

S = TypeVar("S")

ChildGenerator = Callable[[S], Sequence[S]]
TerminalEvaluator = Callable[[S], Optional[float]]
HeuristicEvaluator = Callable[[S], float]


class Player(Enum):
    MAX = "max"
    MIN = "min"

    @property
    def opponent(self) -> "Player":
        return Player.MIN if self is Player.MAX else Player.MAX


class MalformedGameModelError(ValueError):
    """A state reported as non-terminal has no children."""

    def __init__(self, state: object) -> None:
        super().__init__(f"non-terminal state has no children: {state!r}")
        self.state = state


def _as_player(player: Union[Player, bool]) -> Player:
    if isinstance(player, Player):
        return player
    return Player.MAX if player else Player.MIN


def _check_depth(depth: int) -> None:
    if depth < 0:
        raise ValueError(f"depth must be >= 0, got {depth}")


def _pick(player: Player, scores: List[float]) -> float:
    return max(scores) if player is Player.MAX else min(scores)


def minimax(
    state: S,
    depth: int,
    children_of: ChildGenerator,
    terminal_score_of: TerminalEvaluator,
    heuristic_of: HeuristicEvaluator,
    player: Union[Player, bool],
    strict: bool = False,
) -> float:
    """Score `state` under optimal play, looking at most `depth` plies ahead.

    `player` is the side to move at `state` (a Player, or True for MAX).
    Errors raised by the callbacks propagate unchanged.
    """
    _check_depth(depth)
    return _minimax(
        state, depth, children_of, terminal_score_of, heuristic_of, _as_player(player), strict
    )


def _minimax(state, depth, children_of, terminal_score_of, heuristic_of, player, strict):
    terminal = terminal_score_of(state)
    if terminal is not None:
        return terminal
    if depth == 0:
        return heuristic_of(state)
    children = children_of(state)
    if not children:
        if strict:
            raise MalformedGameModelError(state)
        return heuristic_of(state)
    scores = [
        _minimax(child, depth - 1, children_of, terminal_score_of, heuristic_of, player.opponent, strict)
        for child in children
    ]
    return _pick(player, scores)


_EXHAUSTED = object()


class _Frame:
    __slots__ = ("player", "children", "scores")

    def __init__(self, player: Player, children: Iterator) -> None:
        self.player = player
        self.children = children
        self.scores: List[float] = []


def minimax_iterative(
    state: S,
    depth: int,
    children_of: ChildGenerator,
    terminal_score_of: TerminalEvaluator,
    heuristic_of: HeuristicEvaluator,
    player: Union[Player, bool],
    strict: bool = False,
) -> float:
    """Same result as minimax(), using an explicit stack instead of recursion.

    Children are visited in the same order, so callbacks see the same calls.
    """
    _check_depth(depth)
    player = _as_player(player)

    # Each pending state is either scored on the spot or pushed as a frame.
    def expand(node, remaining: int, side: Player):
        terminal = terminal_score_of(node)
        if terminal is not None:
            return terminal, None
        if remaining == 0:
            return heuristic_of(node), None
        children = children_of(node)
        if not children:
            if strict:
                raise MalformedGameModelError(node)
            return heuristic_of(node), None
        return None, _Frame(side, iter(children))

    score, frame = expand(state, depth, player)
    if frame is None:
        return score

    stack = [frame]
    while True:
        top = stack[-1]
        child = next(top.children, _EXHAUSTED)
        if child is not _EXHAUSTED:
            remaining = depth - len(stack)
            score, frame = expand(child, remaining, top.player.opponent)
            if frame is not None:
                stack.append(frame)
            else:
                top.scores.append(score)
            continue
        stack.pop()
        result = _pick(top.player, top.scores)
        if not stack:
            return result
        stack[-1].scores.append(result)
