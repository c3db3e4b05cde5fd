import math

from hypothesis import given, settings, strategies as st

from advsearch.game_basics import Game
from advsearch.search import minimax, minimax_iterative
from advsearch.solver import search_player, terminal_score

WIN_PATTERNS = ([0, 1, 2], [3, 4, 5], [6, 7, 8], [0, 3, 6], [1, 4, 7], [2, 5, 8], [0, 4, 8], [2, 4, 6])
WEIGHTS = [2, 1, 2, 1, 3, 1, 2, 1, 2]


def positional(cells: str) -> float:
    return float(sum(w if c == "x" else -w if c == "o" else 0 for w, c in zip(WEIGHTS, cells)))


def reference_value(cells: str, to_move: str, depth: int) -> float:
    """Plain string-based minimax, written independently of the package."""
    for a, b, c in WIN_PATTERNS:
        if cells[a] != "." and cells[a] == cells[b] == cells[c]:
            return math.inf if cells[a] == "x" else -math.inf
    if "." not in cells:
        return 0.0
    if depth == 0:
        return positional(cells)
    other = "o" if to_move == "x" else "x"
    scores = [
        reference_value(cells[:i] + to_move + cells[i + 1:], other, depth - 1)
        for i, c in enumerate(cells)
        if c == "."
    ]
    return max(scores) if to_move == "x" else min(scores)


@st.composite
def reachable_games(draw) -> Game:
    order = draw(st.permutations(range(9)))
    n = draw(st.integers(min_value=0, max_value=9))
    game = Game.new()
    for idx in order[:n]:
        if game.outcome() is not None:
            break
        game = game.make_move(divmod(idx, 3))
    return game


def engine_value(engine, game: Game, depth: int) -> float:
    return engine(
        game,
        depth,
        Game.children,
        terminal_score,
        lambda g: positional(g.serialize()),
        search_player(game.turn),
    )


@settings(max_examples=60, deadline=None)
@given(reachable_games(), st.integers(min_value=0, max_value=3))
def test_minimax_matches_reference(game: Game, depth: int):
    expected = reference_value(game.serialize(), game.turn.value, depth)
    assert engine_value(minimax, game, depth) == expected


@settings(max_examples=60, deadline=None)
@given(reachable_games(), st.integers(min_value=0, max_value=3))
def test_iterative_matches_recursive(game: Game, depth: int):
    assert engine_value(minimax_iterative, game, depth) == engine_value(minimax, game, depth)


@settings(max_examples=40, deadline=None)
@given(reachable_games(), st.integers(min_value=0, max_value=3))
def test_evaluation_is_deterministic(game: Game, depth: int):
    first = engine_value(minimax, game, depth)
    assert all(engine_value(minimax, game, depth) == first for _ in range(3))


@given(reachable_games(), st.integers(min_value=0, max_value=6))
def test_terminal_positions_score_their_outcome(game: Game, depth: int):
    score = terminal_score(game)
    if score is None:
        assert engine_value(minimax, game, 0) == positional(game.serialize())
    else:
        assert engine_value(minimax, game, depth) == score


@given(reachable_games())
def test_reachable_games_are_valid(game: Game):
    assert game.is_valid()
    assert len(game.children()) == (0 if game.outcome() is not None else len(game.empty_tiles()))
