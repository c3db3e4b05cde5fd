"""
Game basics: board representation, parsing, rules, outcome checks, rendering.
Notes:
- The board is a flat tuple of 9 tiles in row-major order; coordinates are
  (row, column) pairs. Cross always starts.
- Game values are immutable: make_move returns the successor position.
- A completed line ends the game immediately; a full board without one is a draw.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

Coordinate = Tuple[int, int]

WIN_PATTERNS = [
    [0, 1, 2], [3, 4, 5], [6, 7, 8],
    [0, 3, 6], [1, 4, 7], [2, 5, 8],
    [0, 4, 8], [2, 4, 6]
]


class TileState(Enum):
    CROSS = "x"
    CIRCLE = "o"
    EMPTY = "."


class Player(Enum):
    CROSS = "x"
    CIRCLE = "o"

    @property
    def opponent(self) -> "Player":
        return Player.CIRCLE if self is Player.CROSS else Player.CROSS

    @property
    def tile(self) -> TileState:
        return TileState(self.value)


class Outcome(Enum):
    CROSS_WIN = "cross_win"
    CIRCLE_WIN = "circle_win"
    DRAW = "draw"


EMPTY_BOARD: Tuple[TileState, ...] = (TileState.EMPTY,) * 9

_IGNORED_CHARS = set(" \t\n|/")

_TILE_TEXT = {
    TileState.EMPTY: "   ",
    TileState.CIRCLE: " o ",
    TileState.CROSS: " x ",
}


def _index(coord: Coordinate) -> int:
    row, col = coord
    if not (0 <= row < 3 and 0 <= col < 3):
        raise ValueError(f"Coordinate out of range: {coord}")
    return row * 3 + col


@dataclass(frozen=True)
class Game:
    board: Tuple[TileState, ...] = EMPTY_BOARD
    turn: Player = Player.CROSS

    @classmethod
    def new(cls) -> "Game":
        return cls()

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[TileState]], turn: Player) -> "Game":
        cells = tuple(tile for row in rows for tile in row)
        if len(rows) != 3 or len(cells) != 9:
            raise ValueError("Board must have three rows of three tiles")
        return cls(board=cells, turn=turn)

    @classmethod
    def from_string(cls, text: str, turn: Optional[Player] = None) -> "Game":
        """Parse 9 cells of x/o/. (case-insensitive); '|', '/' and whitespace are ignored.

        Without an explicit turn the side to move is inferred from the piece
        counts: equal counts mean cross moves.
        """
        cells = [c for c in text.lower() if c not in _IGNORED_CHARS]
        if len(cells) != 9:
            raise ValueError(f"Board must have 9 cells, got {len(cells)}: {text!r}")
        try:
            board = tuple(TileState(c) for c in cells)
        except ValueError:
            raise ValueError(f"Board cells must be one of 'x', 'o', '.': {text!r}") from None
        if turn is None:
            crosses, circles = _piece_counts(board)
            turn = Player.CROSS if crosses == circles else Player.CIRCLE
        return cls(board=board, turn=turn)

    def tile(self, coord: Coordinate) -> TileState:
        return self.board[_index(coord)]

    def empty_tiles(self) -> List[Coordinate]:
        return [divmod(i, 3) for i, t in enumerate(self.board) if t is TileState.EMPTY]

    def make_move(self, coord: Coordinate) -> "Game":
        idx = _index(coord)
        if self.board[idx] is not TileState.EMPTY:
            raise ValueError(f"Tile {coord} is occupied")
        if self.outcome() is not None:
            raise ValueError("Game is over")
        return self._place(idx)

    def children(self) -> List["Game"]:
        if self.outcome() is not None:
            return []
        return [self._place(i) for i, t in enumerate(self.board) if t is TileState.EMPTY]

    def _place(self, idx: int) -> "Game":
        cells = list(self.board)
        cells[idx] = self.turn.tile
        return Game(board=tuple(cells), turn=self.turn.opponent)

    def winner(self) -> Optional[Player]:
        b = self.board
        for a, m, c in WIN_PATTERNS:
            v = b[a]
            if v is not TileState.EMPTY and v is b[m] and v is b[c]:
                return Player(v.value)
        return None

    def outcome(self) -> Optional[Outcome]:
        w = self.winner()
        if w is Player.CROSS:
            return Outcome.CROSS_WIN
        if w is Player.CIRCLE:
            return Outcome.CIRCLE_WIN
        if TileState.EMPTY not in self.board:
            return Outcome.DRAW
        return None

    def is_valid(self) -> bool:
        """Piece counts fit cross moving first, and at most one side has a line."""
        crosses, circles = _piece_counts(self.board)
        if not (crosses == circles or crosses == circles + 1):
            return False
        x_lines = _count_lines(self.board, TileState.CROSS)
        o_lines = _count_lines(self.board, TileState.CIRCLE)
        if x_lines and o_lines:
            return False
        if x_lines and crosses != circles + 1:
            return False
        if o_lines and crosses != circles:
            return False
        return True

    def rows(self) -> List[Tuple[TileState, ...]]:
        return [self.board[i:i + 3] for i in (0, 3, 6)]

    def serialize(self) -> str:
        return "".join(t.value for t in self.board)

    def to_string(self) -> str:
        output = []
        for row in self.rows():
            output.append("| " + "".join(_TILE_TEXT[t] for t in row) + " |\n")
        return "".join(output)

    def __str__(self) -> str:
        return self.to_string()


def _piece_counts(board: Iterable[TileState]) -> Tuple[int, int]:
    cells = list(board)
    return cells.count(TileState.CROSS), cells.count(TileState.CIRCLE)


def _count_lines(board: Sequence[TileState], tile: TileState) -> int:
    return sum(1 for pat in WIN_PATTERNS if all(board[i] is tile for i in pat))
