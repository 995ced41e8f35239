from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .state import BOARD_SIZE, KNIGHT_MOVES, ORIGIN, Coord, SearchAction

BoardArray = NDArray[np.int32]


class Board:
    """Knight's tour search state.

    ``board`` holds one cell per square in row-major ``file * size + rank``
    order: 0 for unvisited, otherwise the 1-based visit order. The start square
    is visited with order 1, so after k moves the current square holds k + 1.

    ``moves_made`` is the path from ``start`` to ``current`` as offsets, and
    ``moves_to_make`` keeps the untried offsets for every depth on that path,
    which is why it is always one entry longer than ``moves_made`` while the
    search is active.
    """

    def __init__(self, board_size: int = BOARD_SIZE, start: Coord = ORIGIN) -> None:
        if board_size < 1:
            raise ValueError(f"Board size must be positive, got {board_size}.")
        self.size = board_size
        self.moves: Tuple[Coord, ...] = KNIGHT_MOVES
        if not self.is_on_board(start):
            raise ValueError(f"Start square {start.as_tuple()} is off a {board_size}x{board_size} board.")
        self.start = start
        self.current = start
        self.board: BoardArray = np.zeros(board_size * board_size, dtype=np.int32)
        self.moves_made: List[Coord] = []
        self.moves_to_make: List[List[Coord]] = []

        self.set_value_at(start, 1)
        self.moves_to_make.append(self.available_moves())

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def index_of(self, coord: Coord) -> int:
        if not self.is_on_board(coord):
            raise IndexError(f"Square {coord.as_tuple()} is off the board.")
        return coord.file * self.size + coord.rank

    def value_at(self, coord: Coord) -> int:
        return int(self.board[self.index_of(coord)])

    def set_value_at(self, coord: Coord, value: int) -> None:
        self.board[self.index_of(coord)] = value

    def is_on_board(self, coord: Coord) -> bool:
        return 0 <= coord.file < self.size and 0 <= coord.rank < self.size

    def can_move(self, coord: Coord) -> bool:
        return self.value_at(coord) == 0

    def available_moves(self) -> List[Coord]:
        legal: List[Coord] = []
        for move in self.moves:
            target = self.current + move
            if self.is_on_board(target) and self.can_move(target):
                legal.append(move)
        return legal

    def make_move(self, move: Coord) -> None:
        self.current = self.current + move
        self.moves_made.append(move)
        self.set_value_at(self.current, len(self.moves_made) + 1)

    def rollback(self) -> Coord:
        if not self.moves_made:
            raise RuntimeError("Logic error: rollback with an empty move history.")
        self.set_value_at(self.current, 0)
        move = self.moves_made.pop()
        self.current = self.current - move
        return move

    def apply_best_move(self) -> Coord:
        """Apply the untried candidate that leaves the fewest onward moves.

        Each candidate at the current depth is tried and undone to count the
        mobility of the square it reaches. Ties keep the earliest candidate.
        """
        if not self.moves_to_make or not self.moves_to_make[-1]:
            raise RuntimeError("Logic error: no candidate move to apply.")

        best: Optional[Tuple[Coord, int, int]] = None
        for index, candidate in enumerate(list(self.moves_to_make[-1])):
            self.make_move(candidate)
            mobility = len(self.available_moves())
            self.rollback()
            if best is None or mobility < best[1]:
                best = (candidate, mobility, index)

        move, _, index = best
        self.make_move(move)
        del self.moves_to_make[-1][index]
        self.moves_to_make.append(self.available_moves())
        return move

    def retreat(self) -> Optional[Coord]:
        """Drop the exhausted top depth and undo the move that led into it."""
        if not self.moves_to_make:
            raise RuntimeError("Logic error: retreat with an empty candidate stack.")
        if self.moves_to_make[-1]:
            raise RuntimeError("Logic error: retreat while candidates remain at this depth.")
        self.moves_to_make.pop()
        if not self.moves_made:
            return None
        return self.rollback()

    def next_action(self) -> SearchAction:
        if not self.moves_to_make:
            return SearchAction.TERMINATE
        if not self.moves_to_make[-1]:
            return SearchAction.ROLLBACK
        return SearchAction.ADVANCE

    def is_complete(self) -> bool:
        return len(self.moves_made) == self.cell_count - 1

    def is_closed_tour(self) -> bool:
        return any(self.current + move == self.start for move in self.moves)

    def closing_move(self) -> Coord:
        return self.start - self.current

    def tour(self) -> List[Coord]:
        return self.moves_made + [self.closing_move()]

    def grid(self) -> BoardArray:
        view = self.board.reshape(self.size, self.size)
        view.flags.writeable = False
        return view

    def __repr__(self) -> str:
        width = len(str(self.cell_count))
        rows = "\n".join(" ".join(str(int(cell)).rjust(width) for cell in row) for row in self.grid())
        return (
            f"Board(size={self.size}, start={self.start.as_tuple()}, "
            f"current={self.current.as_tuple()}, depth={len(self.moves_made)})\n"
            f"{rows}"
        )
