from __future__ import annotations

from typing import List, Sequence

import numpy as np

from knightstour.core import BOARD_SIZE, KNIGHT_MOVES, ORIGIN, Coord


class TourValidationError(ValueError):
    pass


def is_knight_move(offset: Coord) -> bool:
    return offset in KNIGHT_MOVES


def tour_to_coordinates(tour: Sequence[Coord], start: Coord = ORIGIN) -> List[Coord]:
    """Absolute squares reached by each offset, summed from ``start``."""
    squares: List[Coord] = []
    current = start
    for offset in tour:
        current = current + offset
        squares.append(current)
    return squares


def validate_tour(tour: Sequence[Coord], board_size: int = BOARD_SIZE, start: Coord = ORIGIN) -> None:
    cell_count = board_size * board_size
    if len(tour) != cell_count:
        raise TourValidationError(f"tour has {len(tour)} moves, expected {cell_count}")
    for index, offset in enumerate(tour):
        if not is_knight_move(offset):
            raise TourValidationError(f"move {index} {offset.as_tuple()} is not a knight move")

    squares = tour_to_coordinates(tour, start)
    visits = np.zeros((board_size, board_size), dtype=np.int32)
    for index, square in enumerate(squares):
        if not (0 <= square.file < board_size and 0 <= square.rank < board_size):
            raise TourValidationError(f"move {index} leaves the board at {square.as_tuple()}")
        visits[square.file, square.rank] += 1
    if (visits > 1).any():
        raise TourValidationError("tour visits a square more than once")
    if not (visits == 1).all():
        raise TourValidationError("tour does not cover every square")

    if squares[-1] != start:
        raise TourValidationError("tour does not return to the start square")
