"""Core board logic for the knight's tour search."""

from .state import BOARD_SIZE, KNIGHT_MOVES, ORIGIN, Coord, SearchAction, generate_knight_moves
from .board import Board

__all__ = [
    "Board",
    "Coord",
    "SearchAction",
    "BOARD_SIZE",
    "KNIGHT_MOVES",
    "ORIGIN",
    "generate_knight_moves",
]
