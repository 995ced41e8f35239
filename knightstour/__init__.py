"""Closed knight's tour search."""

from . import core, search, validation
from .core import BOARD_SIZE, KNIGHT_MOVES, ORIGIN, Board, Coord, SearchAction
from .search import (
    ChannelClosed,
    SearchConfig,
    SearchDriver,
    SearchStats,
    StopReason,
    TourChannel,
    find_closed_tours,
)
from .validation import TourValidationError, tour_to_coordinates, validate_tour

__all__ = [
    "core",
    "search",
    "validation",
    "Board",
    "Coord",
    "SearchAction",
    "BOARD_SIZE",
    "KNIGHT_MOVES",
    "ORIGIN",
    "ChannelClosed",
    "TourChannel",
    "SearchConfig",
    "SearchDriver",
    "SearchStats",
    "StopReason",
    "find_closed_tours",
    "TourValidationError",
    "tour_to_coordinates",
    "validate_tour",
]
