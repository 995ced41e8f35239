from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

BOARD_SIZE = 8


@dataclass(frozen=True)
class Coord:
    file: int
    rank: int

    def __add__(self, other: "Coord") -> "Coord":
        return Coord(self.file + other.file, self.rank + other.rank)

    def __sub__(self, other: "Coord") -> "Coord":
        return Coord(self.file - other.file, self.rank - other.rank)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.file, self.rank)

    @staticmethod
    def from_sequence(values: Sequence[int]) -> "Coord":
        if len(values) != 2:
            raise ValueError(f"Coordinate needs exactly two components, got {len(values)}.")
        return Coord(int(values[0]), int(values[1]))


class SearchAction(Enum):
    ADVANCE = "advance"
    ROLLBACK = "rollback"
    TERMINATE = "terminate"


def generate_knight_moves() -> Tuple[Coord, ...]:
    """Knight offsets in their fixed enumeration order.

    Every pairing of {1, 2, -1, -2} whose components differ in magnitude, which
    yields (1, 2), (1, -2), (2, 1), (2, -1), (-1, 2), (-1, -2), (-2, 1), (-2, -1).
    """
    steps = (1, 2, -1, -2)
    return tuple(Coord(a, b) for a in steps for b in steps if abs(a) != abs(b))


KNIGHT_MOVES: Tuple[Coord, ...] = generate_knight_moves()
ORIGIN = Coord(0, 0)
