"""
coord.py — Positions on the unbounded plane and their toroidal mapping

A Coord is never wrapped on construction or translation. Wrapping into
grid bounds only happens when a grid looks a cell up.
"""

from dataclasses import dataclass
from typing import Iterator, List

# Moore neighbourhood: NW, N, NE, W, E, SW, S, SE
NEIGHBOR_OFFSETS = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


def to_i16(value: int) -> int:
    """Truncate an integer to its low 16 bits, read as two's complement."""
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


@dataclass(frozen=True, slots=True)
class Coord:
    x: int
    y: int

    @classmethod
    def from_u32_pair(cls, x: int, y: int) -> "Coord":
        return cls(to_i16(x), to_i16(y))

    @classmethod
    def random_coords(cls, rng: Iterator[int], take: int) -> List["Coord"]:
        """Draw `take` coordinates, x before y, from a u32 stream."""
        coords = []
        for _ in range(take):
            x = next(rng)
            y = next(rng)
            coords.append(cls.from_u32_pair(x, y))
        return coords

    def step(self, dx: int, dy: int) -> "Coord":
        return Coord(self.x + dx, self.y + dy)

    def neighbors(self) -> List["Coord"]:
        return [self.step(dx, dy) for dx, dy in NEIGHBOR_OFFSETS]

    def wrap(self, width: int, height: int) -> "Coord":
        # Python's % with a positive divisor is already Euclidean
        return Coord(self.x % width, self.y % height)

    def index_in(self, width: int, height: int) -> int:
        wrapped = self.wrap(width, height)
        return wrapped.y * width + wrapped.x
