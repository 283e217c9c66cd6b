import hashlib
import numbers
from enum import Enum
from typing import Iterable, List, Tuple

import numpy as np
from loguru import logger

from .coord import Coord
from .errors import InvalidGridConfig
from .lcg import Lcg

MAX_SIDE = 255


class CellStatus(Enum):
    ALIVE = 1
    DEAD = 0


def _as_coord(coord: "Coord | Tuple[int, int]") -> Coord:
    return coord if isinstance(coord, Coord) else Coord(*coord)


def check_dimensions(width: int, height: int) -> None:
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidGridConfig(f"{name} must be an integer, got {value!r}")
        if not 1 <= value <= MAX_SIDE:
            raise InvalidGridConfig(
                f"{name} must be between 1 and {MAX_SIDE}, got {value}"
            )


def next_status(current: CellStatus, live_neighbors: int) -> CellStatus:
    if current is CellStatus.ALIVE:
        # Underpopulation below 2, overpopulation above 3
        return CellStatus.ALIVE if live_neighbors in (2, 3) else CellStatus.DEAD
    if live_neighbors == 3:
        # Reproduction
        return CellStatus.ALIVE
    return current


class Grid:
    """
    Toroidal Game of Life grid.

    Cells are stored row-major in a flat list, indexed by `y * width + x`
    after wrapping. `step()` writes the next generation into a scratch
    buffer of the same shape and then swaps it in, so neighbour counts are
    always taken from the previous generation.
    """

    def __init__(self, width: int, height: int, cells: List[CellStatus] | None = None):
        check_dimensions(width, height)
        width, height = int(width), int(height)
        size = width * height
        if cells is None:
            cells = [CellStatus.DEAD] * size
        elif len(cells) != size:
            raise InvalidGridConfig(
                f"expected {size} cells for {width}×{height}, got {len(cells)}"
            )
        self._width = width
        self._height = height
        self._cells = list(cells)
        self._scratch = [CellStatus.DEAD] * size
        self._neighbor_index = self._build_neighbor_index()
        self.generation = 0

    @classmethod
    def from_iterable(
        cls, width: int, height: int, live_coords: Iterable["Coord | Tuple[int, int]"]
    ) -> "Grid":
        grid = cls(width, height)
        width, height = grid.width, grid.height
        for coord in live_coords:
            grid._cells[_as_coord(coord).index_in(width, height)] = CellStatus.ALIVE
        logger.debug(f"Built {width}×{height} grid with {grid.population()} live cells")
        return grid

    @classmethod
    def random(cls, width: int, height: int, rng: Lcg, cells: int) -> "Grid":
        if cells < 0:
            raise InvalidGridConfig(f"cells must be non-negative, got {cells}")
        return cls.from_iterable(width, height, Coord.random_coords(rng, cells))

    @classmethod
    def from_seed(cls, width: int, height: int, seed: int, cells: int) -> "Grid":
        logger.debug(f"Seeding {width}×{height} grid: seed={seed}, cells={cells}")
        return cls.random(width, height, Lcg(seed), cells)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _build_neighbor_index(self) -> List[Tuple[int, ...]]:
        # Wrapped neighbour indices only depend on the dimensions
        return [
            tuple(
                n.index_in(self._width, self._height)
                for n in Coord(x, y).neighbors()
            )
            for y in range(self._height)
            for x in range(self._width)
        ]

    def is_alive(self, coord: "Coord | Tuple[int, int]") -> bool:
        idx = _as_coord(coord).index_in(self._width, self._height)
        return self._cells[idx] is CellStatus.ALIVE

    def step(self) -> None:
        cells = self._cells
        scratch = self._scratch
        for idx, neighbors in enumerate(self._neighbor_index):
            live = sum(1 for n in neighbors if cells[n] is CellStatus.ALIVE)
            scratch[idx] = next_status(cells[idx], live)
        self._cells, self._scratch = scratch, cells
        self.generation += 1
        logger.opt(lazy=True).trace(
            "Generation {}: {} alive", lambda: self.generation, self.population
        )

    def population(self) -> int:
        return sum(1 for cell in self._cells if cell is CellStatus.ALIVE)

    def live_cells(self) -> List[Coord]:
        return [
            Coord(idx % self._width, idx // self._width)
            for idx, cell in enumerate(self._cells)
            if cell is CellStatus.ALIVE
        ]

    def to_array(self) -> np.ndarray:
        flat = np.fromiter(
            (cell.value for cell in self._cells), dtype=np.uint8, count=len(self._cells)
        )
        return flat.reshape(self._height, self._width)

    def fingerprint(self) -> str:
        """Return SHA-256 hex digest of the grid as a flat string of 0s and 1s"""
        flat_str = "".join(str(cell.value) for cell in self._cells)
        return hashlib.sha256(flat_str.encode("utf-8")).hexdigest()

    def render(self) -> str:
        """Bordered text frame: `o` for live cells, blank for dead ones."""
        border = " " + "# " * (self._width + 1)
        lines = [border]
        for y in range(self._height):
            row = self._cells[y * self._width : (y + 1) * self._width]
            body = "".join("o " if cell is CellStatus.ALIVE else "  " for cell in row)
            lines.append(f"# {body}#")
        lines.append(border)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._cells == other._cells
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Grid({self._width}×{self._height}, generation={self.generation}, "
            f"alive={self.population()})"
        )
