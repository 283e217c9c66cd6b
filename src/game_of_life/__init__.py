"""Seeded Conway's Game of Life on a fixed-size toroidal grid."""

from loguru import logger

from .coord import Coord
from .errors import GameOfLifeError, InvalidGridConfig
from .grid import CellStatus, Grid
from .lcg import Lcg

# Silent when used as a library; configure_logging() turns it back on
logger.disable(__name__)

__all__ = [
    "CellStatus",
    "Coord",
    "GameOfLifeError",
    "Grid",
    "InvalidGridConfig",
    "Lcg",
]
