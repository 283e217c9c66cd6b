"""
grid_np.py — Vectorized reference transition using NumPy

Operates on a (height, width) uint8 array of 0/1 cells. Used to cross-check
the pure-Python Grid; it is not part of the engine itself.
"""

import hashlib

import numpy as np


def evolve(cells: np.ndarray) -> np.ndarray:
    # np.roll gives the toroidal wrap-around for free
    neighbors = sum(
        np.roll(np.roll(cells, dy, 0), dx, 1)
        for dy in (-1, 0, 1)
        for dx in (-1, 0, 1)
        if not (dy == 0 and dx == 0)
    )
    alive = (cells == 1) & ((neighbors == 2) | (neighbors == 3))
    born = (cells == 0) & (neighbors == 3)
    return (alive | born).astype(np.uint8)


def fingerprint(cells: np.ndarray) -> str:
    flat_str = "".join("1" if cell else "0" for cell in cells.flat)
    return hashlib.sha256(flat_str.encode("utf-8")).hexdigest()
