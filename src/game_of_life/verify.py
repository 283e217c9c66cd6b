#!/usr/bin/env python3
"""
Grid Engine Correctness Verification

Runs the pure-Python Grid and the NumPy reference transition from the same
seeded start and checks that both reach an identical final state.

Usage:
    life-verify                      # 64×64, 100 generations, seed 42
    life-verify --generations 500
    life-verify --width 32 --height 16 --cells 200 --seed 7
"""

import argparse
import sys

import numpy as np
from loguru import logger

from . import grid_np
from .config import configure_logging
from .errors import InvalidGridConfig
from .grid import Grid, check_dimensions

# Configuration
WIDTH = 64
HEIGHT = 64
CELLS = 1500
GENERATIONS = 100
SEED = 42


def trunc(s: str, n: int = 16) -> str:
    return s[:n] + "..." + s[-n:] if len(s) > n * 2 + 3 else s


class VerificationRunner:
    def __init__(
        self,
        width: int = WIDTH,
        height: int = HEIGHT,
        seed: int = SEED,
        cells: int = CELLS,
        generations: int = GENERATIONS,
    ):
        check_dimensions(width, height)
        if generations < 0:
            raise InvalidGridConfig(f"generations must be non-negative, got {generations}")
        self.width = width
        self.height = height
        self.seed = seed
        self.cells = cells
        self.generations = generations
        self.fingerprints: dict[str, str] = {}
        self.final_states: dict[str, np.ndarray] = {}

    def run_grid(self) -> None:
        grid = Grid.from_seed(self.width, self.height, self.seed, self.cells)
        for _ in range(self.generations):
            grid.step()
        self.fingerprints["Pure Python"] = grid.fingerprint()
        self.final_states["Pure Python"] = grid.to_array()
        logger.info(f"Pure Python: {grid!r}")

    def run_numpy(self) -> None:
        cells = Grid.from_seed(self.width, self.height, self.seed, self.cells).to_array()
        for _ in range(self.generations):
            cells = grid_np.evolve(cells)
        self.fingerprints["NumPy"] = grid_np.fingerprint(cells)
        self.final_states["NumPy"] = cells
        logger.info(f"NumPy: alive={int(cells.sum())}")

    def compare_all(self) -> bool:
        """Compare all fingerprints against the first one recorded."""
        if not self.fingerprints:
            logger.warning("No fingerprints to verify")
            return False

        ref_name = next(iter(self.fingerprints))
        ref_fp = self.fingerprints[ref_name]
        logger.info(f"Reference: {ref_name}: {trunc(ref_fp)}")

        all_match = True
        for name, fp in self.fingerprints.items():
            if name == ref_name:
                continue
            if fp == ref_fp:
                logger.info(f"{name}: fingerprint matches reference")
                continue
            all_match = False
            diff = np.argwhere(self.final_states[name] != self.final_states[ref_name])
            if len(diff):
                y, x = diff[0]
                logger.error(f"{name}: fingerprint mismatch, first difference at ({x}, {y})")
            else:
                logger.error(f"{name}: fingerprint mismatch {trunc(fp)}")
        return all_match

    def run(self) -> bool:
        logger.info(
            f"Verifying {self.width}×{self.height} grid, seed={self.seed}, "
            f"cells={self.cells}, generations={self.generations}"
        )
        self.run_grid()
        self.run_numpy()
        return self.compare_all()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Verify the Grid engine against the NumPy reference",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=WIDTH, help=f"Grid width (default: {WIDTH})")
    parser.add_argument("--height", type=int, default=HEIGHT, help=f"Grid height (default: {HEIGHT})")
    parser.add_argument("--cells", type=int, default=CELLS, help=f"Random live cells (default: {CELLS})")
    parser.add_argument("--seed", type=int, default=SEED, help=f"LCG seed (default: {SEED})")
    parser.add_argument(
        "--generations", type=int, default=GENERATIONS, help=f"Number of generations (default: {GENERATIONS})"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else "INFO")

    try:
        runner = VerificationRunner(args.width, args.height, args.seed, args.cells, args.generations)
        success = runner.run()
    except InvalidGridConfig as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    if success:
        logger.info("Grid engine matches the NumPy reference")
    else:
        logger.error("Correctness verification failed")
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
