import argparse
import sys
import time
from typing import Callable, TextIO

from loguru import logger

from .config import LifeConfig, configure_logging, load_config
from .errors import InvalidGridConfig
from .grid import Grid
from .lcg import Lcg

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"


def simulate(
    grid: Grid,
    interval: float = 0.1,
    generations: int | None = None,
    out: TextIO | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Render, step and pause until `generations` steps are done (or forever).

    Returns the number of steps taken. The cursor is restored on exit,
    including when the loop is interrupted.
    """
    out = out or sys.stdout
    steps = 0
    out.write(HIDE_CURSOR)
    try:
        while generations is None or steps < generations:
            out.write(grid.render() + "\n")
            out.flush()
            grid.step()
            steps += 1
            sleep(interval)
            out.write(CLEAR_SCREEN)
    finally:
        out.write(SHOW_CURSOR)
        out.flush()
        logger.debug(f"Simulation stopped after {steps} generations")
    return steps


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Conway's Game of Life on a toroidal grid",
    )
    parser.add_argument("--config", "-c", help="TOML file with a [life] table")
    parser.add_argument("--width", type=int, help="Grid width, 1-255 (default: 15)")
    parser.add_argument("--height", type=int, help="Grid height, 1-255 (default: 15)")
    parser.add_argument("--cells", type=int, help="Random live cells to place (default: 100)")
    parser.add_argument("--seed", type=int, help="LCG seed (default: current time)")
    parser.add_argument("--interval", type=float, help="Seconds between frames (default: 0.1)")
    parser.add_argument("--generations", "-n", type=int, help="Stop after N generations")
    parser.add_argument("--log-level", help="stderr log level (default: WARNING)")
    parser.add_argument("--log-file", help="Also log at DEBUG to this file")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        base = load_config(args.config) if args.config else LifeConfig()
        cfg = base.merged(
            width=args.width,
            height=args.height,
            cells=args.cells,
            seed=args.seed,
            interval=args.interval,
            generations=args.generations,
            log_level=args.log_level,
            log_file=args.log_file,
        ).validate()
    except InvalidGridConfig as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    configure_logging(cfg.log_level, cfg.log_file)

    rng = Lcg.from_timestamp() if cfg.seed is None else Lcg(cfg.seed)
    logger.info(f"Starting {cfg.width}×{cfg.height} grid, cells={cfg.cells}, {rng!r}")
    grid = Grid.random(cfg.width, cfg.height, rng, cfg.cells)

    try:
        simulate(grid, cfg.interval, cfg.generations)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
