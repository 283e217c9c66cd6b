"""Run settings for the terminal driver, loaded from TOML and the CLI."""

import numbers
import sys
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path

from loguru import logger

from .errors import InvalidGridConfig
from .grid import check_dimensions

CONFIG_TABLE = "life"


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class LifeConfig:
    width: int = 15
    height: int = 15
    cells: int = 100
    seed: int | None = None
    interval: float = 0.1
    generations: int | None = None
    log_level: str = "WARNING"
    log_file: str | None = None

    def merged(self, **overrides) -> "LifeConfig":
        """Return a copy with every non-None override applied."""
        given = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **given)

    def validate(self) -> "LifeConfig":
        check_dimensions(self.width, self.height)
        if not _is_int(self.cells):
            raise InvalidGridConfig(f"cells must be an integer, got {self.cells!r}")
        if not isinstance(self.interval, numbers.Real) or isinstance(self.interval, bool):
            raise InvalidGridConfig(f"interval must be a number, got {self.interval!r}")
        if self.seed is not None and not _is_int(self.seed):
            raise InvalidGridConfig(f"seed must be an integer, got {self.seed!r}")
        if self.generations is not None and not _is_int(self.generations):
            raise InvalidGridConfig(
                f"generations must be an integer, got {self.generations!r}"
            )
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise InvalidGridConfig(f"log_file must be a path, got {self.log_file!r}")
        try:
            logger.level(self.log_level)
        except (TypeError, ValueError) as e:
            raise InvalidGridConfig(f"unknown log_level {self.log_level!r}") from e
        if self.cells < 0:
            raise InvalidGridConfig(f"cells must be non-negative, got {self.cells}")
        if self.interval <= 0:
            raise InvalidGridConfig(f"interval must be positive, got {self.interval}")
        if self.generations is not None and self.generations < 0:
            raise InvalidGridConfig(
                f"generations must be non-negative, got {self.generations}"
            )
        return self


def load_config(path: str | Path) -> LifeConfig:
    """Read the [life] table of a TOML file."""
    path = Path(path)
    try:
        with open(path, "rb") as f:
            cfg = tomllib.load(f)
    except OSError as e:
        raise InvalidGridConfig(f"cannot read config {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise InvalidGridConfig(f"malformed config {path}: {e}") from e

    table = cfg.get(CONFIG_TABLE, {})
    known = {f.name for f in fields(LifeConfig)}
    unknown = sorted(set(table) - known)
    if unknown:
        raise InvalidGridConfig(f"unknown keys in [{CONFIG_TABLE}]: {', '.join(unknown)}")

    logger.debug(f"Loaded config from {path}: {table}")
    return LifeConfig(**table)


def configure_logging(level: str = "WARNING", log_file: str | Path | None = None) -> None:
    logger.remove()  # Remove default handler
    logger.enable("game_of_life")
    logger.add(sys.stderr, level=level)
    if log_file is not None:
        logger.add(log_file, rotation="10 MB", retention="30 days", level="DEBUG")
