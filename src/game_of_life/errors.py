"""Exceptions raised by the Game of Life package."""


class GameOfLifeError(Exception):
    """Base class for all package errors."""


class InvalidGridConfig(GameOfLifeError, ValueError):
    """Raised when grid dimensions or run settings are out of range."""
