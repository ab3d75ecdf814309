"""LifeGame: Conway's Game of Life on a self-resizing board."""

__version__ = "0.1.0"

from .core.board import Board
from .core.errors import LifeGameError, NotFoundError, FormatError

__all__ = ["Board", "LifeGameError", "NotFoundError", "FormatError"]
