"""Core board logic."""

from .board import Board, parse_lines, prepare_output_dir, BOARD_MAX_SIZE
from .errors import LifeGameError, NotFoundError, FormatError

__all__ = [
    "Board",
    "parse_lines",
    "prepare_output_dir",
    "BOARD_MAX_SIZE",
    "LifeGameError",
    "NotFoundError",
    "FormatError",
]
