"""Exceptions raised while loading a board."""

from typing import Optional, Union
from pathlib import Path


class LifeGameError(Exception):
    """Base class for LifeGame errors."""


class NotFoundError(LifeGameError, FileNotFoundError):
    """Raised when the input file cannot be opened for reading."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = str(path)
        super().__init__(f"File does not exist: {self.path}")


class FormatError(LifeGameError, ValueError):
    """Raised when the input file does not follow the board grammar.

    Attributes:
        line_number: 1-based line where the problem was found
        character: Offending character, or None for a line length mismatch
    """

    def __init__(self, message: str, line_number: int, character: Optional[str] = None) -> None:
        super().__init__(message)
        self.line_number = line_number
        self.character = character
