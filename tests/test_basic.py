"""Basic tests for the lifegame package."""

from pathlib import Path

import lifegame
from lifegame import Board, FormatError, NotFoundError, LifeGameError

INPUT_DIR = Path(__file__).parent / "input_files"


def test_version():
    assert lifegame.__version__ == "0.1.0"


def test_error_hierarchy():
    """Test that parse errors share a base class."""
    assert issubclass(NotFoundError, LifeGameError)
    assert issubclass(FormatError, LifeGameError)
    assert issubclass(FormatError, ValueError)


def test_board_creation(tmp_path):
    """Test basic board loading and one generation."""
    board = Board(INPUT_DIR / "glider.txt", output_dir=tmp_path)
    assert board.width == 3
    assert board.height == 3
    assert board.population == 5

    assert board.step() is True
    assert board.population == 5
