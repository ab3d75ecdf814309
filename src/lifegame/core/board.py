"""Self-resizing board for Conway's Game of Life."""

from typing import Iterable, Optional, Tuple, Union, Dict, Any
from pathlib import Path
import logging

import numpy as np
import torch
import torch.nn.functional as F

from .errors import FormatError, NotFoundError

_logger = logging.getLogger(__name__)

# Expansion is refused once width * height exceeds this, unless no_limit is set
BOARD_MAX_SIZE = 256 * 256

DEAD_SYMBOL = "_"
ALIVE_SYMBOL = "*"

DEFAULT_OUTPUT_DIR = "lifegame_output"


def parse_lines(lines: Iterable[str]) -> np.ndarray:
    """Parse board rows into a boolean array.

    Args:
        lines: Rows of the board, with or without their line terminator

    Returns:
        Array of shape (height, width), True for live cells

    Raises:
        FormatError: If a row has an unknown character or a different length
            than the first row
    """
    rows = []
    width = None
    for line_number, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")

        if width is None:
            width = len(line)
        elif len(line) != width:
            raise FormatError(
                f"Input file has lines with different lengths: line {line_number}",
                line_number,
            )

        row = []
        for status in line:
            if status == DEAD_SYMBOL:
                row.append(False)
            elif status == ALIVE_SYMBOL:
                row.append(True)
            else:
                raise FormatError(
                    f"Found unknown cell status: {status} (line {line_number})",
                    line_number,
                    status,
                )
        rows.append(row)

    return np.array(rows, dtype=bool).reshape(len(rows), width or 0)


def prepare_output_dir(output_dir: Optional[Union[str, Path]] = None) -> Path:
    """Create the snapshot directory if needed and return its absolute path.

    Args:
        output_dir: Target directory, relative paths resolve against the
            working directory. Defaults to DEFAULT_OUTPUT_DIR.
    """
    path = Path(output_dir if output_dir is not None else DEFAULT_OUTPUT_DIR).absolute()
    path.mkdir(parents=True, exist_ok=True)
    return path


class Board:
    """Game of Life board that grows and shrinks around its live cells.

    Cells are stored in a (height, width) numpy boolean array. Before each
    generation the board gains a dead ring on every side so that births at
    the edge are not clipped, and afterwards it is cropped back to the
    bounding box of its live cells.
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        no_limit: bool = False,
        output_dir: Optional[Union[str, Path]] = None,
    ) -> None:
        """Load a board from a text file.

        Args:
            filepath: Path to the input file
            no_limit: Remove the BOARD_MAX_SIZE limit on expansion
            output_dir: Directory receiving snapshots (created if missing)

        Raises:
            NotFoundError: If the file cannot be opened
            FormatError: If the file content is not a valid board
        """
        path = Path(filepath)
        self.no_limit = no_limit
        self.input_name = path.stem

        # Undecodable bytes become U+FFFD and are rejected as unknown cells
        try:
            with open(path, "r", encoding="ascii", errors="replace") as f:
                self._cells = parse_lines(f)
        except OSError as e:
            raise NotFoundError(path) from e

        self.shrink()
        self.output_dir = prepare_output_dir(output_dir)

        # Neighbour counting kernel, reused every generation
        self._kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

        _logger.debug("Loaded %s as a %dx%d board", path, self.width, self.height)

    @property
    def cells(self) -> np.ndarray:
        """Get the current cell array, indexed [y, x]."""
        return self._cells

    @property
    def width(self) -> int:
        return self._cells.shape[1]

    @property
    def height(self) -> int:
        return self._cells.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        """Get board dimensions as (width, height)."""
        return (self.width, self.height)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def size_limit_enabled(self) -> bool:
        return not self.no_limit

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._cells))

    def expand(self) -> bool:
        """Add a ring of dead cells around the board.

        An empty board becomes a single dead cell instead.

        Returns:
            False if the size limit was already exceeded, True otherwise
        """
        # Checked against the size before expansion, so the limit can be
        # overshot by one ring
        if self.size_limit_enabled and self.width * self.height > BOARD_MAX_SIZE:
            return False

        if self.is_empty:
            self._cells = np.zeros((1, 1), dtype=bool)
            return True

        self._cells = np.pad(self._cells, 1, mode="constant", constant_values=False)
        _logger.debug("Expanded board to %dx%d", self.width, self.height)
        return True

    def shrink(self) -> None:
        """Crop the board to the bounding box of its live cells."""
        live_rows = np.flatnonzero(self._cells.any(axis=1))
        if live_rows.size == 0:
            self._cells = np.zeros((0, 0), dtype=bool)
            return

        live_cols = np.flatnonzero(self._cells.any(axis=0))
        self._cells = self._cells[live_rows[0] : live_rows[-1] + 1, live_cols[0] : live_cols[-1] + 1].copy()

    def count_alive_neighbours(self, x: int, y: int) -> int:
        """Count living neighbours of a position.

        Args:
            x: Column coordinate, may lie outside the board
            y: Row coordinate, may lie outside the board

        Returns:
            Number of living neighbours (0-8)
        """
        count = 0
        for dx in [-1, 0, 1]:
            for dy in [-1, 0, 1]:
                if dx == 0 and dy == 0:
                    continue

                nx, ny = x + dx, y + dy
                if 0 <= nx < self.width and 0 <= ny < self.height:
                    count += int(self._cells[ny, nx])

        return count

    def count_all_neighbours(self) -> np.ndarray:
        """Count neighbours of every cell with a zero-padded convolution.

        Returns:
            (height, width) array with the neighbour count of each cell
        """
        if self.is_empty:
            return np.zeros(self._cells.shape, dtype=np.int8)

        cells = torch.from_numpy(self._cells.astype(np.float32)).unsqueeze(0).unsqueeze(0)
        neighbours = F.conv2d(cells, self._kernel, padding=1)
        return neighbours[0, 0].numpy().astype(np.int8)

    def step(self) -> bool:
        """Advance the board by one generation.

        Returns:
            False if the board could not be expanded (size limit reached), in
            which case it is left unchanged
        """
        if not self.expand():
            return False

        neighbours = self.count_all_neighbours()
        cells = self._cells

        survive = cells & ((neighbours == 2) | (neighbours == 3))
        birth = ~cells & (neighbours == 3)

        # New buffer, the previous generation is never written to
        self._cells = survive | birth

        self.shrink()
        return True

    def iterate(self, n_iter: int = 1, save_all: bool = False, current_iter: int = 0) -> Tuple[int, str]:
        """Run the board up to generation n_iter, saving snapshots on the way.

        The final generation is always saved; with save_all every generation
        from current_iter on is saved.

        Args:
            n_iter: Generation to stop at
            save_all: Save a snapshot for every generation
            current_iter: Generation the board is currently at

        Returns:
            Tuple of (final_iteration, reason) where reason is one of
            'completed', 'extinction', 'size_limit', 'save_failed'
        """
        iteration = current_iter
        while True:
            print(f"Iteration: {iteration}\tBoard size: {self.width}*{self.height}")

            # Nothing can be born on an empty board
            if self.is_empty:
                print("Board is empty, stopping iteration!")
                return iteration, "extinction"

            # A run whose output cannot be written is not worth continuing
            if save_all or iteration == n_iter:
                if not self.save(self.snapshot_name(iteration)):
                    print("Could not save file !")
                    print("Aborting...")
                    return iteration, "save_failed"

            if iteration >= n_iter:
                print("Iteration over!")
                return iteration, "completed"

            if not self.step():
                print("Board is too big, stopping iteration!")
                return iteration, "size_limit"

            iteration += 1

    def to_string(self) -> str:
        """Serialize the board, one line per row with '*' alive and '_' dead."""
        return "".join(
            "".join(ALIVE_SYMBOL if alive else DEAD_SYMBOL for alive in row) + "\n" for row in self._cells
        )

    def snapshot_name(self, iteration: int) -> str:
        return f"{self.input_name}_{iteration}.txt"

    def save(self, name: str) -> bool:
        """Write the board to a file in the output directory.

        Args:
            name: File name inside output_dir

        Returns:
            True if the file was written, False otherwise
        """
        filepath = self.output_dir / name
        try:
            with open(filepath, "w", encoding="ascii") as f:
                f.write(self.to_string())
        except OSError as e:
            _logger.warning("Failed to save board to %s: %s", filepath, e)
            return False

        _logger.debug("Saved board to %s", filepath)
        return True

    def get_statistics(self) -> Dict[str, Any]:
        """Get a summary of the current board.

        Returns:
            Dictionary with size and population figures
        """
        area = self.width * self.height
        return {
            "width": self.width,
            "height": self.height,
            "population": self.population,
            "population_density": self.population / area if area else 0.0,
            "size_limit_enabled": self.size_limit_enabled,
        }

    def __eq__(self, other: object) -> bool:
        """Check if two boards hold the same cells."""
        if not isinstance(other, Board):
            return False
        return np.array_equal(self._cells, other._cells)

    def __str__(self) -> str:
        return self.to_string()
