#!/usr/bin/env python3
"""
Example usage of the lifegame package.
"""

import tempfile
from pathlib import Path

from lifegame import Board


def main():
    """Run a glider for a few generations from a temporary input file."""
    with tempfile.TemporaryDirectory() as tmp:
        input_file = Path(tmp) / "glider.txt"
        input_file.write_text("__*\n*_*\n_**\n")

        board = Board(input_file, output_dir=Path(tmp) / "output")

        print("Initial state:")
        print(board)

        # Run 4 generations, saving each one
        final_iteration, reason = board.iterate(4, save_all=True)
        print(f"Stopped at iteration {final_iteration} ({reason})")
        print(board)

        for snapshot in sorted(board.output_dir.iterdir()):
            print(f"  {snapshot.name}")

    stats = board.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
