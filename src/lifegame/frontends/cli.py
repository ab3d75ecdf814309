"""Command-line interface for LifeGame."""

import argparse
import logging
import sys
import time
from typing import Optional, Tuple, List

from .. import __version__
from ..core.board import Board, DEFAULT_OUTPUT_DIR
from ..core.errors import LifeGameError

# Above this many snapshots in --all mode the user is asked to confirm
CONFIRMATION_THRESHOLD = 20


class CLILifeGame:
    """Command-line interface for running LifeGame simulations."""

    def run_simulation(
        self,
        input_file: str,
        iterations: int,
        save_all: bool = False,
        no_limit: bool = False,
        output_dir: Optional[str] = None,
    ) -> Tuple[int, str, dict]:
        """Load a board from a file and iterate it.

        Args:
            input_file: Path to the input board
            iterations: Number of generations to compute
            save_all: Save a snapshot for every generation
            no_limit: Remove the board size limit
            output_dir: Directory receiving snapshots

        Returns:
            Tuple of (final_iteration, finish_reason, statistics)

        Raises:
            NotFoundError: If the input file cannot be opened
            FormatError: If the input file is not a valid board
        """
        board = Board(input_file, no_limit=no_limit, output_dir=output_dir)
        initial_population = board.population

        start_time = time.time()
        final_iteration, reason = board.iterate(iterations, save_all)
        duration = time.time() - start_time

        stats = board.get_statistics()
        stats["initial_population"] = initial_population
        stats["duration_seconds"] = duration
        stats["output_dir"] = str(board.output_dir)

        return final_iteration, reason, stats


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="lifegame",
        description="Run Conway's Game of Life on a board read from a text file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input files contain one board row per line, '*' for live cells and '_' for
dead cells. All lines must have the same length.

Examples:
  # Run a glider for 10 generations, save the last one
  lifegame --input glider.txt --iterations 10

  # Save every generation
  lifegame --input glider.txt --iterations 10 --all

  # Let the board grow past 256x256 cells
  lifegame --input gun.txt --iterations 5000 --no-limit
        """,
    )

    parser.add_argument("--input", type=str, required=True, help="Path to the input file")

    parser.add_argument(
        "--iterations",
        type=int,
        required=True,
        help="Number of generations to compute",
    )

    parser.add_argument(
        "--all",
        action="store_true",
        dest="save_all",
        help="Create one output file for each iteration instead of only the final one",
    )

    parser.add_argument(
        "--no-limit",
        action="store_true",
        help="Remove the limit of 256x256 on the board size. Use with care, "
        "large boards use a lot of memory and disk space",
    )

    parser.add_argument(
        "--output-dir",
        type=str,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory receiving output files (default: {DEFAULT_OUTPUT_DIR})",
    )

    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Do not ask for confirmation before creating many output files",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print debug information",
    )

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.iterations < 0:
        errors.append("Iterations must be a positive number")

    if not args.input:
        errors.append("An input file must be provided")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def confirm_output_count(iterations: int) -> bool:
    """Ask the user whether writing one file per iteration is fine.

    Returns:
        True if the answer starts with "y"
    """
    try:
        answer = input(
            f"You are about to generate {iterations} files, are you sure you want to continue ? (y/n) "
        )
    except EOFError:
        return False
    return answer.strip().lower().startswith("y")


def format_finish_reason(reason: str) -> str:
    """Format the iteration finish reason for display."""
    if reason == "completed":
        return "All iterations computed"
    elif reason == "extinction":
        return "Board became empty"
    elif reason == "size_limit":
        return "Board size limit reached"
    elif reason == "save_failed":
        return "Output file could not be written"
    else:
        return reason


def print_results(final_iteration: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print a summary of a finished run."""
    print(f"\nStopped at iteration {final_iteration}")
    print(f"Finish reason: {format_finish_reason(reason)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Board size: {stats['width']}x{stats['height']}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
        print(f"  Output directory: {stats['output_dir']}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Args:
        argv: Arguments to parse, defaults to sys.argv[1:]

    Returns:
        Exit code (0 for success, 1 for error)
    """
    print(f"Welcome to LifeGame {__version__}")

    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not validate_args(args):
        return 1

    if args.save_all and args.iterations > CONFIRMATION_THRESHOLD and not args.yes:
        if not confirm_output_count(args.iterations):
            print("Aborting...")
            return 0

    cli = CLILifeGame()

    try:
        final_iteration, reason, stats = cli.run_simulation(
            input_file=args.input,
            iterations=args.iterations,
            save_all=args.save_all,
            no_limit=args.no_limit,
            output_dir=args.output_dir,
        )
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except LifeGameError as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    print_results(final_iteration, reason, stats, args.verbose)

    if reason == "save_failed":
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
