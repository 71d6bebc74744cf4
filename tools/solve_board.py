"""
Headless solver for saved boards.

Solves a board saved as text (BoardState.to_text format) or a directory of
captures saved by the worker in debug mode, and prints the moves.

Usage:
    python tools/solve_board.py boards/game1.txt
    python tools/solve_board.py debug/captures_20240101_120000 --strategy iterative
"""

import sys
import logging
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sigmar.solver import (
    LoggingObserver,
    SearchObserver,
    SolutionContext,
    create_strategy,
    get_default_strategy_name,
    get_strategy_names,
    is_valid_solution,
)
from sigmar.vision import (
    BoardReader,
    FileBoardReader,
    HighlightBoardReader,
    ReplayCapture,
)

logger = logging.getLogger("solve_board")


def make_reader(path: Path) -> BoardReader:
    """Pick a reader for a board file or a capture directory."""
    if path.is_dir():
        replay = ReplayCapture(path)
        return HighlightBoardReader(replay, replay, highlight_delay=0.0, validate=False)
    return FileBoardReader(path)


def parse_args():
    parser = argparse.ArgumentParser(description="Solve a saved Sigmar's Garden board")
    parser.add_argument("board", type=Path, help="Board text file or capture directory")
    parser.add_argument(
        "--strategy", "-s",
        default=get_default_strategy_name(),
        choices=get_strategy_names(),
        help="Search strategy"
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Give up after this many seconds"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every search step"
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    result = make_reader(args.board).read()
    board = result.board
    print(board.pretty())
    print()

    if not result.is_valid:
        logger.warning(f"Not a fresh deal: {', '.join(result.errors)}")

    strategy = create_strategy(args.strategy)
    context = SolutionContext(
        board=board,
        timeout_sec=args.timeout,
        observer=LoggingObserver() if args.verbose else SearchObserver(),
    )
    solution = strategy.solve(context)
    metrics = solution.metrics

    print(f"Strategy:  {metrics.strategy_name}")
    print(f"States:    {metrics.states_explored} ({metrics.pruned_branches} pruned, max depth {metrics.max_depth})")
    print(f"Time:      {metrics.computation_time_ms:.1f}ms")

    if solution.was_cancelled:
        print("Search timed out")
        return 2
    if not solution.is_solved:
        print("No solution")
        return 1

    print(f"Solution:  {solution.move_count} moves")
    for i, move in enumerate(solution.moves, start=1):
        tiles = "+".join(board.get_cell(x, y).name.title() for x, y in move.cells)
        print(f"  {i:2d}. {move.first} -> {move.second}  {tiles}")

    if not is_valid_solution(board, solution.moves):
        logger.error("Solution failed replay check")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
