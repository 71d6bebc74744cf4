"""
Solver Package - Search framework for the Sigmar's Garden puzzle.

This package finds a sequence of marble pairs that clears a hexagonal
Sigmar's Garden board. It has no knowledge of the game window: boards come
in as BoardState values and solutions go out as lists of Move coordinates.

Public API:
    - Tile: Marble kinds and the metal sequence
    - BoardState: Immutable board representation
    - Marble, Move: Scanned marble and removal pair
    - Solution, SolutionMetrics: Result of a search
    - SolutionContext: Board, cancellation and observer for a search
    - SearchObserver, LoggingObserver: Search event hooks
    - SolverStrategy: Abstract base for strategies
    - create_strategy(): Factory function
    - get_strategy_names(): List available strategies
    - get_strategy_info(): Get strategy metadata

Usage:
    from sigmar.solver import create_strategy, BoardState, SolutionContext

    board = BoardState.from_text(text)
    context = SolutionContext(board=board)

    strategy = create_strategy("backtracking")
    solution = strategy.solve(context)

    if solution.is_solved:
        for move in solution.moves:
            print(f"Click {move.first} then {move.second}")
"""

# Core data structures
from .tiles import Tile, METAL_SEQUENCE, ELEMENTS, STARTING_COUNTS
from .topology import BOARD_SIZE, DEAD_SPOTS, neighbors, is_valid_coordinate
from .board import BoardState
from .move import Marble, Move
from .solution import Solution, SolutionMetrics, is_valid_solution
from .context import SolutionContext
from .observer import SearchObserver, LoggingObserver, RecordingObserver

# Rules
from .rules import is_playable, playable_marbles, is_dead_end
from .moves import find_moves, ordered_moves

# Strategy framework
from .base import SolverStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    get_default_strategy_name,
    register_strategy,
)

# Import strategies to register them
from . import strategies

__all__ = [
    # Data structures
    "Tile",
    "METAL_SEQUENCE",
    "ELEMENTS",
    "STARTING_COUNTS",
    "BOARD_SIZE",
    "DEAD_SPOTS",
    "neighbors",
    "is_valid_coordinate",
    "BoardState",
    "Marble",
    "Move",
    "Solution",
    "SolutionMetrics",
    "is_valid_solution",
    "SolutionContext",
    "SearchObserver",
    "LoggingObserver",
    "RecordingObserver",
    # Rules
    "is_playable",
    "playable_marbles",
    "is_dead_end",
    "find_moves",
    "ordered_moves",
    # Strategy framework
    "SolverStrategy",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
]
