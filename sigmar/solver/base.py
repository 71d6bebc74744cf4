"""
Base Strategy Module - Abstract base class for solving strategies.
"""

import time
from abc import ABC, abstractmethod
from typing import List, Optional

from .board import BoardState
from .move import Move
from .moves import ordered_moves
from .context import SolutionContext
from .solution import Solution, SolutionMetrics, replay


class SolverStrategy(ABC):
    """
    Abstract base class for all solving strategies.

    Subclasses must implement the solve() method and define
    name and description class attributes.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description for UI
    """
    name: str = "base"
    description: str = "Base strategy"

    @abstractmethod
    def solve(self, context: SolutionContext) -> Solution:
        """
        Search for a move sequence that empties the board.

        Must periodically check context.is_cancelled() and stop with
        was_cancelled=True if it returns True.

        Args:
            context: Solution context with board, cancellation, observer

        Returns:
            Solution with moves and metrics
        """
        pass

    def find_all_valid_moves(self, board: BoardState) -> List[Move]:
        """
        Find all legal moves on the board, best priority first.

        Args:
            board: Current board state

        Returns:
            List of Move objects
        """
        return ordered_moves(board)

    def _check_cancelled(self, context: SolutionContext) -> bool:
        """Convenience method to check cancellation."""
        return context.is_cancelled()

    def _build_solution(
        self,
        board: BoardState,
        moves: Optional[List[Move]],
        metrics: SolutionMetrics,
        start_time: float,
        was_cancelled: bool = False
    ) -> Solution:
        """Build Solution object from search results."""
        metrics.computation_time_ms = (time.perf_counter() - start_time) * 1000
        metrics.strategy_name = self.name

        if moves is None:
            return Solution(
                was_cancelled=was_cancelled,
                metrics=metrics,
                board_states=[board],
            )

        return Solution(
            moves=list(moves),
            is_solved=True,
            metrics=metrics,
            board_states=replay(board, moves),
        )

    def _note_depth(self, context: SolutionContext, metrics: SolutionMetrics,
                    depth: int, initial_marbles: int) -> None:
        """Track the deepest level reached and report it as progress."""
        if depth <= metrics.max_depth:
            return
        metrics.max_depth = depth
        if initial_marbles > 0:
            cleared = min(initial_marbles, 2 * depth)
            context.report_progress(
                min(0.99, cleared / initial_marbles),
                f"depth {depth}, {metrics.states_explored} states"
            )
