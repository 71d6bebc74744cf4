"""
Backtracking Strategy - Exhaustive depth-first search, best moves first.
"""

import time
from typing import List, Optional

from ..base import SolverStrategy
from ..board import BoardState
from ..move import Move
from ..context import SolutionContext
from ..rules import is_dead_end
from ..solution import Solution, SolutionMetrics
from ..factory import register_strategy


class SearchCancelled(Exception):
    """Raised inside the recursion when the context asks to stop."""

    def __init__(self, depth: int):
        super().__init__(f"cancelled at depth {depth}")
        self.depth = depth


@register_strategy
class BacktrackingStrategy(SolverStrategy):
    """
    Recursive depth-first search over board states.

    At each node the legal moves are tried in priority order. Each child
    board is a new value, so branches never share state and no undo is
    needed. When a child fails the dead-end test the node gives up without
    trying its remaining moves, and the parent continues with its own next
    candidate. The first complete sequence found is returned; no attempt is
    made to find a shorter one, and no position is cached.

    Recursion depth is bounded by half the number of marbles (28 for a
    fresh board).
    """
    name = "backtracking"
    description = "Backtracking (exhaustive) - Depth-first, best moves first"

    def solve(self, context: SolutionContext) -> Solution:
        """
        Search for a move sequence that empties the board.

        Args:
            context: Solution context with board, cancellation and observer

        Returns:
            Solution; is_solved is False when no sequence exists
        """
        start_time = time.perf_counter()
        board = context.board
        observer = context.observer
        metrics = SolutionMetrics()
        self._initial_marbles = board.count_marbles()

        observer.on_search_started(board)

        if board.is_empty():
            observer.on_solution_found([])
            return self._build_solution(board, [], metrics, start_time)

        if is_dead_end(board):
            metrics.pruned_branches += 1
            observer.on_dead_end(board, 0)
            observer.on_search_exhausted()
            return self._build_solution(board, None, metrics, start_time)

        try:
            moves = self._search(board, context, metrics, 0)
        except SearchCancelled as e:
            observer.on_cancelled(e.depth)
            return self._build_solution(board, None, metrics, start_time, was_cancelled=True)

        if moves is None:
            observer.on_search_exhausted()
        else:
            observer.on_solution_found(moves)
        return self._build_solution(board, moves, metrics, start_time)

    def _search(self, board: BoardState, context: SolutionContext,
                metrics: SolutionMetrics, depth: int) -> Optional[List[Move]]:
        """Solve one node; returns the remaining moves or None."""
        if self._check_cancelled(context):
            raise SearchCancelled(depth)

        for move in self.find_all_valid_moves(board):
            child = board.apply_move(move)
            metrics.states_explored += 1
            self._note_depth(context, metrics, depth + 1, self._initial_marbles)
            context.observer.on_move_applied(move, depth)

            if child.is_empty():
                return [move]

            if is_dead_end(child):
                # A lost child fails this whole node; the caller moves on
                metrics.pruned_branches += 1
                context.observer.on_dead_end(child, depth + 1)
                return None

            rest = self._search(child, context, metrics, depth + 1)
            if rest is not None:
                return [move] + rest

            context.observer.on_backtrack(depth)

        return None
