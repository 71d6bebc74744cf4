"""
Iterative Strategy - Depth-first search driven by an explicit stack.
"""

import time
from typing import Iterator, List, Tuple

from ..base import SolverStrategy
from ..board import BoardState
from ..move import Move
from ..context import SolutionContext
from ..rules import is_dead_end
from ..solution import Solution, SolutionMetrics
from ..factory import register_strategy


@register_strategy
class IterativeStrategy(SolverStrategy):
    """
    Same search as BacktrackingStrategy without Python recursion.

    The stack holds one (board, remaining candidates) frame per level;
    ``path`` holds the move that led to each frame after the root, so
    ``len(path) == len(stack) - 1`` between iterations. Moves are tried in
    the same order and a dead-end child drops its whole frame, so both
    strategies return the same solution.
    """
    name = "iterative"
    description = "Iterative (exhaustive) - Explicit-stack depth-first search"

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
        initial_marbles = board.count_marbles()

        observer.on_search_started(board)

        if board.is_empty():
            observer.on_solution_found([])
            return self._build_solution(board, [], metrics, start_time)

        if is_dead_end(board):
            metrics.pruned_branches += 1
            observer.on_dead_end(board, 0)
            observer.on_search_exhausted()
            return self._build_solution(board, None, metrics, start_time)

        stack: List[Tuple[BoardState, Iterator[Move]]] = [
            (board, iter(self.find_all_valid_moves(board)))
        ]
        path: List[Move] = []

        while stack:
            depth = len(stack) - 1
            if self._check_cancelled(context):
                observer.on_cancelled(depth)
                return self._build_solution(board, None, metrics, start_time, was_cancelled=True)

            node, candidates = stack[-1]
            move = next(candidates, None)
            if move is None:
                stack.pop()
                if path:
                    path.pop()
                    observer.on_backtrack(depth - 1)
                continue

            child = node.apply_move(move)
            metrics.states_explored += 1
            self._note_depth(context, metrics, depth + 1, initial_marbles)
            observer.on_move_applied(move, depth)

            if child.is_empty():
                moves = path + [move]
                observer.on_solution_found(moves)
                return self._build_solution(board, moves, metrics, start_time)

            if is_dead_end(child):
                metrics.pruned_branches += 1
                observer.on_dead_end(child, depth + 1)
                stack.pop()
                if path:
                    path.pop()
                    observer.on_backtrack(depth - 1)
                continue

            path.append(move)
            stack.append((child, iter(self.find_all_valid_moves(child))))

        observer.on_search_exhausted()
        return self._build_solution(board, None, metrics, start_time)
