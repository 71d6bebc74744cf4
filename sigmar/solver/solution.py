"""
Solution Module - Result of strategy computation.
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from .board import BoardState
from .move import Move
from .tiles import Tile


@dataclass
class SolutionMetrics:
    """
    Performance metrics for solution computation.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Number of board states derived
        pruned_branches: Number of children rejected as dead ends
        max_depth: Deepest move sequence examined
        strategy_name: Name of strategy that computed this solution
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    pruned_branches: int = 0
    max_depth: int = 0
    strategy_name: str = ""


@dataclass
class Solution:
    """
    Result of a strategy computation.

    An unsolvable board is a normal outcome: ``is_solved`` is False and
    ``moves`` is empty.

    Attributes:
        moves: Ordered sequence of moves that clears the board
        is_solved: True if the moves empty the board
        was_cancelled: True if stopped before completion
        metrics: Performance statistics
        board_states: Board state after each move (first is initial)
    """
    moves: List[Move] = field(default_factory=list)
    is_solved: bool = False
    was_cancelled: bool = False
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)
    board_states: List[BoardState] = field(default_factory=list)

    @property
    def move_count(self) -> int:
        """Number of moves in solution."""
        return len(self.moves)

    def get_board_after_move(self, index: int) -> BoardState:
        """
        Get board state after executing move at index.

        Raises:
            IndexError: If index out of range
        """
        return self.board_states[index + 1]


def replay(board: BoardState, moves: Sequence[Move]) -> List[BoardState]:
    """
    Apply moves one by one.

    Returns:
        Board states, starting with the given board
    """
    states = [board]
    for move in moves:
        board = board.apply_move(move)
        states.append(board)
    return states


def is_valid_solution(board: BoardState, moves: Sequence[Move]) -> bool:
    """
    Check that a move sequence clears the board legally.

    Every targeted cell must hold a marble when its move is applied,
    and the board must be empty at the end.
    """
    for move in moves:
        if any(board.get_cell(x, y) is Tile.EMPTY for x, y in move.cells):
            return False
        board = board.apply_move(move)
    return board.is_empty()
