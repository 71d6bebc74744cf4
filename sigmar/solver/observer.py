"""
Search Observer Module - Optional reporting hooks for solver strategies.

Strategies call these hooks on state transitions; observers never
influence the search.
"""

import logging
from typing import List

from .board import BoardState
from .move import Move

logger = logging.getLogger(__name__)


class SearchObserver:
    """
    Base observer. Every hook is a no-op; override the ones you need.
    """

    def on_search_started(self, board: BoardState) -> None:
        pass

    def on_move_applied(self, move: Move, depth: int) -> None:
        pass

    def on_dead_end(self, board: BoardState, depth: int) -> None:
        pass

    def on_backtrack(self, depth: int) -> None:
        pass

    def on_solution_found(self, moves: List[Move]) -> None:
        pass

    def on_search_exhausted(self) -> None:
        pass

    def on_cancelled(self, depth: int) -> None:
        pass


class LoggingObserver(SearchObserver):
    """
    Observer that forwards search events to the logging module.

    Per-node events go to DEBUG, outcomes to INFO.
    """

    def __init__(self, log: logging.Logger = logger):
        self._log = log

    def on_search_started(self, board: BoardState) -> None:
        self._log.info(f"Search started: {board.count_marbles()} marbles")
        self._log.debug(f"Board:\n{board.pretty()}")

    def on_move_applied(self, move: Move, depth: int) -> None:
        self._log.debug(f"{'  ' * depth}try {move}")

    def on_dead_end(self, board: BoardState, depth: int) -> None:
        self._log.debug(f"{'  ' * depth}dead end ({board.count_marbles()} marbles left)")

    def on_backtrack(self, depth: int) -> None:
        self._log.debug(f"{'  ' * depth}backtrack")

    def on_solution_found(self, moves: List[Move]) -> None:
        self._log.info(f"Solution found: {len(moves)} moves")

    def on_search_exhausted(self) -> None:
        self._log.warning("No solution exists for this board")

    def on_cancelled(self, depth: int) -> None:
        self._log.info(f"Search cancelled at depth {depth}")


class RecordingObserver(SearchObserver):
    """
    Observer that keeps (event, detail) tuples in memory.

    Used by tools and tests to inspect how a search went.
    """

    def __init__(self):
        self.events: List[tuple] = []

    def on_search_started(self, board: BoardState) -> None:
        self.events.append(("started", board.count_marbles()))

    def on_move_applied(self, move: Move, depth: int) -> None:
        self.events.append(("move", move, depth))

    def on_dead_end(self, board: BoardState, depth: int) -> None:
        self.events.append(("dead_end", depth))

    def on_backtrack(self, depth: int) -> None:
        self.events.append(("backtrack", depth))

    def on_solution_found(self, moves: List[Move]) -> None:
        self.events.append(("solved", len(moves)))

    def on_search_exhausted(self) -> None:
        self.events.append(("exhausted",))

    def on_cancelled(self, depth: int) -> None:
        self.events.append(("cancelled", depth))

    def names(self) -> List[str]:
        """Event names in order."""
        return [event[0] for event in self.events]
