"""
Solution Player Module for Sigmar's Garden Solver

Plays a solved move sequence on the game window by clicking marbles.
"""

import logging
import threading
import time
from typing import Optional, Protocol

from .solver import Solution
from .vision import BoardLayout

logger = logging.getLogger(__name__)


class Clicker(Protocol):
    """Anything that can click on window coordinates."""

    def click(self, x: int, y: int) -> None: ...


class SolutionPlayer:
    """
    Turns solver moves into clicks.

    Each move clicks its first marble then its second (a Gold solo move
    clicks its one marble), waiting click_delay after every click so the
    game can react.
    """

    def __init__(self, mouse: Clicker, layout: Optional[BoardLayout] = None,
                 click_delay: float = 0.05, new_game_wait: float = 5.2):
        """
        Args:
            mouse: Clicker in window coordinates
            layout: Board geometry (reference layout if None)
            click_delay: Seconds to wait after each click
            new_game_wait: Seconds the new game deal animation takes
        """
        self.mouse = mouse
        self.layout = layout or BoardLayout()
        self.click_delay = click_delay
        self.new_game_wait = new_game_wait

    def play(self, solution: Solution,
             stop_event: Optional[threading.Event] = None) -> int:
        """
        Click through every move of a solution.

        Args:
            solution: Solved move sequence
            stop_event: Checked before each move; playing stops when set

        Returns:
            Number of moves played
        """
        played = 0
        for index, move in enumerate(solution.moves):
            if stop_event is not None and stop_event.is_set():
                logger.info(f"Stopped after {played}/{solution.move_count} moves")
                break

            logger.debug(f"Move {index + 1}/{solution.move_count}: {move}")
            for x, y in move.cells:
                self.mouse.click(*self.layout.window_center(x, y))
                time.sleep(self.click_delay)
            played += 1

        return played

    def start_new_game(self) -> None:
        """Click the New Game button and wait for the deal to finish."""
        logger.info("Starting a new game")
        self.mouse.click(*self.layout.new_game_button)
        time.sleep(self.new_game_wait)
