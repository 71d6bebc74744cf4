"""
Tests for SolutionPlayer click sequences.

Usage:
    pytest tests/test_player.py
"""

import sys
import threading
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sigmar.player import SolutionPlayer
from sigmar.solver import BoardState, Move, Solution, SolutionContext, Tile, create_strategy
from sigmar.vision import BoardLayout

LAYOUT = BoardLayout()


class FakeMouse:
    def __init__(self):
        self.clicks = []

    def click(self, x, y):
        self.clicks.append((x, y))


def make_player(mouse):
    return SolutionPlayer(mouse, LAYOUT, click_delay=0.0, new_game_wait=0.0)


def test_plays_each_move_in_order():
    board = BoardState.from_placements({
        (2, 5): Tile.AIR, (7, 5): Tile.AIR, (5, 8): Tile.GOLD,
    })
    solution = create_strategy("backtracking").solve(SolutionContext(board=board))
    mouse = FakeMouse()

    played = make_player(mouse).play(solution)

    assert played == 2
    assert mouse.clicks == [
        LAYOUT.window_center(5, 8),
        LAYOUT.window_center(2, 5),
        LAYOUT.window_center(7, 5),
    ]


def test_stop_event_halts_playback():
    solution = Solution(moves=[Move((2, 5), (7, 5), 3), Move((3, 5), (6, 5), 3)], is_solved=True)
    stop = threading.Event()

    class StoppingMouse(FakeMouse):
        """Sets the stop event once the first move has been clicked."""

        def click(self, x, y):
            super().click(x, y)
            if len(self.clicks) == 2:
                stop.set()

    mouse = StoppingMouse()
    played = make_player(mouse).play(solution, stop)

    assert played == 1
    assert mouse.clicks == [LAYOUT.window_center(2, 5), LAYOUT.window_center(7, 5)]


def test_new_game_button():
    mouse = FakeMouse()
    make_player(mouse).start_new_game()
    assert mouse.clicks == [(870, 885)]
