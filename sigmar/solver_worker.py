"""
Solver Worker Module for Sigmar's Garden Solver

Provides a background QThread worker that runs the read/solve/play loop.
Communicates with the UI via Qt signals for thread-safe status updates.
"""

import logging
import threading
from datetime import datetime
from typing import Any, Dict, Optional

from PyQt5.QtCore import QThread, pyqtSignal

from sigmar.window_capture import DEFAULT_PROCESS_NAME, WindowCapture
from sigmar.mouse_input import MouseInput
from sigmar.player import SolutionPlayer
from sigmar.settings import DEFAULT_SETTINGS
from sigmar.solver import (
    LoggingObserver,
    Solution,
    SolutionContext,
    create_strategy,
)
from sigmar.vision import (
    BoardLayout,
    HighlightBoardReader,
    InvalidBoardError,
    ReadResult,
    DEBUG_DIR,
    save_capture_set,
    save_debug_image,
)


# Configure module logger
logger = logging.getLogger(__name__)


class SolverWorker(QThread):
    """
    Background worker thread for the solver pipeline.

    Runs a loop that:
    1. Waits for the game window
    2. Reads the board through the highlight buttons
    3. Solves the board
    4. Clicks through the solution
    5. Starts a new game (when auto new game is on, otherwise stops)

    Signals:
        status_changed(str): Emitted when worker status changes
        window_changed(str): Emitted when window detection status changes
        board_changed(str): Emitted when a board has been read
        solution_changed(str): Emitted when a solve finishes
        games_changed(int): Emitted with the number of games cleared
        error_occurred(str): Emitted when an error occurs

    Example:
        worker = SolverWorker(settings=settings)
        worker.status_changed.connect(ui.set_status)
        worker.start()
        # ...
        worker.request_stop()
        worker.wait()
    """

    # Signals for UI updates (thread-safe)
    status_changed = pyqtSignal(str)
    window_changed = pyqtSignal(str)
    board_changed = pyqtSignal(str)
    solution_changed = pyqtSignal(str)
    games_changed = pyqtSignal(int)
    error_occurred = pyqtSignal(str)

    # Wait between window searches
    POLL_INTERVAL_MS = 500

    def __init__(self, process_name: str = DEFAULT_PROCESS_NAME,
                 settings: Optional[Dict[str, Any]] = None):
        """
        Initialize the solver worker.

        Args:
            process_name: Name of the game process to drive
            settings: Settings dictionary (defaults if None)
        """
        super().__init__()
        self.process_name = process_name
        self.settings = dict(DEFAULT_SETTINGS)
        if settings:
            self.settings.update(settings)

        self._running = False
        self._stop_event = threading.Event()
        self._capture: Optional[WindowCapture] = None
        self._games_completed = 0

        self._last_read: Optional[ReadResult] = None
        self._last_layout = BoardLayout()

    def run(self):
        """
        Main worker loop. Called when thread starts.

        Errors in a cycle are reported and the loop carries on.
        """
        self._running = True
        self._stop_event.clear()
        self._capture = WindowCapture(self.process_name)

        logger.info("Solver worker started")
        self.status_changed.emit("Running")

        while self._running:
            try:
                self._process_cycle()
            except Exception as e:
                logger.exception("Error in worker cycle")
                self.error_occurred.emit(str(e))
                self.msleep(self.POLL_INTERVAL_MS)

        self._capture.release()
        self._capture = None
        logger.info("Solver worker stopped")
        self.status_changed.emit("Stopped")

    def _process_cycle(self):
        """
        Single game: read, solve, play, then optionally start the next one.
        """
        if not self._capture.is_active():
            self._capture.release()
            if not self._capture.find_window():
                self.window_changed.emit("Not detected")
                self.msleep(self.POLL_INTERVAL_MS)
                return
            logger.info(f"Found window: {self._capture.window_info.title}")
        self.window_changed.emit(self._capture.get_status_string())

        size = self._capture.get_client_size()
        if size is None:
            self._capture.release()
            self.window_changed.emit("Window lost - searching...")
            return
        layout = BoardLayout.for_window(*size)
        self._last_layout = layout
        mouse = MouseInput(self._capture.hwnd)
        mouse.focus()

        player = SolutionPlayer(
            mouse,
            layout,
            click_delay=self.settings["click_delay_ms"] / 1000,
            new_game_wait=self.settings["new_game_wait_ms"] / 1000,
        )
        reader = HighlightBoardReader(
            self._capture.grab_region,
            mouse,
            layout,
            highlight_delay=self.settings["highlight_delay_ms"] / 1000,
        )

        # Read
        self.status_changed.emit("Reading board")
        try:
            result = reader.read()
        except InvalidBoardError as e:
            self._last_read = e.result
            self.board_changed.emit("Invalid board")
            self.error_occurred.emit(str(e))
            if self.settings["debug_enabled"]:
                self.save_debug_image()
                timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
                save_capture_set(e.result, DEBUG_DIR / f"captures_{timestamp}")
            self._finish_game(player)
            return
        self._last_read = result
        self.board_changed.emit(f"{result.marble_count} marbles ({result.processing_time_ms:.0f}ms)")
        if self.settings["debug_enabled"]:
            self.save_debug_image()

        if not self._running:
            return

        # Solve
        self.status_changed.emit("Solving")
        solution = self._solve(result)
        metrics = solution.metrics
        if solution.was_cancelled:
            self.solution_changed.emit("Cancelled")
        elif solution.is_solved:
            self.solution_changed.emit(
                f"{solution.move_count} moves, {metrics.states_explored} states "
                f"({metrics.computation_time_ms:.0f}ms)"
            )
        else:
            logger.warning("No solution was found for this board, moving on to the next game")
            self.solution_changed.emit("No solution")

        # Play
        if solution.is_solved and self._running:
            self.status_changed.emit("Playing")
            played = player.play(solution, self._stop_event)
            if played == solution.move_count:
                self._games_completed += 1
                self.games_changed.emit(self._games_completed)
                logger.info(f"Game cleared ({self._games_completed} so far)")

        self._finish_game(player)

    def _finish_game(self, player: SolutionPlayer):
        """Deal the next board, or stop when auto new game is off."""
        if not self._running:
            return

        if self.settings["auto_new_game"]:
            self.status_changed.emit("New game")
            player.start_new_game()
        else:
            self._running = False

    def _solve(self, result: ReadResult) -> Solution:
        """Run the configured strategy on a board read."""
        strategy = create_strategy(self.settings["strategy_name"])
        context = SolutionContext(
            board=result.board,
            cancel_flag=self._stop_event,
            timeout_sec=self.settings["search_timeout_sec"],
            observer=LoggingObserver(),
        )
        logger.info(f"Attempting to solve the board with {strategy.name}...")
        return strategy.solve(context)

    def set_strategy(self, strategy_name: str):
        """
        Change the solving strategy used for the next board.

        Args:
            strategy_name: Name of strategy to use (e.g., "backtracking")
        """
        logger.info(f"Strategy change requested: {strategy_name}")
        self.settings["strategy_name"] = strategy_name

    def set_auto_new_game(self, enabled: bool):
        self.settings["auto_new_game"] = enabled

    def set_debug_enabled(self, enabled: bool):
        self.settings["debug_enabled"] = enabled

    def request_stop(self):
        """
        Request the worker to stop gracefully.

        A running search is cancelled and playback stops before the next move.
        Use wait() after calling this to block until stopped.
        """
        logger.info("Stop requested")
        self._running = False
        self._stop_event.set()

    def is_running(self) -> bool:
        """
        Check if the worker is currently running.

        Returns:
            True if worker loop is active, False otherwise
        """
        return self._running

    def save_debug_image(self) -> Optional[str]:
        """
        Save the last plain board capture with read annotations.

        Returns:
            Path to saved file, or None if nothing has been read yet
        """
        if self._last_read is None or "plain" not in self._last_read.captures:
            logger.warning("No board capture available for debug image")
            return None

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
        filepath = DEBUG_DIR / f"debug_{timestamp}.png"

        save_debug_image(
            self._last_read.captures["plain"],
            self._last_layout,
            self._last_read,
            str(filepath)
        )

        logger.info(f"Debug image saved: {filepath}")
        return str(filepath)
