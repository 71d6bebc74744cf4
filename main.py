"""
Sigmar's Garden Solver - Entry Point

Launches the Control UI window and manages the solver worker thread.
The game must be running with Sigmar's Garden open on a fresh board.

Example:
    python main.py
    python main.py --process Lightning.exe --debug
"""

import sys
import logging
import argparse
from typing import Optional

from PyQt5.QtWidgets import QApplication

from sigmar.control_ui import ControlWindow
from sigmar.solver_worker import SolverWorker
from sigmar.settings import load_settings, save_settings
from sigmar.window_capture import DEFAULT_PROCESS_NAME


# Configure logging - output to both console and file
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
    handlers=[
        logging.StreamHandler(),  # Console output
        logging.FileHandler("solver.log", mode='w', encoding='utf-8')  # File output
    ]
)
logger = logging.getLogger(__name__)


class Application:
    """
    Main application controller.

    Manages the lifecycle of the UI and worker thread,
    connecting signals between them.
    """

    def __init__(self, process_name: str = DEFAULT_PROCESS_NAME, debug_mode: bool = False):
        """
        Initialize the application.

        Args:
            process_name: Name of the game process to drive
            debug_mode: Enable debug mode via CLI (overrides saved setting)
        """
        self.process_name = process_name
        self.cli_debug_override = debug_mode
        self.window: Optional[ControlWindow] = None
        self.worker: Optional[SolverWorker] = None

        # Load persistent settings
        self.settings = load_settings()

        if self.cli_debug_override:
            self.debug_mode = True
        else:
            self.debug_mode = self.settings.get("debug_enabled", False)

    def setup(self):
        """Set up the UI and connect signals."""
        self.window = ControlWindow()

        self.window.start_requested.connect(self._on_start)
        self.window.stop_requested.connect(self._on_stop)
        self.window.shutdown_requested.connect(self._on_shutdown)
        self.window.strategy_changed.connect(self._on_strategy_changed)
        self.window.auto_new_game_changed.connect(self._on_auto_new_game_toggled)
        self.window.debug_changed.connect(self._on_debug_toggled)

        # Initialize UI state from settings
        self.window.set_strategy(self.settings["strategy_name"])
        self.window.set_options(self.settings["auto_new_game"], self.debug_mode)

        if self.debug_mode:
            logger.info("Debug mode enabled - board reads will be saved as images")

        logger.info(f"Application initialized, game process: {self.process_name}")

    def _on_start(self):
        """Handle start button click."""
        if self.worker and self.worker.isRunning():
            logger.warning("Worker already running")
            return

        logger.info("Starting solver worker")

        worker_settings = dict(self.settings)
        worker_settings["debug_enabled"] = self.debug_mode
        strategy = self.window.strategy_combo.currentData()
        if strategy:
            worker_settings["strategy_name"] = strategy

        self.worker = SolverWorker(self.process_name, worker_settings)

        # Connect worker signals to UI
        self.worker.status_changed.connect(self.window.set_status)
        self.worker.window_changed.connect(self.window.set_window_info)
        self.worker.board_changed.connect(self.window.set_board_info)
        self.worker.solution_changed.connect(self.window.set_solution_info)
        self.worker.games_changed.connect(self.window.set_games_info)
        self.worker.error_occurred.connect(self._on_error)
        self.worker.finished.connect(self._on_worker_finished)

        self.worker.start()

        self.window.set_running(True)

    def _on_stop(self):
        """Handle stop button click."""
        if not self.worker or not self.worker.isRunning():
            logger.warning("Worker not running")
            return

        logger.info("Stopping solver worker")

        # A new game deal may be in progress; give it time to finish
        timeout_ms = int(self.settings["new_game_wait_ms"]) + 2000
        self.worker.request_stop()
        self.worker.wait(timeout_ms)

        if self.worker.isRunning():
            logger.warning("Worker did not stop gracefully, terminating")
            self.worker.terminate()
            self.worker.wait()

        self._on_worker_finished()

    def _on_worker_finished(self):
        """Reset the UI once the worker thread has ended."""
        if self.worker is None:
            return
        self.worker = None

        self.window.set_running(False)
        self.window.set_window_info("Not detected")

    def _on_shutdown(self):
        """Handle window close."""
        logger.info("Shutdown requested")
        self._on_stop()

    def _on_error(self, error_msg: str):
        """Handle worker error."""
        logger.error(f"Worker error: {error_msg}")
        self.window.set_status(f"Error: {error_msg}")

    def _on_strategy_changed(self, strategy_name: str):
        """Handle strategy selection change from UI."""
        logger.info(f"Strategy changed to: {strategy_name}")
        self.settings["strategy_name"] = strategy_name
        save_settings(self.settings)

    def _on_auto_new_game_toggled(self, enabled: bool):
        logger.info(f"Auto new game toggled: {enabled}")
        if self.worker:
            self.worker.set_auto_new_game(enabled)
        self.settings["auto_new_game"] = enabled
        save_settings(self.settings)

    def _on_debug_toggled(self, enabled: bool):
        """Handle debug checkbox toggle from UI."""
        logger.info(f"Debug mode toggled: {enabled}")
        self.debug_mode = enabled
        if self.worker:
            self.worker.set_debug_enabled(enabled)

        # Save to persistent settings (only if not CLI override)
        if not self.cli_debug_override:
            self.settings["debug_enabled"] = enabled
            save_settings(self.settings)

    def run(self) -> int:
        """
        Run the application.

        Returns:
            Exit code
        """
        self.window.show()
        return 0


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Sigmar's Garden Solver - Reads, solves and plays Opus Magnum's solitaire"
    )
    parser.add_argument(
        "--process", "-p",
        default=DEFAULT_PROCESS_NAME,
        help=f"Game process name (default: {DEFAULT_PROCESS_NAME})"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug mode (save an annotated image of every board read)"
    )
    return parser.parse_args()


def main():
    """Initialize and run the Sigmar's Garden Solver application."""
    args = parse_args()

    app = QApplication(sys.argv)

    application = Application(process_name=args.process, debug_mode=args.debug)
    application.setup()
    application.run()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
