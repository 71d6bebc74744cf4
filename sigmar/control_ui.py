"""
Control UI Module for Sigmar's Garden Solver

Provides a PyQt5-based control window for managing the solver.
Includes start/stop controls, options, status display, and worker thread
communication signals.
"""

from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QPushButton, QHBoxLayout,
    QComboBox, QCheckBox
)
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QFont

from sigmar.solver import get_strategy_info


RUNNING_BUTTON_STYLE = """
    QPushButton {
        background-color: #f44336;
        color: white;
        border: none;
        border-radius: 5px;
        padding: 10px;
    }
    QPushButton:hover {
        background-color: #da190b;
    }
    QPushButton:pressed {
        background-color: #c41408;
    }
"""

STOPPED_BUTTON_STYLE = """
    QPushButton {
        background-color: #4CAF50;
        color: white;
        border: none;
        border-radius: 5px;
        padding: 10px;
    }
    QPushButton:hover {
        background-color: #45a049;
    }
    QPushButton:pressed {
        background-color: #3d8b40;
    }
"""


class ControlWindow(QMainWindow):
    """
    Main control window for the Sigmar's Garden Solver application.

    Provides UI controls for starting/stopping the solver and displays
    status information about the game window, the board read and the
    solution.
    """

    # Signals for worker thread communication
    start_requested = pyqtSignal()
    stop_requested = pyqtSignal()
    shutdown_requested = pyqtSignal()
    strategy_changed = pyqtSignal(str)  # Emits strategy name when changed
    auto_new_game_changed = pyqtSignal(bool)
    debug_changed = pyqtSignal(bool)

    def __init__(self):
        super().__init__()
        self._is_running = False
        self._init_ui()

    def _init_ui(self):
        """Initialize the user interface components."""
        self.setWindowTitle("Sigmar's Garden Solver")
        self.setFixedSize(320, 380)
        self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout()
        layout.setSpacing(10)
        layout.setContentsMargins(20, 20, 20, 20)
        central_widget.setLayout(layout)

        # Status label
        self.status_label = QLabel("Status: Stopped")
        self.status_label.setAlignment(Qt.AlignCenter)
        status_font = QFont()
        status_font.setPointSize(10)
        status_font.setBold(True)
        self.status_label.setFont(status_font)
        layout.addWidget(self.status_label)

        layout.addSpacing(5)

        # Strategy selector
        strategy_layout = QHBoxLayout()
        strategy_label = QLabel("Strategy:")
        strategy_label.setFont(QFont("", 9))
        strategy_layout.addWidget(strategy_label)

        self.strategy_combo = QComboBox()
        for info in get_strategy_info():
            self.strategy_combo.addItem(info["description"], info["name"])
        self.strategy_combo.currentIndexChanged.connect(self._on_strategy_changed)
        strategy_layout.addWidget(self.strategy_combo, 1)  # stretch factor 1
        layout.addLayout(strategy_layout)

        # Options
        self.auto_new_game_check = QCheckBox("Start a new game after each board")
        self.auto_new_game_check.toggled.connect(self.auto_new_game_changed.emit)
        layout.addWidget(self.auto_new_game_check)

        self.debug_check = QCheckBox("Save debug image of each board read")
        self.debug_check.toggled.connect(self.debug_changed.emit)
        layout.addWidget(self.debug_check)

        layout.addSpacing(5)

        # Start/Stop button
        self.toggle_button = QPushButton("START SOLVER")
        self.toggle_button.setMinimumHeight(50)
        button_font = QFont()
        button_font.setPointSize(11)
        button_font.setBold(True)
        self.toggle_button.setFont(button_font)
        self.toggle_button.clicked.connect(self._on_toggle_clicked)
        layout.addWidget(self.toggle_button)

        layout.addSpacing(10)

        # Info labels
        self.window_label = QLabel("Window:   Not detected")
        self.board_label = QLabel("Board:    --")
        self.solution_label = QLabel("Solution: --")
        self.games_label = QLabel("Games:    0")

        info_font = QFont()
        info_font.setPointSize(9)

        for label in [self.window_label, self.board_label,
                      self.solution_label, self.games_label]:
            label.setFont(info_font)
            layout.addWidget(label)

        layout.addStretch()

        self._apply_styles()

    def _apply_styles(self):
        """Apply clean, minimal styling to the window."""
        style = """
            QMainWindow {
                background-color: #f5f5f5;
            }
            QPushButton {
                background-color: #4CAF50;
                color: white;
                border: none;
                border-radius: 5px;
                padding: 10px;
            }
            QPushButton:disabled {
                background-color: #cccccc;
                color: #666666;
            }
            QLabel, QCheckBox {
                color: #333333;
            }
        """
        self.setStyleSheet(style)

    def _on_toggle_clicked(self):
        """Handle Start/Stop button click."""
        if self._is_running:
            self.stop_requested.emit()
        else:
            self.start_requested.emit()

    def _on_strategy_changed(self, index: int):
        """Handle strategy dropdown selection change."""
        strategy_name = self.strategy_combo.itemData(index)
        if strategy_name:
            self.strategy_changed.emit(strategy_name)

    def set_strategy(self, strategy_name: str):
        """Select a strategy in the dropdown without emitting strategy_changed."""
        index = self.strategy_combo.findData(strategy_name)
        if index >= 0:
            self.strategy_combo.blockSignals(True)
            self.strategy_combo.setCurrentIndex(index)
            self.strategy_combo.blockSignals(False)

    def set_options(self, auto_new_game: bool, debug_enabled: bool):
        """Set the option checkboxes without emitting change signals."""
        for check, value in ((self.auto_new_game_check, auto_new_game),
                             (self.debug_check, debug_enabled)):
            check.blockSignals(True)
            check.setChecked(value)
            check.blockSignals(False)

    def set_status(self, status: str):
        """
        Update the status label.

        Args:
            status: Status text to display (e.g., "Stopped", "Solving", "Error: message")
        """
        self.status_label.setText(f"Status: {status}")

        if status.lower().startswith("error"):
            self.status_label.setStyleSheet("color: #d32f2f;")
        elif status.lower() in ("running", "playing"):
            self.status_label.setStyleSheet("color: #4CAF50;")
        else:
            self.status_label.setStyleSheet("color: #333333;")

    def set_window_info(self, info: str):
        self.window_label.setText(f"Window:   {info}")

    def set_board_info(self, info: str):
        self.board_label.setText(f"Board:    {info}")

    def set_solution_info(self, info: str):
        self.solution_label.setText(f"Solution: {info}")

    def set_games_info(self, count: int):
        self.games_label.setText(f"Games:    {count}")

    def set_running(self, is_running: bool):
        """
        Toggle the button state and update status.

        Args:
            is_running: True if solver is running, False if stopped
        """
        self._is_running = is_running

        # Strategy is read once per board; keep it fixed while running
        self.strategy_combo.setEnabled(not is_running)

        if is_running:
            self.toggle_button.setText("STOP SOLVER")
            self.toggle_button.setStyleSheet(RUNNING_BUTTON_STYLE)
            self.set_status("Running")
        else:
            self.toggle_button.setText("START SOLVER")
            self.toggle_button.setStyleSheet(STOPPED_BUTTON_STYLE)
            self.set_status("Stopped")

    def closeEvent(self, event):
        """
        Handle window close event.

        Emits shutdown_requested signal before closing to allow
        graceful cleanup of worker threads.

        Args:
            event: QCloseEvent object
        """
        self.shutdown_requested.emit()
        event.accept()
