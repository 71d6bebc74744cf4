"""
Solution Context Module - Shared context for strategy execution.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .board import BoardState
from .observer import SearchObserver


@dataclass
class SolutionContext:
    """
    Shared context passed to strategies containing board state,
    cancellation, progress reporting and the search observer.

    Attributes:
        board: Starting board to solve
        cancel_flag: Threading event for cancellation
        timeout_sec: Maximum computation time in seconds, None for no limit
        start_time: When computation started
        progress_callback: Optional callback for progress updates
        observer: Receives search events (no-op by default)
    """
    board: BoardState
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    timeout_sec: Optional[float] = None
    start_time: float = field(default_factory=time.time)
    progress_callback: Optional[Callable[[float, str], None]] = None
    observer: SearchObserver = field(default_factory=SearchObserver)

    def is_cancelled(self) -> bool:
        """
        Check if cancellation requested or timeout exceeded.

        Returns:
            True if strategy should stop execution
        """
        if self.cancel_flag.is_set():
            return True
        if self.timeout_sec is not None and time.time() - self.start_time > self.timeout_sec:
            return True
        return False

    def report_progress(self, percent: float, message: str = "") -> None:
        """
        Report progress to UI.

        Args:
            percent: Progress from 0.0 to 1.0
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(percent, message)
