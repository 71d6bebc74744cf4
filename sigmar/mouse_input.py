"""
Mouse Input Module for Sigmar's Garden Solver

Sends mouse presses to the game window through the Windows API.
Coordinates are given in the window's client area and converted to
screen coordinates before the cursor is moved.
"""

import ctypes
import logging
import time
from ctypes import wintypes
from typing import Tuple

logger = logging.getLogger(__name__)

# mouse_event flags
MOUSEEVENTF_LEFTDOWN = 0x0002
MOUSEEVENTF_LEFTUP = 0x0004

# Pause between moving the cursor and pressing, so the game sees the hover
CURSOR_SETTLE_SEC = 0.01


class MouseInput:
    """
    Left mouse button input on one window.

    Example:
        >>> mouse = MouseInput(capture.hwnd)
        >>> mouse.click(870, 885)
    """

    def __init__(self, hwnd: int):
        """
        Args:
            hwnd: Handle of the target window
        """
        self.hwnd = hwnd

    def to_screen(self, x: int, y: int) -> Tuple[int, int]:
        """Convert client coordinates to screen coordinates."""
        point = wintypes.POINT(x, y)
        ctypes.windll.user32.ClientToScreen(self.hwnd, ctypes.byref(point))
        return (point.x, point.y)

    def focus(self) -> None:
        """Bring the window to the foreground."""
        ctypes.windll.user32.SetForegroundWindow(self.hwnd)

    def move(self, x: int, y: int) -> None:
        sx, sy = self.to_screen(x, y)
        ctypes.windll.user32.SetCursorPos(sx, sy)
        time.sleep(CURSOR_SETTLE_SEC)

    def press(self, x: int, y: int) -> None:
        """Move to (x, y) and hold the left button down."""
        self.move(x, y)
        ctypes.windll.user32.mouse_event(MOUSEEVENTF_LEFTDOWN, 0, 0, 0, 0)

    def release(self, x: int, y: int) -> None:
        """Move to (x, y) and let go of the left button."""
        self.move(x, y)
        ctypes.windll.user32.mouse_event(MOUSEEVENTF_LEFTUP, 0, 0, 0, 0)

    def click(self, x: int, y: int) -> None:
        """Left click at (x, y)."""
        logger.debug(f"Click at ({x}, {y})")
        self.press(x, y)
        self.release(x, y)
