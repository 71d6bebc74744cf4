"""
Vision Module for Sigmar's Garden Solver

Board acquisition: turns the game window into a BoardState.

Usage:
    from sigmar.vision import HighlightBoardReader, BoardLayout

    reader = HighlightBoardReader(capture=window.grab_region, mouse=mouse)
    result = reader.read()          # raises InvalidBoardError on bad counts
    board = result.board

Reading a saved board instead:
    reader = FileBoardReader("boards/game1.txt")

Replaying a saved capture set:
    replay = ReplayCapture("debug/captures_20240101_120000")
    reader = HighlightBoardReader(replay, replay, validate=False)
"""

# Public API - Result types and errors
from .result import ReadResult
from .base import BoardReader, CaptureError, InvalidBoardError

# Public API - Geometry
from .layout import BoardLayout

# Public API - Readers
from .highlight_reader import (
    HighlightBoardReader,
    lightness_map,
    scan_highlighted,
    scan_mors,
    scan_vitae,
)
from .file_reader import FileBoardReader
from .replay import ReplayCapture, save_capture_set

# Debug utilities
from .debug import DEBUG_DIR, save_debug_image

__all__ = [
    # Result types
    "ReadResult",
    "BoardReader",
    "CaptureError",
    "InvalidBoardError",
    # Geometry
    "BoardLayout",
    # Readers
    "HighlightBoardReader",
    "FileBoardReader",
    "ReplayCapture",
    # Functions
    "lightness_map",
    "scan_highlighted",
    "scan_mors",
    "scan_vitae",
    "save_debug_image",
    "save_capture_set",
    # Debug
    "DEBUG_DIR",
]
