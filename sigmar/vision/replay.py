"""
Capture Set Replay

A board read needs one capture per highlight button plus a plain one.
These helpers save such a set to a directory and play it back, so a read
can be repeated offline with HighlightBoardReader.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from PIL import Image

from sigmar.solver import Tile

from .layout import BoardLayout
from .result import ReadResult

logger = logging.getLogger(__name__)

PLAIN_CAPTURE = "plain"


def save_capture_set(result: ReadResult, directory: Union[str, Path]) -> Path:
    """
    Save every capture of a read as <name>.png.

    Args:
        result: Read whose captures to save
        directory: Target directory (created if missing)

    Returns:
        The directory
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    for name, image in result.captures.items():
        image.save(directory / f"{name}.png", "PNG")
    logger.info(f"Saved {len(result.captures)} captures to {directory}")
    return directory


class ReplayCapture:
    """
    Stands in for both the window capture and the mouse of a board read.

    Pressing a highlight button selects that kind's saved capture; releasing
    it switches back to the plain capture.

    Example:
        >>> replay = ReplayCapture("debug/board_001")
        >>> reader = HighlightBoardReader(replay, replay, validate=False)
        >>> board = reader.read().board
    """

    def __init__(self, directory: Union[str, Path],
                 layout: Optional[BoardLayout] = None):
        self.directory = Path(directory)
        layout = layout or BoardLayout()
        self._buttons: Dict[Tuple[int, int], Tile] = {
            pos: tile for tile, pos in layout.hint_buttons.items()
        }
        self._current = PLAIN_CAPTURE

    def press(self, x: int, y: int) -> None:
        tile = self._buttons.get((x, y))
        self._current = tile.name.lower() if tile else PLAIN_CAPTURE

    def release(self, x: int, y: int) -> None:
        self._current = PLAIN_CAPTURE

    def __call__(self, region: Tuple[int, int, int, int]) -> Optional[Image.Image]:
        path = self.directory / f"{self._current}.png"
        if not path.exists():
            logger.warning(f"Missing capture: {path}")
            return None
        with Image.open(path) as image:
            return image.convert("RGB")
