"""
Highlight Board Reader

Reads the board by holding down each marble kind's highlight button and
sampling a few pixels per cell. Highlighted marbles get a bright rim, so a
bright sample on the rim means the cell holds that kind. Vitae and Mors
have no highlight button and are recognized from their artwork instead.
"""

import logging
import time
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Tuple

import cv2
import numpy as np
from PIL import Image

from sigmar.solver import BoardState, Tile
from sigmar.solver.topology import Coord, playable_coords

from .base import BoardReader, CaptureError, InvalidBoardError
from .layout import BoardLayout
from .result import ReadResult

logger = logging.getLogger(__name__)

# Marble size the sample offsets below were measured at
REFERENCE_MARBLE_SIZE = 52

# Rim lightness above which a marble counts as highlighted
HIGHLIGHT_THRESHOLD = 0.85

# Sample points as (dx, dy) inside the marble rectangle, at reference size
HIGHLIGHT_BOTTOM = (26, 50)
HIGHLIGHT_TOP = (18, 0)
MORS_MARBLE = (18, 8)      # Darker than the background above it on a Mors
MORS_BACKGROUND = (18, 0)
VITAE_ARROW = (26, 26)     # Brighter than the marble body below it on a Vitae
VITAE_BODY = (26, 41)

# Kinds read through their highlight button, in button order
HIGHLIGHT_ORDER: Tuple[Tile, ...] = (
    Tile.SALT, Tile.AIR, Tile.FIRE, Tile.WATER, Tile.EARTH, Tile.QUICKSILVER,
    Tile.LEAD, Tile.TIN, Tile.IRON, Tile.COPPER, Tile.SILVER, Tile.GOLD,
)

CaptureFn = Callable[[Tuple[int, int, int, int]], Optional[Image.Image]]


class ButtonPresser(Protocol):
    """Anything that can hold a mouse button down on window coordinates."""

    def press(self, x: int, y: int) -> None: ...

    def release(self, x: int, y: int) -> None: ...


def lightness_map(image: Image.Image) -> np.ndarray:
    """
    HSL lightness of every pixel.

    Args:
        image: Board capture

    Returns:
        float32 array [row, col] with values in 0.0-1.0
    """
    rgb = np.asarray(image.convert("RGB"))
    hls = cv2.cvtColor(rgb, cv2.COLOR_RGB2HLS)
    return hls[:, :, 1].astype(np.float32) / 255.0


def _sample(lightness: np.ndarray, layout: BoardLayout, coord: Coord,
            offset: Tuple[int, int]) -> float:
    """Lightness at a marble-relative offset, clamped to the image."""
    ix, iy = layout.image_position(*coord)
    scale = layout.marble_size / REFERENCE_MARBLE_SIZE
    px = ix + round(offset[0] * scale)
    py = iy + round(offset[1] * scale)
    height, width = lightness.shape
    px = min(max(px, 0), width - 1)
    py = min(max(py, 0), height - 1)
    return float(lightness[py, px])


def scan_highlighted(lightness: np.ndarray, layout: BoardLayout) -> List[Coord]:
    """
    Find cells whose marble is highlighted.

    Args:
        lightness: Output of lightness_map for a capture taken while a
            highlight button is held
        layout: Board geometry

    Returns:
        Highlighted cells in scan order
    """
    found = []
    for coord in playable_coords():
        bottom = _sample(lightness, layout, coord, HIGHLIGHT_BOTTOM)
        top = _sample(lightness, layout, coord, HIGHLIGHT_TOP)
        if bottom > HIGHLIGHT_THRESHOLD or top > HIGHLIGHT_THRESHOLD:
            found.append(coord)
    return found


def scan_mors(lightness: np.ndarray, candidates: Iterable[Coord],
              layout: BoardLayout) -> List[Coord]:
    """Cells among candidates that show a Mors marble."""
    return [
        coord for coord in candidates
        if _sample(lightness, layout, coord, MORS_MARBLE)
        < _sample(lightness, layout, coord, MORS_BACKGROUND)
    ]


def scan_vitae(lightness: np.ndarray, candidates: Iterable[Coord],
               layout: BoardLayout) -> List[Coord]:
    """Cells among candidates that show a Vitae marble."""
    return [
        coord for coord in candidates
        if _sample(lightness, layout, coord, VITAE_ARROW)
        > _sample(lightness, layout, coord, VITAE_BODY)
    ]


class HighlightBoardReader(BoardReader):
    """
    Board reader driving the game's highlight buttons.

    Collaborators are injected so the reader can run against a live
    window or against recorded captures:

    - capture: returns the board area of the window as an image
    - mouse: presses and releases the highlight buttons
    """

    def __init__(self, capture: CaptureFn, mouse: ButtonPresser,
                 layout: Optional[BoardLayout] = None,
                 highlight_delay: float = 0.1,
                 validate: bool = True):
        """
        Initialize the reader.

        Args:
            capture: Callable taking an (x, y, width, height) window rect
            mouse: Button presser in window coordinates
            layout: Board geometry (reference layout if None)
            highlight_delay: Seconds to let the game draw highlights
            validate: Raise InvalidBoardError on wrong marble counts
        """
        self._capture = capture
        self._mouse = mouse
        self.layout = layout or BoardLayout()
        self.highlight_delay = highlight_delay
        self.validate = validate

    @property
    def name(self) -> str:
        return "highlight"

    def read(self) -> ReadResult:
        """
        Read every marble on the board.

        Returns:
            ReadResult with the board and count validation errors
        """
        start_time = time.perf_counter()
        logger.info("Reading the board...")

        placements: Dict[Coord, Tile] = {}
        captures: Dict[str, Image.Image] = {}

        for tile in HIGHLIGHT_ORDER:
            image = self._capture_highlighted(tile)
            captures[tile.name.lower()] = image
            for coord in scan_highlighted(lightness_map(image), self.layout):
                logger.debug(f"Read {tile.name.lower()} at {coord}")
                placements[coord] = tile

        # Mors and Vitae: one plain capture, checked on the cells still empty
        image = self._grab()
        captures["plain"] = image
        lightness = lightness_map(image)

        empty = [c for c in playable_coords() if c not in placements]
        for coord in scan_mors(lightness, empty, self.layout):
            logger.debug(f"Read mors at {coord}")
            placements[coord] = Tile.MORS

        empty = [c for c in empty if c not in placements]
        for coord in scan_vitae(lightness, empty, self.layout):
            logger.debug(f"Read vitae at {coord}")
            placements[coord] = Tile.VITAE

        board = BoardState.from_placements(placements)
        result = ReadResult(
            board=board,
            errors=board.starting_count_errors(),
            captures=captures,
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )

        if result.is_valid:
            logger.info(f"Successfully read the board ({result.marble_count} marbles)")
        else:
            logger.warning(f"Board read with wrong counts: {', '.join(result.errors)}")
            if self.validate:
                raise InvalidBoardError(result.errors, result)

        return result

    def _capture_highlighted(self, tile: Tile) -> Image.Image:
        """Hold the highlight button of a kind and capture the board."""
        bx, by = self.layout.hint_buttons[tile]
        self._mouse.press(bx, by)
        try:
            time.sleep(self.highlight_delay)
            return self._grab()
        finally:
            self._mouse.release(bx, by)

    def _grab(self) -> Image.Image:
        image = self._capture(self.layout.rect)
        if image is None:
            raise CaptureError("Failed to capture the board area")
        return image
