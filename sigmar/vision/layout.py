"""
Board Layout

Pixel geometry of the Sigmar's Garden board inside the game window.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from sigmar.solver import Tile

# Reference dimensions (calibration size for the pixel values below)
# The game runs as a borderless 1920x1080 window
REFERENCE_WIDTH = 1920
REFERENCE_HEIGHT = 1080

# Highlight buttons under the board, one per kind (Vitae and Mors have none)
HINT_BUTTONS_REF: Dict[Tile, Tuple[int, int]] = {
    Tile.SALT: (970, 884),
    Tile.AIR: (1023, 884),
    Tile.FIRE: (1065, 884),
    Tile.WATER: (1107, 884),
    Tile.EARTH: (1149, 884),
    Tile.QUICKSILVER: (1209, 884),
    Tile.LEAD: (1264, 884),
    Tile.TIN: (1304, 884),
    Tile.IRON: (1344, 884),
    Tile.COPPER: (1384, 884),
    Tile.SILVER: (1424, 884),
    Tile.GOLD: (1464, 884),
}


@dataclass(frozen=True)
class BoardLayout:
    """
    Where the board and its buttons sit in the game window's client area.

    Attributes:
        origin: (x, y) of the board image in the window
        size: (width, height) of the board image
        marble_size: Diameter of a marble in pixels
        offset_x: Horizontal distance between neighboring cells
        offset_y: Vertical distance between rows
        hint_buttons: Highlight button center per marble kind
        new_game_button: Center of the "New Game" button
    """
    origin: Tuple[int, int] = (861, 195)
    size: Tuple[int, int] = (712, 622)
    marble_size: int = 52
    offset_x: int = 66
    offset_y: int = 57
    hint_buttons: Dict[Tile, Tuple[int, int]] = field(
        default_factory=lambda: dict(HINT_BUTTONS_REF)
    )
    new_game_button: Tuple[int, int] = (870, 885)

    @classmethod
    def for_window(cls, width: int, height: int) -> 'BoardLayout':
        """
        Scale the reference layout to a window of another size.

        Args:
            width: Client area width
            height: Client area height

        Returns:
            BoardLayout for that window (the reference one at 1920x1080)
        """
        sx = width / REFERENCE_WIDTH
        sy = height / REFERENCE_HEIGHT
        ref = cls()

        def point(p: Tuple[int, int]) -> Tuple[int, int]:
            return (round(p[0] * sx), round(p[1] * sy))

        return cls(
            origin=point(ref.origin),
            size=point(ref.size),
            marble_size=round(ref.marble_size * min(sx, sy)),
            offset_x=round(ref.offset_x * sx),
            offset_y=round(ref.offset_y * sy),
            hint_buttons={tile: point(p) for tile, p in ref.hint_buttons.items()},
            new_game_button=point(ref.new_game_button),
        )

    @property
    def rect(self) -> Tuple[int, int, int, int]:
        """Board area as (x, y, width, height) in window coordinates."""
        return (self.origin[0], self.origin[1], self.size[0], self.size[1])

    def image_position(self, x: int, y: int) -> Tuple[int, int]:
        """
        Top-left corner of cell (x, y) in the board image.

        Even rows are shifted half a cell to the left.
        """
        shift = (y % 2 - 1) * self.offset_x // 2
        return (self.offset_x * x + shift, self.offset_y * y)

    def marble_rect(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Marble area of cell (x, y) as (x, y, width, height) in the board image."""
        ix, iy = self.image_position(x, y)
        return (ix, iy, self.marble_size, self.marble_size)

    def window_center(self, x: int, y: int) -> Tuple[int, int]:
        """Center of cell (x, y) in window coordinates, for clicking."""
        ix, iy = self.image_position(x, y)
        half = self.marble_size // 2
        return (ix + self.origin[0] + half, iy + self.origin[1] + half)
